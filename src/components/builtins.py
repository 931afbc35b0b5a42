"""
Builtin Anvil Components
Definitions for every builtin component type the renderer backend supports.
"""

from typing import Any, Callable, Mapping

from core.values import (
    format_number,
    is_bool,
    is_list,
    is_number,
    is_present,
    is_string,
)
from .definition import ComponentDefinition, Validator
from .registry import RegistryBuilder

Check = Callable[[Mapping[str, Any]], str | None]


# =============================================================================
# Validation helpers
# =============================================================================

def _expect(key: str, predicate: Callable[[Any], bool], message: str) -> Check:
    """Error when the property is set and fails the predicate."""

    def check(props: Mapping[str, Any]) -> str | None:
        if is_present(props, key) and not predicate(props[key]):
            return message
        return None

    return check


def _one_of(key: str, choices: tuple[str, ...]) -> Check:
    return _expect(key, lambda v: v in choices, f"{key} must be one of: {', '.join(choices)}")


def _validator(*checks: Check) -> Validator:
    def validate(props: Mapping[str, Any]) -> list[str]:
        return [message for message in (check(props) for check in checks) if message]

    return validate


def _is_string(key: str) -> Check:
    return _expect(key, is_string, f"{key} property must be a string")


def _is_bool(key: str) -> Check:
    return _expect(key, is_bool, f"{key} property must be a boolean")


def _is_list(key: str, message: str | None = None) -> Check:
    return _expect(key, is_list, message or f"{key} property must be an array")


def _positive_number(value: Any) -> bool:
    return is_number(value) and value > 0


# =============================================================================
# Value transforms
# =============================================================================

def _password_type(hide_text: Any) -> str:
    return "password" if hide_text else "text"


def _css_size(value: Any) -> Any:
    if is_number(value):
        return f"{format_number(value)}px"
    return value


BUTTON_ROLES = (
    "primary-color", "secondary-color", "raised", "filled", "outlined",
    "filled-button", "outlined-button",
)
LINK_TARGETS = ("_blank", "_self", "_parent", "_top")
NOTIFICATION_POSITIONS = (
    "top-left", "top-center", "top-right", "bottom-left", "bottom-center", "bottom-right",
)


def register_builtin_components(builder: RegistryBuilder) -> RegistryBuilder:
    """Register all builtin Anvil components."""

    # =========================================================================
    # CONTAINERS
    # =========================================================================

    builder.register("HtmlPanel", ComponentDefinition(
        backend_ref="HtmlPanel",
        default_properties={"class_name": "", "style": {}},
        property_mapping={"html": "html"},
        layout_supported=True,
        validate=_validator(_is_string("html")),
    ))

    builder.register("GridPanel", ComponentDefinition(
        backend_ref="GridPanel",
        default_properties={"columns": 1, "gap": "8px"},
        property_mapping={"spacing": "gap", "columns": "columns"},
        layout_supported=True,
        validate=_validator(_expect(
            "columns",
            lambda v: is_number(v) or is_string(v),
            "columns property must be a number or string",
        )),
    ))

    builder.register("ColumnPanel", ComponentDefinition(
        backend_ref="ColumnPanel",
        default_properties={"spacing": "8px", "align": "stretch"},
        property_mapping={"spacing": "spacing", "align": "align"},
        layout_supported=True,
    ))

    builder.register("FlowPanel", ComponentDefinition(
        backend_ref="FlowPanel",
        default_properties={"direction": "row", "wrap": True, "spacing": "8px"},
        property_mapping={"spacing": "spacing", "align": "align", "justify": "justify"},
        layout_supported=True,
    ))

    builder.register("LinearPanel", ComponentDefinition(
        backend_ref="LinearPanel",
        default_properties={"orientation": "vertical", "spacing": "medium", "align": "stretch"},
        property_mapping={
            "orientation": "orientation",
            "spacing": "spacing",
            "align": "align",
            "justify": "justify",
        },
        layout_supported=True,
    ))

    builder.register("XYPanel", ComponentDefinition(
        backend_ref="XYPanel",
        default_properties={"width": "100%", "height": "400px"},
        property_mapping={"width": "width", "height": "height"},
        property_transforms={"width": _css_size, "height": _css_size},
        layout_supported=True,
    ))

    builder.register("FormTemplate", ComponentDefinition(
        backend_ref="HtmlPanel",
        default_properties={
            "class_name": "anvil-form-template",
            "style": {"width": "100%", "min_height": "100vh", "padding": "16px"},
        },
        layout_supported=True,
    ))

    builder.register("HtmlTemplate", ComponentDefinition(
        backend_ref="HtmlPanel",
        default_properties={"class_name": "anvil-html-template", "style": {}},
        property_mapping={"html": "html", "properties": "properties"},
        layout_supported=True,
    ))

    # =========================================================================
    # FORM INPUTS
    # =========================================================================

    builder.register("Label", ComponentDefinition(
        backend_ref="Label",
        default_properties={"align": "left"},
        property_mapping={
            "text": "text",
            "font_size": "font_size",
            "font_weight": "font_weight",
            "foreground": "color",
            "align": "align",
        },
        property_transforms={"font_size": _css_size},
        layout_supported=True,
        validate=_validator(_is_string("text")),
    ))

    builder.register("TextBox", ComponentDefinition(
        backend_ref="TextBox",
        default_properties={"text": "", "enabled": True, "multiline": False},
        property_mapping={
            "text": "text",
            "placeholder": "placeholder",
            "enabled": "enabled",
            "multiline": "multiline",
            "type": "type",
            "hide_text": "type",
            "validate_regex": "pattern",
            "max_length": "max_length",
        },
        property_transforms={"hide_text": _password_type},
        layout_supported=True,
        validate=_validator(
            _is_string("text"),
            _is_bool("enabled"),
            _expect("max_length", _positive_number, "max_length must be a positive number"),
        ),
    ))

    builder.register("TextArea", ComponentDefinition(
        backend_ref="TextArea",
        default_properties={"text": "", "enabled": True, "rows": 3, "auto_resize": True},
        property_mapping={
            "text": "text",
            "placeholder": "placeholder",
            "enabled": "enabled",
            "rows": "rows",
            "auto_expand": "auto_resize",
        },
        layout_supported=True,
    ))

    builder.register("CheckBox", ComponentDefinition(
        backend_ref="CheckBox",
        default_properties={"checked": False, "enabled": True},
        property_mapping={"checked": "checked", "text": "text", "enabled": "enabled", "change": "on_change"},
        layout_supported=True,
        validate=_validator(_is_bool("checked"), _is_bool("enabled")),
    ))

    builder.register("RadioButton", ComponentDefinition(
        backend_ref="RadioButton",
        default_properties={"text": "", "checked": False, "enabled": True},
        property_mapping={
            "text": "text",
            "selected": "checked",
            "enabled": "enabled",
            "group_name": "group_name",
            "value": "value",
            "change": "on_change",
        },
        layout_supported=True,
    ))

    builder.register("DropDown", ComponentDefinition(
        backend_ref="DropDown",
        default_properties={
            "items": [],
            "selected_value": None,
            "enabled": True,
            "include_blank": True,
        },
        property_mapping={
            "items": "items",
            "selected_value": "selected_value",
            "placeholder": "placeholder",
            "enabled": "enabled",
            "include_placeholder": "include_blank",
            "change": "on_change",
        },
        layout_supported=True,
        validate=_validator(_is_list("items")),
    ))

    builder.register("NumberBox", ComponentDefinition(
        backend_ref="NumberBox",
        default_properties={"value": None, "enabled": True, "step": 1},
        property_mapping={
            "value": "value",
            "minimum": "min",
            "maximum": "max",
            "step": "step",
            "format": "decimal_places",
            "enabled": "enabled",
        },
        layout_supported=True,
    ))

    builder.register("DatePicker", ComponentDefinition(
        backend_ref="DatePicker",
        default_properties={"date": None, "enabled": True},
        property_mapping={
            "date": "date",
            "format": "format",
            "min_date": "min_date",
            "max_date": "max_date",
            "enabled": "enabled",
            "placeholder": "placeholder",
            "change": "on_change",
        },
        layout_supported=True,
    ))

    # =========================================================================
    # DISPLAY & MEDIA
    # =========================================================================

    builder.register("Image", ComponentDefinition(
        backend_ref="Image",
        default_properties={
            "display_mode": "original_size",
            "horizontal_align": "left",
            "vertical_align": "top",
        },
        property_mapping={
            "source": "source",
            "height": "height",
            "width": "width",
            "display_mode": "display_mode",
            "horizontal_align": "horizontal_align",
            "vertical_align": "vertical_align",
        },
        property_transforms={"width": _css_size, "height": _css_size},
        layout_supported=True,
    ))

    builder.register("Plot", ComponentDefinition(
        backend_ref="Plot",
        default_properties={"height": 400},
        property_mapping={"figure": "figure", "layout": "layout", "data": "data", "config": "config"},
        layout_supported=True,
    ))

    builder.register("RichText", ComponentDefinition(
        backend_ref="RichText",
        default_properties={"enabled": True, "format": "html"},
        property_mapping={
            "content": "content",
            "placeholder": "placeholder",
            "enabled": "enabled",
            "format": "format",
        },
        layout_supported=True,
    ))

    builder.register("FileLoader", ComponentDefinition(
        backend_ref="FileLoader",
        default_properties={"multiple": False, "align": "center"},
        property_mapping={
            "file": "file",
            "multiple": "multiple",
            "file_types": "file_types",
            "placeholder": "placeholder",
            "change": "on_change",
        },
        layout_supported=True,
    ))

    # =========================================================================
    # INTERACTIVE & NAVIGATION
    # =========================================================================

    builder.register("Button", ComponentDefinition(
        backend_ref="Button",
        default_properties={
            "enabled": True,
            "role": "primary-color",
            "variant": "contained",
            "size": "medium",
            "loading": False,
        },
        property_mapping={
            "text": "text",
            "enabled": "enabled",
            "role": "role",
            "icon": "icon",
            "icon_align": "icon_align",
            "variant": "variant",
            "size": "size",
            "loading": "loading",
            "loading_text": "loading_text",
            "click": "on_click",
        },
        layout_supported=True,
        validate=_validator(
            _is_string("text"),
            _is_bool("enabled"),
            _one_of("role", BUTTON_ROLES),
            _one_of("variant", ("contained", "outlined", "text")),
            _one_of("size", ("small", "medium", "large")),
        ),
    ))

    builder.register("Link", ComponentDefinition(
        backend_ref="Link",
        default_properties={"target": "_self", "underline": "hover", "navigate": False},
        property_mapping={
            "text": "text",
            "url": "url",
            "target": "target",
            "form_name": "form_name",
            "navigate": "navigate",
            "underline": "underline",
            "click": "on_click",
        },
        layout_supported=True,
        validate=_validator(
            _one_of("target", LINK_TARGETS),
            _one_of("underline", ("none", "hover", "always")),
        ),
    ))

    builder.register("Timer", ComponentDefinition(
        backend_ref="Timer",
        default_properties={"interval": 1000, "enabled": True, "auto_start": False},
        property_mapping={"interval": "interval", "enabled": "enabled", "auto_start": "auto_start"},
        layout_supported=True,
        validate=_validator(
            _expect("interval", _positive_number, "interval must be a positive number"),
        ),
    ))

    builder.register("Notification", ComponentDefinition(
        backend_ref="Notification",
        default_properties={
            "type": "info",
            "dismissible": True,
            "auto_hide": False,
            "duration": 5000,
            "position": "top-right",
        },
        property_mapping={
            "type": "type",
            "title": "title",
            "message": "message",
            "dismissible": "dismissible",
            "auto_hide": "auto_hide",
            "duration": "duration",
            "position": "position",
        },
        layout_supported=True,
        validate=_validator(
            _one_of("type", ("info", "success", "warning", "error")),
            _one_of("position", NOTIFICATION_POSITIONS),
        ),
    ))

    # =========================================================================
    # DATA
    # =========================================================================

    builder.register("RepeatingPanel", ComponentDefinition(
        backend_ref="RepeatingPanel",
        default_properties={"items": []},
        property_mapping={"items": "items", "item_template": "item_template"},
        layout_supported=True,
        validate=_validator(_is_list("items")),
    ))

    builder.register("DataRowPanel", ComponentDefinition(
        backend_ref="DataRowPanel",
        default_properties={"selected": False},
        property_mapping={"selected": "selected", "select": "on_select"},
        layout_supported=True,
        validate=_validator(_is_bool("selected")),
    ))

    builder.register("DataGrid", ComponentDefinition(
        backend_ref="DataGrid",
        default_properties={
            "columns": [],
            "rows": [],
            "selected_rows": [],
            "sort_order": "asc",
            "filterable": False,
            "paginated": False,
            "page_size": 10,
            "current_page": 1,
        },
        property_mapping={
            "columns": "columns",
            "rows": "rows",
            "selected_rows": "selected_rows",
            "sort_by": "sort_by",
            "sort_order": "sort_order",
            "filterable": "filterable",
            "paginated": "paginated",
            "page_size": "page_size",
            "current_page": "current_page",
        },
        layout_supported=True,
        validate=_validator(
            _is_list("columns", "columns must be an array"),
            _is_list("rows", "rows must be an array"),
            _one_of("sort_order", ("asc", "desc")),
        ),
    ))

    return builder
