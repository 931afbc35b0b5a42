"""Property mapping - domain properties to backend properties and layout directives."""

import copy
from typing import Any, Dict, Mapping, Optional

from core.values import ValueKind, format_number, value_kind
from events import EVENT_KEYS, EventDispatcher, EventSubscription
from .definition import ComponentDefinition


class PropertyMapper:
    """
    Maps a node's domain property bag through its definition's mapping table.

    Event keys (click, change, ...) become EventSubscription callables bound
    to the injected dispatcher instead of copied values.
    """

    def __init__(self, dispatcher: EventDispatcher) -> None:
        self.dispatcher = dispatcher

    def map_props(
        self,
        domain_props: Mapping[str, Any],
        definition: ComponentDefinition,
        component_type: Optional[str] = None,
        component_name: Optional[str] = None,
        form_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Map domain properties to backend properties.

        Args:
            domain_props: Properties as written in the form template
            definition: Resolved component definition
            component_type: Type name used when dispatching events
            component_name: Node name used when dispatching events
            form_name: Owning form used when dispatching events

        Returns:
            Backend property dict, starting from the definition's defaults
        """
        # Defaults may hold lists/dicts; never share them between nodes
        backend_props = copy.deepcopy(dict(definition.default_properties))

        if definition.property_mapping is None:
            backend_props.update(domain_props)
            return backend_props

        transforms = definition.property_transforms or {}
        for domain_key, backend_key in definition.property_mapping.items():
            if domain_key not in domain_props:
                continue

            if self.is_event_key(domain_key):
                backend_props[backend_key] = EventSubscription(
                    event_type=domain_key,
                    component_type=component_type or str(definition.backend_ref),
                    component_name=component_name,
                    form_name=form_name,
                    dispatcher=self.dispatcher,
                )
            elif domain_key in transforms:
                backend_props[backend_key] = transforms[domain_key](domain_props[domain_key])
            else:
                backend_props[backend_key] = domain_props[domain_key]

        return backend_props

    @staticmethod
    def is_event_key(key: str) -> bool:
        """Check if a property binds an event"""
        return key in EVENT_KEYS

    @staticmethod
    def map_layout_props(layout_props: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """
        Map layout properties to backend layout directives.

        Keys absent from the input, or holding values of unusable shape,
        are omitted from the output.
        """
        layout_props = layout_props or {}
        directives: Dict[str, Any] = {}

        def put(key: str, value: Any) -> None:
            if value is not None:
                directives[key] = value

        # Size
        if "width" in layout_props:
            put("width", normalize_size(layout_props["width"]))
        if "height" in layout_props:
            put("height", normalize_size(layout_props["height"]))

        # Spacing
        if "margin" in layout_props:
            put("margin", normalize_spacing(layout_props["margin"]))
        if "padding" in layout_props:
            put("padding", normalize_spacing(layout_props["padding"]))

        # Alignment
        put("text_align", layout_props.get("align"))

        # Grid
        put("grid_row", layout_props.get("row"))
        put("grid_column", layout_props.get("col"))
        if layout_props.get("col_span") is not None:
            directives["grid_column_end"] = f"span {layout_props['col_span']}"
        if layout_props.get("row_span") is not None:
            directives["grid_row_end"] = f"span {layout_props['row_span']}"

        # Flex
        put("flex_grow", layout_props.get("flex_grow"))
        put("flex_shrink", layout_props.get("flex_shrink"))

        return directives


def normalize_size(size: Any) -> Optional[str]:
    """Numbers become pixel sizes, strings pass through, anything else is dropped"""
    kind = value_kind(size)
    if kind is ValueKind.NUMBER:
        return f"{format_number(size)}px"
    if kind is ValueKind.STRING:
        return size
    return None


def normalize_spacing(spacing: Any) -> Optional[str]:
    """Like normalize_size, plus lists of sizes joined CSS-shorthand style"""
    if value_kind(spacing) is ValueKind.LIST:
        return " ".join(normalize_size(s) or "auto" for s in spacing)
    return normalize_size(spacing)
