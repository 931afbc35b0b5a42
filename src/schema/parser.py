"""Anvil YAML Parser - app, form template and theme documents to typed records."""

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from core import LogContext, SchemaError, get_logger, load_yaml_mapping
from core.validate import MAX_TREE_DEPTH, Diagnostic, warning
from core.values import as_list, as_mapping, as_str, is_mapping, is_string
from .models import (
    AppConfig,
    AppMetadata,
    Component,
    ComponentValidationOptions,
    CustomComponentEvent,
    CustomEventParameter,
    DataBinding,
    Dependency,
    FormParseResult,
    FormTemplate,
    ParsedTypeName,
    RuntimeOptions,
    Theme,
    ThemeAssets,
    ThemeParameters,
    TypeCategory,
)

if TYPE_CHECKING:
    from components.validator import ComponentValidator

logger = get_logger(__name__)

APP_CONFIG_FILE = "anvil.yaml"
FORM_TEMPLATE_FILE = "form_template.yaml"
THEME_FILE = "theme/parameters.yaml"

DEFAULT_APP_TITLE = "Anvil App"
DEFAULT_CONTAINER_TYPE = "ColumnPanel"


def parse_component_type(type_name: str) -> ParsedTypeName:
    """
    Split a component type name into its namespace parts.

    Formats:
    - Dependency: "form:dep_id:ComponentName" (exactly three segments)
    - Package: "anvil.ComponentName" (split at the first dot)
    - Builtin: anything else, e.g. "TextBox"

    Malformed "form:" names fall through to the package/builtin rules.
    """
    if type_name.startswith("form:"):
        parts = type_name.split(":")
        if len(parts) == 3:
            return ParsedTypeName(
                category=TypeCategory.DEPENDENCY,
                dependency_id=parts[1],
                name=parts[2],
            )

    if "." in type_name:
        namespace, name = type_name.split(".", 1)
        return ParsedTypeName(category=TypeCategory.PACKAGE, namespace=namespace, name=name)

    return ParsedTypeName(category=TypeCategory.BUILTIN, name=type_name)


class AnvilYamlParser:
    """Parses anvil.yaml, form_template.yaml and theme files into records"""

    def __init__(
        self,
        validator: Optional["ComponentValidator"] = None,
        max_depth: int = MAX_TREE_DEPTH,
    ):
        self.validator = validator
        self.max_depth = max_depth

    # ------------------------------------------------------------------
    # anvil.yaml
    # ------------------------------------------------------------------

    def parse_app_config(self, content: str) -> AppConfig:
        """
        Parse anvil.yaml content.

        Every field is filled with a default when absent.

        Raises:
            SchemaError: If the text is not YAML or not a mapping
        """
        raw = load_yaml_mapping(content, APP_CONFIG_FILE, self.max_depth)

        name = as_str(raw.get("name"))
        runtime = as_mapping(raw.get("runtime_options"))
        metadata = as_mapping(raw.get("metadata"))

        return AppConfig(
            package_name=as_str(raw.get("package_name")),
            name=name,
            dependencies=self._parse_dependencies(raw.get("dependencies")),
            services=as_list(raw.get("services")),
            allow_embedding=bool(raw.get("allow_embedding")),
            runtime_options=RuntimeOptions(
                version=as_str(runtime.get("version"), "1.0"),
                client_version=as_str(runtime.get("client_version")) or None,
                server_version=as_str(runtime.get("server_version")) or None,
            ),
            metadata=AppMetadata(
                title=as_str(metadata.get("title")) or name or DEFAULT_APP_TITLE,
                description=as_str(metadata.get("description")) or None,
                logo=as_str(metadata.get("logo")) or None,
            ),
            startup_form=as_str(raw.get("startup_form")) or None,
            startup=raw.get("startup"),
            native_deps=self._parse_native_deps(raw.get("native_deps")),
            db_schema=raw.get("db_schema"),
        )

    def _parse_dependencies(self, dependencies: Any) -> List[Dependency]:
        result = []
        for dep in as_list(dependencies):
            if not is_mapping(dep):
                logger.warning("invalid_dependency", dependency=repr(dep))
                continue
            fields = as_mapping(dep)
            fields["app_id"] = as_str(fields.get("app_id"))
            result.append(Dependency(**fields))
        return result

    def _parse_native_deps(self, native_deps: Any) -> List[Any]:
        # Newer apps store native deps as a single mapping (head_html etc.)
        if is_mapping(native_deps):
            return [as_mapping(native_deps)]
        return as_list(native_deps)

    # ------------------------------------------------------------------
    # form_template.yaml
    # ------------------------------------------------------------------

    def parse_form_template(
        self,
        content: str,
        options: Optional[ComponentValidationOptions] = None,
    ) -> FormParseResult:
        """
        Parse and validate form_template.yaml content.

        Args:
            content: YAML text
            options: Validation switches

        Returns:
            FormParseResult with the template and any warnings

        Raises:
            SchemaError: On invalid YAML or at least one validation error
        """
        if self.validator is None:
            raise RuntimeError("parse_form_template requires a ComponentValidator")

        options = options or ComponentValidationOptions()

        with LogContext(file=FORM_TEMPLATE_FILE):
            raw = load_yaml_mapping(content, FORM_TEMPLATE_FILE, self.max_depth)
            warnings: List[Diagnostic] = []

            components = self._parse_components(raw.get("components"))
            template = FormTemplate(
                container=self._parse_container(raw.get("container"), components),
                components=components,
                event_bindings=self._parse_event_bindings(raw.get("event_bindings"), warnings),
                data_bindings=self._parse_data_bindings(raw.get("data_bindings")),
                is_package=bool(raw.get("is_package")),
                custom_component_events=self._parse_custom_events(
                    raw.get("custom_component_events")
                ),
                layout_metadata=as_mapping(raw.get("layout_metadata")) or None,
            )

            validation = self.validator.validate_form_template(template, options)
            warnings.extend(validation.warnings)

            if warnings:
                logger.warning(
                    "form_template_warnings",
                    count=len(warnings),
                    warnings=[d.message for d in warnings],
                )

            if validation.errors:
                messages = validation.error_messages()
                logger.error("form_template_invalid", errors=messages)
                raise SchemaError(
                    FORM_TEMPLATE_FILE,
                    f"Form template validation errors: {', '.join(messages)}",
                    diagnostics=list(validation.errors),
                )

        return FormParseResult(template=template, warnings=warnings)

    def _parse_container(self, container: Any, components: List[Component]) -> Component:
        """
        Build the form root.

        The root's children are its own nested components when given,
        otherwise the template's top-level component list.
        """
        raw = as_mapping(container)
        if "components" in raw:
            children = self._parse_components(raw.get("components"))
        else:
            children = components

        return Component(
            type=as_str(raw.get("type")) or DEFAULT_CONTAINER_TYPE,
            name=raw.get("name") if raw.get("name") is not None else "",
            properties=as_mapping(raw.get("properties")),
            layout_properties=as_mapping(raw.get("layout_properties")),
            components=children,
        )

    def _parse_components(self, components: Any) -> List[Component]:
        """Recursively parse a component list"""
        result = []
        for comp in as_list(components):
            if not is_mapping(comp):
                logger.warning("invalid_component", component=repr(comp)[:100])
                continue
            result.append(self._parse_component(comp))
        return result

    def _parse_component(self, comp: Dict[str, Any]) -> Component:
        name = comp.get("name")
        return Component(
            type=as_str(comp.get("type")) or "Unknown",
            # Kept as written so the validator can reject non-string names
            name=name if name is not None else "",
            properties=as_mapping(comp.get("properties")),
            layout_properties=as_mapping(comp.get("layout_properties")),
            components=self._parse_components(comp.get("components")),
        )

    def _parse_event_bindings(
        self, event_bindings: Any, warnings: List[Diagnostic]
    ) -> Dict[str, str]:
        """Keep string handlers; drop anything else with a warning"""
        bindings = {}
        for event, handler in as_mapping(event_bindings).items():
            if is_string(handler):
                bindings[event] = handler
                continue
            message = (
                f"Invalid event binding for '{event}': "
                f"expected string, got {type(handler).__name__}"
            )
            logger.warning("invalid_event_binding", event_name=event, got=type(handler).__name__)
            warnings.append(warning(message, file=FORM_TEMPLATE_FILE))
        return bindings

    def _parse_data_bindings(self, data_bindings: Any) -> List[DataBinding]:
        """Keep well-formed bindings; malformed entries are logged and dropped"""
        result = []
        for binding in as_list(data_bindings):
            fields = as_mapping(binding)
            component = as_str(fields.get("component"))
            prop = as_str(fields.get("property"))
            code = as_str(fields.get("code"))
            if not (component and prop and code):
                logger.warning("invalid_data_binding", binding=repr(binding)[:200])
                continue
            result.append(DataBinding(component=component, property=prop, code=code))
        return result

    def _parse_custom_events(self, events: Any) -> Optional[List[CustomComponentEvent]]:
        if not events:
            return None

        result = []
        for event in as_list(events):
            fields = as_mapping(event)
            name = as_str(fields.get("name"))
            if not name:
                logger.warning("invalid_custom_event", custom_event=repr(event)[:100])
                continue
            parameters = [
                CustomEventParameter(
                    name=as_str(p.get("name")),
                    description=as_str(p.get("description")) or None,
                )
                for p in map(as_mapping, as_list(fields.get("parameters")))
                if as_str(p.get("name"))
            ]
            result.append(
                CustomComponentEvent(
                    name=name,
                    description=as_str(fields.get("description")) or None,
                    parameters=parameters,
                )
            )
        return result

    # ------------------------------------------------------------------
    # theme/parameters.yaml
    # ------------------------------------------------------------------

    def parse_theme(self, content: str) -> Theme:
        """Parse theme parameters; missing sections become empty collections"""
        raw = load_yaml_mapping(content, THEME_FILE, self.max_depth)
        assets = as_mapping(raw.get("assets"))

        return Theme(
            parameters=ThemeParameters(
                roles=as_mapping(raw.get("roles")),
                color_schemes=as_mapping(raw.get("color_schemes")),
                spacing=as_mapping(raw.get("spacing")),
                breakpoints=as_mapping(raw.get("breakpoints")),
                fonts=as_list(raw.get("fonts")),
            ),
            assets=ThemeAssets(
                css=[as_str(a) for a in as_list(assets.get("css")) if as_str(a)],
                html=[as_str(a) for a in as_list(assets.get("html")) if as_str(a)],
            ),
        )


def extract_dependencies(config: AppConfig) -> List[str]:
    """App ids of every dependency"""
    return [dep.app_id for dep in config.dependencies]


def extract_component_types(template: FormTemplate) -> List[str]:
    """Every component type used in a form template, first-seen order"""
    seen: Dict[str, None] = {}

    def walk(components: List[Component]) -> None:
        for component in components:
            seen.setdefault(component.type, None)
            walk(component.components)

    walk(template.components)
    seen.setdefault(template.container.type, None)
    walk(template.container.components)
    return list(seen)


def parse_app_config(content: str) -> AppConfig:
    """Convenience function to parse anvil.yaml content"""
    return AnvilYamlParser().parse_app_config(content)


def parse_theme(content: str) -> Theme:
    """Convenience function to parse theme parameters"""
    return AnvilYamlParser().parse_theme(content)
