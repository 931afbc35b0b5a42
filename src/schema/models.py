"""Typed records for Anvil app, form and theme documents."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from core.validate import Diagnostic


class Record(BaseModel):
    """Immutable parsed record."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


# ============================================================================
# anvil.yaml
# ============================================================================

class Dependency(Record):
    """Cross-app dependency."""

    model_config = ConfigDict(frozen=True, extra="allow")

    app_id: str = ""
    version: Any = None


class RuntimeOptions(Record):
    version: str = "1.0"
    client_version: str | None = None
    server_version: str | None = None


class AppMetadata(Record):
    title: str
    description: str | None = None
    logo: str | None = None


class AppConfig(Record):
    """Application configuration from anvil.yaml."""

    package_name: str = ""
    name: str = ""
    dependencies: list[Dependency] = Field(default_factory=list)
    services: list[Any] = Field(default_factory=list)
    allow_embedding: bool = False
    runtime_options: RuntimeOptions = Field(default_factory=RuntimeOptions)
    metadata: AppMetadata
    startup_form: str | None = None
    startup: Any = None
    native_deps: list[Any] = Field(default_factory=list)
    db_schema: Any = None


# ============================================================================
# form_template.yaml
# ============================================================================

class Component(Record):
    """Component tree node as written in the form template."""

    type: str = Field(default="", description="Namespace-qualified component type")
    name: Any = Field(default="", description="Raw name; checked by the tree validator")
    properties: dict[str, Any] = Field(default_factory=dict)
    layout_properties: dict[str, Any] = Field(default_factory=dict)
    components: list["Component"] = Field(default_factory=list, description="Children")

    @property
    def children(self) -> list["Component"]:
        return self.components


class DataBinding(Record):
    component: str
    property: str
    code: str


class CustomEventParameter(Record):
    name: str
    description: str | None = None


class CustomComponentEvent(Record):
    name: str
    description: str | None = None
    parameters: list[CustomEventParameter] = Field(default_factory=list)


class FormTemplate(Record):
    """Parsed form template."""

    container: Component
    components: list[Component] = Field(default_factory=list, description="Legacy flat list")
    event_bindings: dict[str, str] = Field(default_factory=dict)
    data_bindings: list[DataBinding] = Field(default_factory=list)
    is_package: bool = False
    custom_component_events: list[CustomComponentEvent] | None = None
    layout_metadata: dict[str, Any] | None = None


class ComponentValidationOptions(Record):
    """Checks applied while parsing a form template."""

    allow_custom_components: bool = False
    validate_data_bindings: bool = False
    validate_event_bindings: bool = False


class FormParseResult(Record):
    """Form template plus the non-fatal diagnostics found while parsing it."""

    template: FormTemplate
    warnings: list[Diagnostic] = Field(default_factory=list)


# ============================================================================
# theme/parameters.yaml
# ============================================================================

class ThemeParameters(Record):
    roles: dict[str, Any] = Field(default_factory=dict)
    color_schemes: dict[str, Any] = Field(default_factory=dict)
    spacing: dict[str, Any] = Field(default_factory=dict)
    breakpoints: dict[str, Any] = Field(default_factory=dict)
    fonts: list[Any] = Field(default_factory=list)


class ThemeAssets(Record):
    css: list[str] = Field(default_factory=list)
    html: list[str] = Field(default_factory=list)


class Theme(Record):
    parameters: ThemeParameters = Field(default_factory=ThemeParameters)
    assets: ThemeAssets = Field(default_factory=ThemeAssets)


# ============================================================================
# Component type names
# ============================================================================

class TypeCategory(str, Enum):
    """Namespace a component type name belongs to."""

    BUILTIN = "builtin"
    DEPENDENCY = "dependency"
    PACKAGE = "package"


class ParsedTypeName(Record):
    category: TypeCategory
    name: str
    namespace: str | None = None
    dependency_id: str | None = None


Component.model_rebuild()
