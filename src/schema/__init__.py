"""
Anvil schema parsing
Converts anvil.yaml, form_template.yaml and theme YAML into typed records
"""

from .models import (
    AppConfig,
    Component,
    ComponentValidationOptions,
    DataBinding,
    FormParseResult,
    FormTemplate,
    ParsedTypeName,
    Theme,
    TypeCategory,
)
from .parser import (
    AnvilYamlParser,
    extract_component_types,
    extract_dependencies,
    parse_app_config,
    parse_component_type,
    parse_theme,
)
from .loader import AppBundle, load_app, options_from_settings

__all__ = [
    "AnvilYamlParser",
    "AppBundle",
    "AppConfig",
    "Component",
    "ComponentValidationOptions",
    "DataBinding",
    "FormParseResult",
    "FormTemplate",
    "ParsedTypeName",
    "Theme",
    "TypeCategory",
    "extract_component_types",
    "extract_dependencies",
    "load_app",
    "options_from_settings",
    "parse_app_config",
    "parse_component_type",
    "parse_theme",
]
