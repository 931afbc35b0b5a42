"""
Anvil components
Registry, validation, property mapping and tree building
"""

from .definition import ComponentDefinition, placeholder_definition
from .registry import ComponentRegistry, RegistryBuilder
from .builtins import register_builtin_components
from .validator import ComponentValidator
from .mapper import PropertyMapper, normalize_size, normalize_spacing
from .factory import (
    BuildContext,
    ComponentFactory,
    ErrorNode,
    FactoryOptions,
    FormBuildResult,
    Node,
)

__all__ = [
    "BuildContext",
    "ComponentDefinition",
    "ComponentFactory",
    "ComponentRegistry",
    "ComponentValidator",
    "ErrorNode",
    "FactoryOptions",
    "FormBuildResult",
    "Node",
    "PropertyMapper",
    "RegistryBuilder",
    "normalize_size",
    "normalize_spacing",
    "placeholder_definition",
    "register_builtin_components",
]
