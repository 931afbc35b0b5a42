"""
Component Registry
Resolves component type names to definitions across the builtin,
dependency and package namespaces.
"""

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from core import get_logger
from schema.models import TypeCategory
from schema.parser import parse_component_type
from .definition import ComponentDefinition, placeholder_definition

logger = get_logger(__name__)

# Material 3 theme dependency: its components render as builtins
MATERIAL3_DEPENDENCY_ID = "dep_lin1x4oec0ytd"

MATERIAL3_COMPONENTS: Mapping[str, str] = MappingProxyType({
    "_Components.Button": "Button",
    "_Components.TextInput.TextArea": "TextArea",
    "_Components.TextField": "TextBox",
    "_Components.RadioButton": "RadioButton",
    "_Components.RadioGroupPanel": "ColumnPanel",
    "_Components.Checkbox": "CheckBox",
    "_Components.Switch": "CheckBox",
    "_Components.Slider": "Slider",
    "_Components.Dropdown": "DropDown",
    "_Components.Card": "ColumnPanel",
    "_Components.Navigation": "ColumnPanel",
})

DEPENDENCY_REMAPS: Mapping[str, Mapping[str, str]] = MappingProxyType({
    MATERIAL3_DEPENDENCY_ID: MATERIAL3_COMPONENTS,
})


class RegistryBuilder:
    """
    Collects registrations during bootstrap.
    build() consumes the builder into a read-only ComponentRegistry.
    """

    def __init__(self):
        self._builtins: Dict[str, ComponentDefinition] = {}
        self._packages: Dict[str, Dict[str, ComponentDefinition]] = {}
        self._built = False

    def _check_open(self) -> None:
        if self._built:
            raise RuntimeError("Registry already built; register components before build()")

    def register(self, type_name: str, definition: ComponentDefinition) -> "RegistryBuilder":
        """Register a builtin component type (last write wins)"""
        self._check_open()
        if type_name in self._builtins:
            logger.debug("component_overwritten", type=type_name)
        self._builtins[type_name] = definition.with_category(TypeCategory.BUILTIN)
        return self

    def register_package(
        self, package_name: str, component_name: str, definition: ComponentDefinition
    ) -> "RegistryBuilder":
        """Register a component published by a package"""
        self._check_open()
        self._packages.setdefault(package_name, {})[component_name] = definition.with_category(
            TypeCategory.PACKAGE
        )
        return self

    def build(self) -> "ComponentRegistry":
        self._check_open()
        self._built = True
        registry = ComponentRegistry(self._builtins, self._packages)
        logger.info(
            "registry_built",
            builtins=len(self._builtins),
            packages=len(self._packages),
        )
        return registry


class ComponentRegistry:
    """
    Read-only map from component type name to definition.
    Safe to share between concurrent builds.
    """

    def __init__(
        self,
        builtins: Mapping[str, ComponentDefinition],
        packages: Mapping[str, Mapping[str, ComponentDefinition]],
    ):
        self._builtins = MappingProxyType(dict(builtins))
        self._packages = MappingProxyType(
            {name: MappingProxyType(dict(components)) for name, components in packages.items()}
        )

    def get_definition(self, type_name: str) -> Optional[ComponentDefinition]:
        """
        Resolve a type name.

        Order:
        1. Exact builtin match
        2. Dependency ("form:dep:Name"): remap table, else a placeholder
        3. Package ("pkg.Name"): registered component, else a placeholder
        4. Unregistered builtin: None
        """
        definition = self._builtins.get(type_name)
        if definition is not None:
            return definition

        parsed = parse_component_type(type_name)

        if parsed.category is TypeCategory.DEPENDENCY:
            remaps = DEPENDENCY_REMAPS.get(parsed.dependency_id, {})
            builtin_name = remaps.get(parsed.name)
            if builtin_name is not None and builtin_name in self._builtins:
                return self._builtins[builtin_name]
            return placeholder_definition(parsed.name, parsed.dependency_id, TypeCategory.DEPENDENCY)

        if parsed.category is TypeCategory.PACKAGE:
            package = self._packages.get(parsed.namespace, {})
            if parsed.name in package:
                return package[parsed.name]
            return placeholder_definition(parsed.name, parsed.namespace, TypeCategory.PACKAGE)

        return None

    def has_component(self, type_name: str) -> bool:
        """Check if a component type resolves"""
        return self.get_definition(type_name) is not None

    def get_registered_types(self) -> List[str]:
        """Builtin names plus "package.component" names"""
        types = list(self._builtins)
        for package_name, components in self._packages.items():
            types.extend(f"{package_name}.{name}" for name in components)
        return types

    def __contains__(self, type_name: str) -> bool:
        return self.has_component(type_name)

    def __len__(self) -> int:
        return len(self._builtins) + sum(len(c) for c in self._packages.values())
