"""Component definitions - what the renderer backend registers per type."""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Callable, Mapping

from schema.models import TypeCategory

Validator = Callable[[Mapping[str, Any]], list[str]]
Transform = Callable[[Any], Any]


def _frozen(mapping: Mapping[str, Any] | None) -> Mapping[str, Any] | None:
    if mapping is None:
        return None
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class ComponentDefinition:
    """
    Registry entry for a component type.

    Attributes:
        backend_ref: Opaque handle to the renderer implementation
        default_properties: Backend properties every node starts from
        property_mapping: Domain key to backend key; None copies all properties verbatim
        property_transforms: Domain key to value converter applied while mapping
        layout_supported: Whether layout properties become layout directives
        validate: Returns error strings for a domain property bag
        category: Namespace the definition was resolved from
    """

    backend_ref: Any
    default_properties: Mapping[str, Any] = field(default_factory=dict)
    property_mapping: Mapping[str, str] | None = None
    property_transforms: Mapping[str, Transform] | None = None
    layout_supported: bool = False
    validate: Validator | None = None
    category: TypeCategory = TypeCategory.BUILTIN

    def __post_init__(self) -> None:
        # Read-only views; definitions are shared by every build
        object.__setattr__(self, "default_properties", _frozen(self.default_properties))
        object.__setattr__(self, "property_mapping", _frozen(self.property_mapping))
        object.__setattr__(self, "property_transforms", _frozen(self.property_transforms))

    @property
    def is_placeholder(self) -> bool:
        return self.backend_ref == UNRESOLVED_COMPONENT

    def with_category(self, category: TypeCategory) -> "ComponentDefinition":
        if category is self.category:
            return self
        return replace(self, category=category)


UNRESOLVED_COMPONENT = "UnresolvedComponent"


def placeholder_definition(
    component_name: str, source: str | None, category: TypeCategory
) -> ComponentDefinition:
    """
    Neutral marker for a dependency/package component that is not registered.

    The renderer shows it as a dashed box naming the component and its source.
    """
    label = f"Custom Component: {component_name}"
    if source:
        label = f"{label} ({source})"

    return ComponentDefinition(
        backend_ref=UNRESOLVED_COMPONENT,
        default_properties={
            "class_name": "anvil-custom-component",
            "component_name": component_name,
            "source": source,
            "label": label,
        },
        layout_supported=True,
        category=category,
    )
