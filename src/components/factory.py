"""
Component Factory - builds backend node trees from parsed components.

Each node goes Validate -> Resolve -> Map -> Recurse -> Assemble and ends as
a Node or an ErrorNode. Failures stay local to the node they happen in.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Iterator, Mapping, Sequence, Union

from pydantic import BaseModel, Field
from returns.pipeline import is_successful
from returns.result import Failure, Result, Success

from core import get_logger, safe_json_dumps
from core.validate import MAX_TREE_DEPTH, ResolutionFailure
from core.values import as_str, is_mapping, is_string
from schema.models import Component, FormTemplate
from .definition import ComponentDefinition
from .mapper import PropertyMapper
from .registry import ComponentRegistry
from .validator import ComponentValidator

logger = get_logger(__name__)

ERROR_COMPONENT = "ErrorComponent"

ERROR_STYLE = {
    "border": "2px solid #ff4444",
    "border_radius": "4px",
    "padding": "16px",
    "margin": "8px",
    "background_color": "#ffeeee",
    "color": "#cc0000",
}

Key = Union[str, int, None]


class FactoryOptions(BaseModel):
    """Tree factory switches."""

    model_config = {"frozen": True}

    debug: bool = Field(default=False)
    validate_components: bool = Field(default=True)
    max_depth: int = Field(default=MAX_TREE_DEPTH, gt=0)


@dataclass
class BuildContext:
    """Per-build state threaded through the recursion."""

    form_name: str | None = None
    parent_component: str | None = None
    depth: int = 0
    errors: list[str] = field(default_factory=list)

    def child(self, parent_type: str) -> "BuildContext":
        """Context for the children of a node; shares the error list"""
        return replace(self, depth=self.depth + 1, parent_component=parent_type)


@dataclass(frozen=True)
class Node:
    """Successfully built backend node."""

    type: str
    name: str | None
    backend_ref: Any
    props: dict[str, Any]
    layout: dict[str, Any] | None = None
    children: tuple["AnyNode", ...] = ()
    key: Key = None

    is_error = False

    def walk(self) -> Iterator["AnyNode"]:
        """Pre-order iteration over this node and its descendants"""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "name": self.name,
            "key": self.key,
            "backend_ref": getattr(self.backend_ref, "__name__", str(self.backend_ref)),
            "props": self.props,
            "layout": self.layout,
            "children": [child.to_dict() for child in self.children],
        }

    def to_json(self, **kwargs: Any) -> str:
        return safe_json_dumps(self.to_dict(), **kwargs)


@dataclass(frozen=True)
class ErrorNode:
    """Placeholder shown in place of a node that could not be built."""

    type: str
    name: str | None
    errors: tuple[str, ...]
    key: Key = None
    props: dict[str, Any] = field(default_factory=dict)

    is_error = True
    backend_ref = ERROR_COMPONENT
    children: tuple = ()

    @property
    def title(self) -> str:
        return f"Error in {self.type}:"

    def walk(self) -> Iterator["AnyNode"]:
        yield self

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "name": self.name,
            "key": self.key,
            "backend_ref": ERROR_COMPONENT,
            "title": self.title,
            "errors": list(self.errors),
            "props": self.props,
        }

    def to_json(self, **kwargs: Any) -> str:
        return safe_json_dumps(self.to_dict(), **kwargs)


AnyNode = Union[Node, ErrorNode]


@dataclass(frozen=True)
class FormBuildResult:
    """Root node of a form plus every error collected while building it."""

    root: AnyNode
    errors: list[str]

    @property
    def ok(self) -> bool:
        return not self.errors


class ComponentFactory:
    """Creates backend node trees from Anvil component definitions"""

    def __init__(
        self,
        registry: ComponentRegistry,
        validator: ComponentValidator,
        mapper: PropertyMapper,
        options: FactoryOptions | None = None,
    ) -> None:
        self.registry = registry
        self.validator = validator
        self.mapper = mapper
        self.options = options or FactoryOptions()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create_component(
        self,
        component: Component | Mapping[str, Any],
        key: Key = None,
        context: BuildContext | None = None,
    ) -> AnyNode:
        """
        Build one node and its subtree. Never raises.

        Args:
            component: Parsed component (or a raw mapping of the same shape)
            key: Position key, index within the parent or "container"
            context: Build state; a fresh one is used when omitted

        Returns:
            Node, or ErrorNode when this node failed
        """
        context = context if context is not None else BuildContext()
        result = self._build(component, key, context)
        if is_successful(result):
            return result.unwrap()
        return result.failure()

    def create_components(
        self,
        components: Sequence[Component | Mapping[str, Any]],
        context: BuildContext | None = None,
    ) -> list[AnyNode]:
        """Build each component keyed by its index; failures stay in place"""
        context = context if context is not None else BuildContext()
        return [
            self.create_component(component, index, context)
            for index, component in enumerate(components)
        ]

    def create_form(self, template: FormTemplate, form_name: str | None = None) -> FormBuildResult:
        """Build the form's root container; errors are returned, not raised"""
        context = BuildContext(form_name=form_name)
        root = self.create_component(template.container, "container", context)

        if context.errors:
            logger.warning("form_build_errors", form=form_name, errors=context.errors)
        else:
            logger.debug("form_built", form=form_name)

        return FormBuildResult(root=root, errors=list(context.errors))

    # ------------------------------------------------------------------
    # Build steps
    # ------------------------------------------------------------------

    def _build(self, raw: Any, key: Key, context: BuildContext) -> Result[Node, ErrorNode]:
        component = self._coerce(raw)
        if component is None:
            message = f"Invalid component definition: {type(raw).__name__}"
            return self._fail(_stub(raw), [message], key, context, message)

        try:
            if context.depth > self.options.max_depth:
                message = f"Maximum component depth {self.options.max_depth} exceeded"
                return self._fail(component, [message], key, context, message)

            # 1. Validate (this node only)
            if self.options.validate_components:
                errors = [
                    d.message for d in self.validator.validate_node(component) if d.is_error
                ]
                if errors:
                    if self.options.debug:
                        logger.warning("component_invalid", type=component.type, errors=errors)
                    return self._fail(component, errors, key, context, *errors)

            # 2. Resolve
            definition = self.registry.get_definition(component.type)
            if definition is None:
                raise ResolutionFailure(component.type)

            # 3. Map
            props = self._map_props(component, definition, key, context)
            layout = None
            if definition.layout_supported and component.layout_properties:
                layout = self.mapper.map_layout_props(component.layout_properties)

            # 4. Recurse
            children = self.create_components(
                component.components, context.child(component.type)
            )

            # 5. Assemble
            return Success(Node(
                type=component.type,
                name=_name(component),
                backend_ref=definition.backend_ref,
                props=props,
                layout=layout,
                children=tuple(children),
                key=key,
            ))

        except ResolutionFailure as e:
            return self._fail(component, [str(e)], key, context, str(e))
        except Exception as e:
            logger.error(
                "component_build_failed",
                type=component.type,
                name=_name(component),
                error=str(e),
                exc_info=self.options.debug,
            )
            return self._fail(
                component,
                [str(e)],
                key,
                context,
                f"Error creating component {component.type}: {e}",
            )

    def _map_props(
        self,
        component: Component,
        definition: ComponentDefinition,
        key: Key,
        context: BuildContext,
    ) -> dict[str, Any]:
        name = _name(component)
        props = self.mapper.map_props(
            component.properties,
            definition,
            component_type=component.type,
            component_name=name,
            form_name=context.form_name,
        )

        if key is not None:
            props["key"] = key
            props["data-testid"] = key

        if name:
            existing = as_str(props.get("class_name"))
            props["class_name"] = f"{existing} anvil-component-{name}".strip()

        if self.options.debug:
            props["data-anvil-type"] = component.type
            props["data-anvil-name"] = name
            props["data-anvil-depth"] = context.depth

        return props

    def _fail(
        self,
        component: Component,
        errors: list[str],
        key: Key,
        context: BuildContext,
        *reported: str,
    ) -> Failure:
        context.errors.extend(reported)
        return Failure(self._error_node(component, errors, key))

    def _error_node(self, component: Component, errors: list[str], key: Key) -> ErrorNode:
        props: dict[str, Any] = {"class_name": "anvil-component-error", "style": dict(ERROR_STYLE)}
        if key is not None:
            props["key"] = key
        if self.options.debug:
            props["data-anvil-type"] = component.type
            props["data-anvil-name"] = _name(component)
            props["data-anvil-errors"] = safe_json_dumps(errors)

        return ErrorNode(
            type=component.type or "Unknown",
            name=_name(component),
            errors=tuple(errors),
            key=key,
            props=props,
        )

    @staticmethod
    def _coerce(raw: Any) -> Component | None:
        if isinstance(raw, Component):
            return raw
        if is_mapping(raw):
            try:
                return Component.model_validate(dict(raw))
            except ValueError:
                return None
        return None


def _name(component: Component) -> str | None:
    return component.name if is_string(component.name) and component.name else None


def _stub(raw: Any) -> Component:
    """Best-effort identity for an ErrorNode built from unusable input"""
    fields = raw if is_mapping(raw) else {}
    return Component(type=as_str(fields.get("type"), "Unknown"), name=as_str(fields.get("name")))
