"""Component tree validation with error/warning aggregation."""

from typing import Iterator

from core import get_logger
from core.validate import Diagnostic, Severity, ValidationResult, error, warning
from core.values import is_string
from schema.models import Component, ComponentValidationOptions, FormTemplate
from .registry import ComponentRegistry

logger = get_logger(__name__)

EVENT_HANDLER_PREFIX = "self."


class ComponentValidator:
    """
    Validates component nodes against their registered definitions.

    Diagnostics are collected, never raised: a failing node does not stop
    the walk over its siblings or children.
    """

    def __init__(self, registry: ComponentRegistry) -> None:
        self.registry = registry

    def validate_node(
        self,
        component: Component,
        check_name: bool = True,
        unknown_severity: Severity = Severity.ERROR,
    ) -> list[Diagnostic]:
        """
        Validate a single node, ignoring its children.

        Args:
            component: Node to check
            check_name: Apply the name checks (skipped for the form root)
            unknown_severity: Severity for unresolvable builtin types

        Returns:
            Diagnostics for this node only
        """
        diagnostics: list[Diagnostic] = []

        if not component.type:
            diagnostics.append(
                Diagnostic(f"Component '{component.name}' missing type", unknown_severity)
            )
        else:
            definition = self.registry.get_definition(component.type)
            if definition is None:
                diagnostics.append(
                    Diagnostic(f"Unknown component type: {component.type}", unknown_severity)
                )
            elif definition.validate is not None:
                try:
                    messages = definition.validate(component.properties)
                except Exception as e:
                    logger.error("validator_failed", type=component.type, error=str(e))
                    messages = [f"Validation of {component.type} failed: {e}"]
                diagnostics.extend(error(message) for message in messages)

        if check_name:
            if component.name is None or component.name == "":
                diagnostics.append(warning(f"Component of type '{component.type}' missing name"))
            elif not is_string(component.name):
                diagnostics.append(error("Component name must be a string"))

        return diagnostics

    def validate_component_tree(
        self,
        root: Component,
        unknown_severity: Severity = Severity.ERROR,
    ) -> list[Diagnostic]:
        """Validate a node and all descendants, diagnostics in pre-order"""
        diagnostics = self.validate_node(root, unknown_severity=unknown_severity)
        for child in root.components:
            diagnostics.extend(self.validate_component_tree(child, unknown_severity))
        return diagnostics

    def validate_form_template(
        self,
        template: FormTemplate,
        options: ComponentValidationOptions | None = None,
    ) -> ValidationResult:
        """
        Validate a whole form template.

        Unknown builtin types are warnings when custom components are allowed.
        """
        options = options or ComponentValidationOptions()
        unknown_severity = Severity.WARNING if options.allow_custom_components else Severity.ERROR
        result = ValidationResult()

        container = template.container
        if not container.type:
            result.add(error("Container type is required"))
        else:
            result.extend(
                self.validate_node(container, check_name=False, unknown_severity=unknown_severity)
            )

        for component in self._trees(template):
            result.extend(self.validate_component_tree(component, unknown_severity))

        if options.validate_event_bindings:
            for event, handler in template.event_bindings.items():
                if not handler.startswith(EVENT_HANDLER_PREFIX):
                    result.add(warning(
                        f"Event handler '{handler}' for '{event}' doesn't follow "
                        f"'{EVENT_HANDLER_PREFIX}' convention"
                    ))

        if options.validate_data_bindings:
            names = set(self._names(template))
            for binding in template.data_bindings:
                if binding.component != "self" and binding.component not in names:
                    result.add(warning(
                        f"Data binding '{binding.component}.{binding.property}' "
                        f"targets an unknown component"
                    ))

        return result

    def _trees(self, template: FormTemplate) -> list[Component]:
        trees = list(template.container.components)
        # Legacy flat list, when it is not already the root's children
        if template.components != template.container.components:
            trees.extend(template.components)
        return trees

    def _names(self, template: FormTemplate) -> Iterator[str]:
        stack = self._trees(template)
        while stack:
            component = stack.pop()
            if is_string(component.name):
                yield component.name
            stack.extend(component.components)
