"""Tree validator tests."""

import pytest

from components import ComponentDefinition, ComponentValidator, RegistryBuilder
from core import Severity
from schema import Component, ComponentValidationOptions, FormTemplate


def node(type_, name="n", children=(), **properties):
    return Component(type=type_, name=name, properties=properties, components=list(children))


@pytest.mark.unit
def test_valid_node(validator):
    assert validator.validate_node(node("Button", text="Save")) == []


@pytest.mark.unit
def test_unknown_type_single_error(validator):
    diagnostics = validator.validate_node(node("Mystery", text=1))
    assert [d.message for d in diagnostics] == ["Unknown component type: Mystery"]
    assert diagnostics[0].severity is Severity.ERROR


@pytest.mark.unit
def test_type_validator_errors(validator):
    diagnostics = validator.validate_node(node("Button", text=123, role="neon"))
    messages = [d.message for d in diagnostics]

    assert "text property must be a string" in messages
    assert any(m.startswith("role must be one of") for m in messages)
    assert all(d.is_error for d in diagnostics)


@pytest.mark.unit
def test_name_checks(validator):
    missing = validator.validate_node(node("Label", name=""))
    assert [(d.message, d.severity) for d in missing] == [
        ("Component of type 'Label' missing name", Severity.WARNING)
    ]

    wrong = validator.validate_node(node("Label", name=7))
    assert [d.message for d in wrong] == ["Component name must be a string"]
    assert wrong[0].is_error


@pytest.mark.unit
def test_missing_type(validator):
    diagnostics = validator.validate_node(Component(name="orphan"))
    assert [d.message for d in diagnostics] == ["Component 'orphan' missing type"]
    assert diagnostics[0].severity is Severity.ERROR


@pytest.mark.unit
def test_missing_type_follows_unknown_severity(validator):
    diagnostics = validator.validate_node(
        Component(name="orphan"), unknown_severity=Severity.WARNING
    )
    assert [d.severity for d in diagnostics] == [Severity.WARNING]


@pytest.mark.unit
def test_tree_preorder(validator):
    """Test parent diagnostics precede children, in traversal order."""
    tree = node("A", "root", children=[
        node("B", "left", children=[node("C", "leaf")]),
        node("D", "right"),
    ])

    messages = [d.message for d in validator.validate_component_tree(tree)]
    assert messages == [
        "Unknown component type: A",
        "Unknown component type: B",
        "Unknown component type: C",
        "Unknown component type: D",
    ]


@pytest.mark.unit
def test_no_deduplication(validator):
    tree = node("ColumnPanel", "root", children=[node("Ghost", "a"), node("Ghost", "b")])
    messages = [d.message for d in validator.validate_component_tree(tree)]
    assert messages == ["Unknown component type: Ghost", "Unknown component type: Ghost"]


@pytest.mark.unit
def test_crashing_type_validator():
    def explode(props):
        raise KeyError("boom")

    builder = RegistryBuilder()
    builder.register("Fragile", ComponentDefinition(backend_ref="Fragile", validate=explode))
    validator = ComponentValidator(builder.build())

    diagnostics = validator.validate_node(node("Fragile"))
    assert len(diagnostics) == 1
    assert diagnostics[0].message.startswith("Validation of Fragile failed")


@pytest.mark.unit
def test_form_container_type_required(validator):
    template = FormTemplate(container=Component(type=""))
    result = validator.validate_form_template(template)

    assert not result.valid
    assert result.error_messages() == ["Container type is required"]


@pytest.mark.unit
def test_form_container_name_not_checked(validator):
    template = FormTemplate(container=Component(type="ColumnPanel"))
    result = validator.validate_form_template(template)
    assert result.valid
    assert result.warnings == []


@pytest.mark.unit
def test_form_event_bindings(validator):
    template = FormTemplate(
        container=Component(type="ColumnPanel"),
        event_bindings={"show": "self.form_show", "hide": "form_hide"},
    )

    assert validator.validate_form_template(template).warnings == []

    result = validator.validate_form_template(
        template, ComponentValidationOptions(validate_event_bindings=True)
    )
    assert result.valid
    assert result.warning_messages() == [
        "Event handler 'form_hide' for 'hide' doesn't follow 'self.' convention"
    ]


@pytest.mark.unit
def test_form_custom_components_downgraded(validator):
    template = FormTemplate(container=Component(type="ColumnPanel", components=[node("Custom")]))

    assert validator.validate_form_template(template).error_messages() == [
        "Unknown component type: Custom"
    ]

    result = validator.validate_form_template(
        template, ComponentValidationOptions(allow_custom_components=True)
    )
    assert result.valid
    assert result.warning_messages() == ["Unknown component type: Custom"]
