"""Dependency injection wiring tests."""

import pytest

from components import ComponentFactory, ComponentRegistry, ComponentValidator, PropertyMapper
from core import Settings
from events import EventDispatcher
from schema import AnvilYamlParser


@pytest.mark.unit
def test_singletons(di_container):
    assert di_container.get(ComponentFactory) is di_container.get(ComponentFactory)
    assert di_container.get(ComponentRegistry) is di_container.get(ComponentRegistry)


@pytest.mark.unit
def test_parser_shares_validator(di_container):
    parser = di_container.get(AnvilYamlParser)
    assert parser.validator is di_container.get(ComponentValidator)
    assert parser.validator.registry is di_container.get(ComponentRegistry)


@pytest.mark.unit
def test_dispatcher_injected(di_container, dispatcher):
    assert di_container.get(EventDispatcher) is dispatcher
    assert di_container.get(PropertyMapper).dispatcher is dispatcher


@pytest.mark.unit
def test_settings_flow_into_components(dispatcher):
    from core import create_container

    settings = Settings(debug=True, max_tree_depth=7, validate_components=False)
    container = create_container(dispatcher=dispatcher, settings=settings, configure=False)

    factory = container.get(ComponentFactory)
    assert factory.options.debug is True
    assert factory.options.max_depth == 7
    assert factory.options.validate_components is False
    assert container.get(AnvilYamlParser).max_depth == 7


@pytest.mark.unit
def test_end_to_end(di_container, dispatcher):
    """Test parse, build and dispatch through the wired container."""
    parser = di_container.get(AnvilYamlParser)
    factory = di_container.get(ComponentFactory)

    template = parser.parse_form_template(
        "container: {type: ColumnPanel}\n"
        "components:\n"
        "  - {name: go, type: Button, properties: {text: Go, click: true}}\n"
    ).template
    result = factory.create_form(template, form_name="Main")

    assert result.ok
    result.root.children[0].props["on_click"]({"n": 1})
    assert dispatcher.sent[0].key == ("click", "Button", "go", "Main")
