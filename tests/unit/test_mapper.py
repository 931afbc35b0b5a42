"""Property mapper tests."""

import pytest
from hypothesis import given, strategies as st

from components import ComponentDefinition, PropertyMapper, normalize_size, normalize_spacing
from events import EventSubscription


# ============================================================================
# Domain properties
# ============================================================================

@pytest.mark.unit
def test_mapping_renames_and_defaults(registry, mapper):
    props = mapper.map_props({"text": "Hi", "foreground": "red"}, registry.get_definition("Label"))

    assert props == {"align": "left", "text": "Hi", "color": "red"}


@pytest.mark.unit
def test_unmapped_keys_dropped(registry, mapper):
    props = mapper.map_props({"text": "Hi", "tooltip": "ignored"}, registry.get_definition("Label"))
    assert "tooltip" not in props


@pytest.mark.unit
def test_no_mapping_copies_verbatim(mapper):
    definition = ComponentDefinition(backend_ref="Raw", default_properties={"a": 1, "b": 2})
    props = mapper.map_props({"b": 3, "anything": [1, 2]}, definition)

    assert props == {"a": 1, "b": 3, "anything": [1, 2]}


@pytest.mark.unit
def test_transform_applied(registry, mapper):
    props = mapper.map_props({"hide_text": True}, registry.get_definition("TextBox"))
    assert props["type"] == "password"


@pytest.mark.unit
def test_defaults_not_shared(registry, mapper):
    """Test mutating one node's props never leaks into the definition."""
    definition = registry.get_definition("DropDown")
    first = mapper.map_props({}, definition)
    first["items"].append("leak")

    assert mapper.map_props({}, definition)["items"] == []


@pytest.mark.unit
def test_event_key_binds_subscription(registry, mapper, dispatcher):
    props = mapper.map_props(
        {"text": "Save", "click": True},
        registry.get_definition("Button"),
        component_type="Button",
        component_name="save",
        form_name="Main",
    )

    handler = props["on_click"]
    assert isinstance(handler, EventSubscription)
    assert dispatcher.sent == []

    handler({"x": 1})

    assert len(dispatcher.sent) == 1
    event = dispatcher.sent[0]
    assert event.key == ("click", "Button", "save", "Main")
    assert event.event_data == {"x": 1}


@pytest.mark.unit
@pytest.mark.parametrize("key", ["click", "change", "submit", "focus", "blur", "hover", "select"])
def test_event_keys(key):
    assert PropertyMapper.is_event_key(key)


@pytest.mark.unit
def test_non_event_key():
    assert not PropertyMapper.is_event_key("text")


# ============================================================================
# Layout properties
# ============================================================================

@pytest.mark.unit
def test_layout_sizes():
    layout = PropertyMapper.map_layout_props({"width": 100, "height": "50%"})
    assert layout == {"width": "100px", "height": "50%"}


@pytest.mark.unit
def test_layout_unusable_values_omitted():
    layout = PropertyMapper.map_layout_props({"width": [1], "height": None, "margin": {"a": 1}})
    assert layout == {}


@pytest.mark.unit
def test_layout_spacing():
    layout = PropertyMapper.map_layout_props({"margin": 8, "padding": [4, "1em", None]})
    assert layout == {"margin": "8px", "padding": "4px 1em auto"}


@pytest.mark.unit
def test_layout_alignment_grid_flex():
    layout = PropertyMapper.map_layout_props({
        "align": "center",
        "row": 2,
        "col": 1,
        "col_span": 3,
        "row_span": 2,
        "flex_grow": 1,
        "flex_shrink": 0,
    })

    assert layout == {
        "text_align": "center",
        "grid_row": 2,
        "grid_column": 1,
        "grid_column_end": "span 3",
        "grid_row_end": "span 2",
        "flex_grow": 1,
        "flex_shrink": 0,
    }


@pytest.mark.unit
def test_layout_absent_keys_never_defaulted():
    assert PropertyMapper.map_layout_props({}) == {}
    assert PropertyMapper.map_layout_props(None) == {}
    assert PropertyMapper.map_layout_props({"unknown": 1}) == {}


@pytest.mark.unit
def test_normalize_size():
    assert normalize_size(12.0) == "12px"
    assert normalize_size(1.5) == "1.5px"
    assert normalize_size("auto") == "auto"
    assert normalize_size(True) is None
    assert normalize_size(None) is None


@pytest.mark.unit
@given(value=st.integers(min_value=-10_000, max_value=10_000))
def test_integer_sizes_property(value):
    """Property: integers always render as pixel sizes."""
    assert normalize_size(value) == f"{value}px"
    assert normalize_spacing([value, value]) == f"{value}px {value}px"
