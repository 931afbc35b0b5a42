"""Pytest configuration and fixtures."""

import os
import textwrap
from pathlib import Path

import pytest

from components import (
    ComponentFactory,
    ComponentValidator,
    FactoryOptions,
    PropertyMapper,
    RegistryBuilder,
    register_builtin_components,
)
from core import Settings, create_container
from events import QueuedEventBridge
from schema import AnvilYamlParser, ComponentValidationOptions


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["ANVIL_LOG_LEVEL"] = "DEBUG"
    os.environ["ANVIL_DEBUG"] = "false"


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings."""
    return Settings(log_level="DEBUG")


@pytest.fixture
def di_container(settings, dispatcher):
    """Dependency injection container for testing."""
    return create_container(dispatcher=dispatcher, settings=settings, configure=False)


# ============================================================================
# Component Fixtures
# ============================================================================

@pytest.fixture
def registry():
    """Registry with every builtin component."""
    builder = RegistryBuilder()
    register_builtin_components(builder)
    return builder.build()


@pytest.fixture
def validator(registry):
    return ComponentValidator(registry)


@pytest.fixture
def dispatcher():
    """In-memory event bridge that records outbound events."""
    return QueuedEventBridge()


@pytest.fixture
def mapper(dispatcher):
    return PropertyMapper(dispatcher)


@pytest.fixture
def factory(registry, validator, mapper):
    """Tree factory with validation enabled."""
    return ComponentFactory(registry, validator, mapper, FactoryOptions())


@pytest.fixture
def debug_factory(registry, validator, mapper):
    return ComponentFactory(registry, validator, mapper, FactoryOptions(debug=True))


# ============================================================================
# Parser Fixtures
# ============================================================================

@pytest.fixture
def parser(validator):
    """YAML parser wired with the component validator."""
    return AnvilYamlParser(validator=validator)


@pytest.fixture
def lenient_options():
    """Every form check on, unknown component types downgraded to warnings."""
    return ComponentValidationOptions(
        allow_custom_components=True,
        validate_event_bindings=True,
        validate_data_bindings=True,
    )


# ============================================================================
# App Directory Fixtures
# ============================================================================

def write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content), encoding="utf-8")


@pytest.fixture
def app_dir(tmp_path):
    """Minimal Anvil app on disk: config, theme and two forms."""
    write(tmp_path / "anvil.yaml", """
        name: Todo
        package_name: todo_app
        startup_form: Main
        dependencies:
          - app_id: dep_abc
            version: {dev: false}
    """)
    write(tmp_path / "theme" / "parameters.yaml", """
        roles:
          headline: {font_size: 24}
        assets:
          css: [theme.css]
    """)
    write(tmp_path / "client_code" / "Main" / "form_template.yaml", """
        container:
          type: ColumnPanel
        components:
          - name: title
            type: Label
            properties: {text: Todo}
          - name: add
            type: Button
            properties: {text: Add, click: true}
        event_bindings:
          show: form_show
    """)
    write(tmp_path / "client_code" / "Items" / "Row" / "form_template.yaml", """
        container:
          type: DataRowPanel
          components:
            - name: done
              type: CheckBox
              properties: {checked: false}
    """)
    return tmp_path
