"""App directory loader tests."""

import textwrap

import pytest

from core import Settings, Severity
from schema import AnvilYamlParser, load_app, options_from_settings
from schema.loader import FALLBACK_CONFIG


def write(path, content):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content), encoding="utf-8")


@pytest.mark.unit
def test_load_app(app_dir, parser):
    bundle = load_app(app_dir, parser)

    assert bundle.errors == []
    assert bundle.config.name == "Todo"
    assert bundle.config.startup_form == "Main"
    assert sorted(bundle.forms) == ["Items.Row", "Main"]
    assert bundle.forms["Items.Row"].container.type == "DataRowPanel"
    assert bundle.theme.assets.css == ["theme.css"]


@pytest.mark.unit
def test_warnings_located(app_dir, parser):
    """Test form warnings carry the template's path."""
    bundle = load_app(app_dir, parser)

    assert len(bundle.warnings) == 1
    warning = bundle.warnings[0]
    assert warning.severity is Severity.WARNING
    assert warning.file == "client_code/Main/form_template.yaml"
    assert "form_show" in warning.message


@pytest.mark.unit
def test_broken_form_isolated(app_dir, parser):
    write(app_dir / "client_code" / "Broken" / "form_template.yaml", "container: [oops")

    bundle = load_app(app_dir, parser)

    assert sorted(bundle.forms) == ["Items.Row", "Main"]
    assert len(bundle.errors) == 1
    assert bundle.errors[0].file == "client_code/Broken/form_template.yaml"
    assert bundle.errors[0].line is not None


@pytest.mark.unit
def test_invalid_form_reports_validation(app_dir, parser):
    write(app_dir / "client_code" / "Bad" / "form_template.yaml", """
        components:
          - {name: b, type: Button, properties: {text: 5}}
    """)

    bundle = load_app(app_dir, parser)

    assert "Bad" not in bundle.forms
    assert "text property must be a string" in bundle.errors[0].message


@pytest.mark.unit
def test_invalid_event_binding_keeps_forms(app_dir, parser):
    write(app_dir / "client_code" / "Main" / "form_template.yaml", """
        components:
          - {name: title, type: Label}
        event_bindings:
          click: 42
    """)

    bundle = load_app(app_dir, parser)

    assert bundle.errors == []
    assert sorted(bundle.forms) == ["Items.Row", "Main"]
    assert bundle.forms["Main"].event_bindings == {}
    assert [w.file for w in bundle.warnings] == ["client_code/Main/form_template.yaml"]
    assert "Invalid event binding for 'click'" in bundle.warnings[0].message


class CrashingParser(AnvilYamlParser):
    """Raises an unexpected exception for templates mentioning a crash marker."""

    def parse_form_template(self, text, options=None):
        if "crash-here" in text:
            raise KeyError("crash-here")
        return super().parse_form_template(text, options)

    def parse_app_config(self, text):
        if "crash-here" in text:
            raise ValueError("bad config")
        return super().parse_app_config(text)

    def parse_theme(self, text):
        if "crash-here" in text:
            raise TypeError("bad theme")
        return super().parse_theme(text)


@pytest.mark.unit
def test_unexpected_form_failure_isolated(app_dir, validator):
    write(app_dir / "client_code" / "Odd" / "form_template.yaml", "# crash-here\ncomponents: []\n")

    bundle = load_app(app_dir, CrashingParser(validator=validator))

    assert sorted(bundle.forms) == ["Items.Row", "Main"]
    assert len(bundle.errors) == 1
    assert bundle.errors[0].file == "client_code/Odd/form_template.yaml"
    assert bundle.errors[0].message.startswith("Unexpected KeyError")


@pytest.mark.unit
def test_unexpected_theme_failure_isolated(app_dir, validator):
    write(app_dir / "theme" / "parameters.yaml", "# crash-here\nroles: {}\n")

    bundle = load_app(app_dir, CrashingParser(validator=validator))

    assert bundle.theme is None
    assert [e.file for e in bundle.errors] == ["theme/parameters.yaml"]
    assert "Unexpected TypeError: bad theme" in bundle.errors[0].message
    assert len(bundle.forms) == 2


@pytest.mark.unit
def test_unexpected_app_config_failure_reported(app_dir, validator):
    write(app_dir / "anvil.yaml", "# crash-here\nname: Todo\n")

    bundle = load_app(app_dir, CrashingParser(validator=validator))

    assert bundle.config == FALLBACK_CONFIG
    assert [e.message for e in bundle.errors] == ["Unexpected ValueError: bad config"]
    assert bundle.errors[0].file == "anvil.yaml"


@pytest.mark.unit
def test_missing_app_config(tmp_path, parser):
    bundle = load_app(tmp_path, parser)

    assert bundle.config == FALLBACK_CONFIG
    assert bundle.forms == {}
    assert bundle.errors[0].file == "anvil.yaml"


@pytest.mark.unit
def test_missing_client_code(tmp_path, parser):
    write(tmp_path / "anvil.yaml", "name: Empty")

    bundle = load_app(tmp_path, parser)

    assert bundle.config.name == "Empty"
    assert bundle.theme is None
    assert [e.message for e in bundle.errors] == ["client_code directory not found"]


@pytest.mark.unit
def test_broken_theme_reported(app_dir, parser):
    write(app_dir / "theme" / "parameters.yaml", "- not a mapping")

    bundle = load_app(app_dir, parser)

    assert bundle.theme is None
    assert bundle.errors[0].file == "theme/parameters.yaml"
    assert len(bundle.forms) == 2


@pytest.mark.unit
def test_options_from_settings():
    options = options_from_settings(Settings(allow_custom_components=False))
    assert options.allow_custom_components is False
    assert options.validate_event_bindings is True
