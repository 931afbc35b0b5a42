"""Whole-application loading from an Anvil app directory."""

import dataclasses
from pathlib import Path

from pydantic import Field

from core import LogContext, SchemaError, Settings, get_logger
from core.validate import Diagnostic, error
from .models import (
    AppConfig,
    AppMetadata,
    ComponentValidationOptions,
    FormTemplate,
    Record,
    RuntimeOptions,
    Theme,
)
from .parser import APP_CONFIG_FILE, FORM_TEMPLATE_FILE, THEME_FILE, AnvilYamlParser

logger = get_logger(__name__)

CLIENT_CODE_DIR = "client_code"

FALLBACK_CONFIG = AppConfig(
    package_name="Unknown",
    name="Unknown App",
    runtime_options=RuntimeOptions(version="1.0"),
    metadata=AppMetadata(title="Unknown App"),
)


class AppBundle(Record):
    """Everything parsed from one app directory."""

    config: AppConfig
    forms: dict[str, FormTemplate] = Field(default_factory=dict)
    theme: Theme | None = None
    errors: list[Diagnostic] = Field(default_factory=list)
    warnings: list[Diagnostic] = Field(default_factory=list)


def options_from_settings(settings: Settings) -> ComponentValidationOptions:
    """Form validation switches configured for whole-app loads"""
    return ComponentValidationOptions(
        allow_custom_components=settings.allow_custom_components,
        validate_event_bindings=settings.validate_event_bindings,
        validate_data_bindings=settings.validate_data_bindings,
    )


def _failure(path: str, exc: Exception) -> Diagnostic:
    if isinstance(exc, SchemaError):
        return exc.relocated(path).diagnostic
    if isinstance(exc, (OSError, UnicodeDecodeError)):
        return error(str(exc), file=path)
    return error(f"Unexpected {type(exc).__name__}: {exc}", file=path)


def load_app(
    app_path: str | Path,
    parser: AnvilYamlParser,
    options: ComponentValidationOptions | None = None,
) -> AppBundle:
    """
    Parse anvil.yaml, the optional theme and every form template of an app.

    A file that cannot be read or parsed becomes a diagnostic for that file;
    sibling files are still loaded.

    Args:
        app_path: App root directory
        parser: Parser wired with a component validator
        options: Form validation switches

    Returns:
        AppBundle with whatever could be parsed
    """
    root = Path(app_path)
    options = options or ComponentValidationOptions(
        allow_custom_components=True,
        validate_event_bindings=True,
        validate_data_bindings=True,
    )
    errors: list[Diagnostic] = []
    warnings: list[Diagnostic] = []

    with LogContext(app=root.name):
        try:
            config = parser.parse_app_config((root / APP_CONFIG_FILE).read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, SchemaError) as e:
            logger.error("app_config_failed", error=str(e))
            errors.append(_failure(APP_CONFIG_FILE, e))
            # Partial result: forms and theme are skipped without a config
            return AppBundle(config=FALLBACK_CONFIG, errors=errors)
        except Exception as e:
            logger.error("app_config_crashed", error=str(e), exc_info=True)
            errors.append(_failure(APP_CONFIG_FILE, e))
            return AppBundle(config=FALLBACK_CONFIG, errors=errors)

        theme = None
        theme_path = root / THEME_FILE
        if theme_path.is_file():
            try:
                theme = parser.parse_theme(theme_path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, SchemaError) as e:
                logger.warning("theme_failed", error=str(e))
                errors.append(_failure(THEME_FILE, e))
            except Exception as e:
                logger.error("theme_crashed", error=str(e), exc_info=True)
                errors.append(_failure(THEME_FILE, e))
        else:
            logger.debug("theme_missing", path=str(theme_path))

        forms: dict[str, FormTemplate] = {}
        client_code = root / CLIENT_CODE_DIR
        if not client_code.is_dir():
            errors.append(error("client_code directory not found", file=CLIENT_CODE_DIR))
        else:
            for template_path in sorted(client_code.rglob(FORM_TEMPLATE_FILE)):
                form_dir = template_path.parent.relative_to(client_code)
                form_name = ".".join(form_dir.parts)
                relative = template_path.relative_to(root).as_posix()
                with LogContext(form=form_name):
                    try:
                        result = parser.parse_form_template(
                            template_path.read_text(encoding="utf-8"), options
                        )
                    except (OSError, UnicodeDecodeError, SchemaError) as e:
                        logger.warning("form_failed", error=str(e))
                        errors.append(_failure(relative, e))
                        continue
                    except Exception as e:
                        logger.error("form_crashed", error=str(e), exc_info=True)
                        errors.append(_failure(relative, e))
                        continue
                forms[form_name] = result.template
                warnings.extend(dataclasses.replace(w, file=relative) for w in result.warnings)

    logger.info("app_loaded", app=config.name, forms=len(forms), errors=len(errors))
    return AppBundle(config=config, forms=forms, theme=theme, errors=errors, warnings=warnings)
