"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .validate import (
    Diagnostic,
    ResolutionFailure,
    Severity,
    ValidationError,
    ValidationResult,
    validate_tree_depth,
)
from .logging_config import configure_logging, get_logger, LogContext
from .yaml_loader import SchemaError, load_yaml_mapping
from .json import safe_json_dumps


def create_container(dispatcher=None, settings=None, configure=True):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(dispatcher=dispatcher, settings=settings, configure=configure)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Validation
    "Diagnostic",
    "ResolutionFailure",
    "Severity",
    "ValidationError",
    "ValidationResult",
    "validate_tree_depth",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # YAML
    "SchemaError",
    "load_yaml_mapping",
    # JSON
    "safe_json_dumps",
    # DI
    "create_container",
]
