"""YAML loading with located errors."""

from typing import Any

import yaml

from .validate import (
    MAX_TREE_DEPTH,
    Diagnostic,
    ValidationError,
    error,
    validate_tree_depth,
)


class SchemaError(Exception):
    """A YAML document is syntactically or structurally invalid."""

    def __init__(
        self,
        file: str,
        message: str,
        line: int | None = None,
        column: int | None = None,
        original: Exception | None = None,
        diagnostics: list[Diagnostic] | None = None,
    ) -> None:
        super().__init__(f"{file}: {message}")
        self.file = file
        self.message = message
        self.line = line
        self.column = column
        self.original = original
        self.diagnostics = diagnostics or []

    @property
    def diagnostic(self) -> Diagnostic:
        """Single located diagnostic for this failure."""
        return error(self.message, file=self.file, line=self.line, column=self.column)

    def relocated(self, file: str) -> "SchemaError":
        """Same failure attributed to another file path."""
        return SchemaError(
            file,
            self.message,
            line=self.line,
            column=self.column,
            original=self.original,
            diagnostics=self.diagnostics,
        )


def load_yaml_mapping(text: str, filename: str, max_depth: int = MAX_TREE_DEPTH) -> dict[str, Any]:
    """
    Parse YAML text that must hold a mapping at the top level.

    Args:
        text: YAML document
        filename: Name reported in errors
        max_depth: Maximum nesting depth accepted

    Returns:
        Parsed mapping

    Raises:
        SchemaError: On syntax errors, non-mapping documents or excessive nesting
    """
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None) or getattr(e, "context_mark", None)
        raise SchemaError(
            filename,
            f"Invalid YAML: {e}",
            line=mark.line + 1 if mark is not None else None,
            column=mark.column + 1 if mark is not None else None,
            original=e,
        ) from e

    if not isinstance(parsed, dict):
        raise SchemaError(
            filename, f"Expected a mapping at the top level, got {type(parsed).__name__}"
        )

    try:
        validate_tree_depth(parsed, max_depth)
    except ValidationError as e:
        raise SchemaError(filename, str(e), original=e) from e

    return parsed
