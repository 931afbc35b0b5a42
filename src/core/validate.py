"""Diagnostics and validation primitives shared by the parser and the tree builder."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# Validation limits
MAX_TREE_DEPTH = 64
MAX_TREE_NODES = 100_000


class Severity(str, Enum):
    """Diagnostic severity. Errors block acceptance, warnings never do."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """A located validation message."""

    message: str
    severity: Severity = Severity.ERROR
    file: str | None = None
    line: int | None = None
    column: int | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def __str__(self) -> str:
        if self.file is None:
            return self.message
        location = self.file
        if self.line is not None:
            location = f"{location}:{self.line}"
            if self.column is not None:
                location = f"{location}:{self.column}"
        return f"{location}: {self.message}"


def error(message: str, **location: Any) -> Diagnostic:
    """Build an error diagnostic."""
    return Diagnostic(message, Severity.ERROR, **location)


def warning(message: str, **location: Any) -> Diagnostic:
    """Build a warning diagnostic."""
    return Diagnostic(message, Severity.WARNING, **location)


@dataclass
class ValidationResult:
    """Errors and warnings collected for one document or tree."""

    errors: list[Diagnostic] = field(default_factory=list)
    warnings: list[Diagnostic] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def add(self, diagnostic: Diagnostic) -> None:
        if diagnostic.is_error:
            self.errors.append(diagnostic)
        else:
            self.warnings.append(diagnostic)

    def extend(self, diagnostics: list[Diagnostic]) -> None:
        for diagnostic in diagnostics:
            self.add(diagnostic)

    def error_messages(self) -> list[str]:
        return [d.message for d in self.errors]

    def warning_messages(self) -> list[str]:
        return [d.message for d in self.warnings]


class ValidationError(Exception):
    """A component node failed validation."""

    def __init__(self, message: str, diagnostics: list[Diagnostic] | None = None) -> None:
        super().__init__(message)
        self.diagnostics = diagnostics or [error(message)]


class ResolutionFailure(ValidationError):
    """A builtin component type is not registered."""

    def __init__(self, type_name: str) -> None:
        super().__init__(f"Unknown component type: {type_name}")
        self.type_name = type_name


def validate_tree_depth(
    obj: Any,
    max_depth: int = MAX_TREE_DEPTH,
    current_depth: int = 0,
    max_nodes: int = MAX_TREE_NODES,
) -> None:
    """
    Validate nesting depth and expanded size of parsed YAML.

    YAML aliases share one object between several places in the document.
    Each shared collection is measured once; its height and expanded size are
    reused wherever it appears again. Self-referencing aliases produce cyclic
    structures and are reported as exceeding the depth limit.

    Args:
        obj: Object to validate
        max_depth: Maximum allowed nesting depth
        current_depth: Depth of obj within its document
        max_nodes: Maximum number of values once aliases are expanded

    Raises:
        ValidationError: If depth or expanded size exceeds its limit
    """
    measured: dict[int, tuple[int, int]] = {}
    on_path: set[int] = set()

    def too_deep(depth: int) -> ValidationError:
        return ValidationError(f"Nesting depth {depth} exceeds maximum {max_depth}")

    def measure(node: Any, depth: int) -> tuple[int, int]:
        # Returns (height, expanded size) of node
        if depth > max_depth:
            raise too_deep(depth)

        if isinstance(node, dict):
            children = node.values()
        elif isinstance(node, list):
            children = node
        else:
            return 0, 1

        key = id(node)
        if key in measured:
            height, size = measured[key]
            if depth + height > max_depth:
                raise too_deep(depth + height)
            return height, size
        if key in on_path:
            raise too_deep(max_depth + 1)

        on_path.add(key)
        height, size = 0, 1
        for child in children:
            child_height, child_size = measure(child, depth + 1)
            height = max(height, child_height + 1)
            size += child_size
            if size > max_nodes:
                raise ValidationError(f"Document expands to more than {max_nodes} values")
        on_path.discard(key)

        measured[key] = (height, size)
        return height, size

    measure(obj, current_depth)
