"""Dynamic property values.

Property bags hold whatever the YAML document contained: strings, numbers,
booleans, null, lists and string-keyed mappings. Validators and the property
mapper classify values through these helpers rather than by duck typing.
"""

from enum import Enum
from typing import Any, Mapping


class ValueKind(str, Enum):
    """Closed set of value shapes found in property bags."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    LIST = "list"
    MAPPING = "mapping"
    OTHER = "other"  # dates, timestamps and other YAML-native scalars


def value_kind(value: Any) -> ValueKind:
    """Classify a dynamic value."""
    if value is None:
        return ValueKind.NULL
    # bool before number: bool is an int subclass
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.LIST
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    return ValueKind.OTHER


def is_string(value: Any) -> bool:
    return value_kind(value) is ValueKind.STRING


def is_number(value: Any) -> bool:
    return value_kind(value) is ValueKind.NUMBER


def is_bool(value: Any) -> bool:
    return value_kind(value) is ValueKind.BOOL


def is_list(value: Any) -> bool:
    return value_kind(value) is ValueKind.LIST


def is_mapping(value: Any) -> bool:
    return value_kind(value) is ValueKind.MAPPING


def is_present(props: Mapping[str, Any], key: str) -> bool:
    """True when the key is set to a non-null value."""
    return props.get(key) is not None


def as_mapping(value: Any) -> dict[str, Any]:
    """Return value as a plain dict, or an empty dict for any other shape."""
    if is_mapping(value):
        return {str(k): v for k, v in value.items()}
    return {}


def as_list(value: Any) -> list[Any]:
    """Return value as a list, or an empty list for any other shape."""
    if is_list(value):
        return list(value)
    return []


def as_str(value: Any, default: str = "") -> str:
    """Return a string for scalar values, default for null/empty/containers."""
    kind = value_kind(value)
    if kind is ValueKind.STRING:
        return value or default
    if kind in (ValueKind.NUMBER, ValueKind.BOOL, ValueKind.OTHER):
        return str(value)
    return default


def format_number(value: int | float) -> str:
    """Render a number without a trailing '.0' for integral floats."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
