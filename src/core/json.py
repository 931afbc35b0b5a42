"""JSON export for assembled component trees."""

from typing import Any
import dataclasses
import json

import orjson


def _default(obj: Any) -> Any:
    """Serialize objects orjson does not know about."""
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    model_dump = getattr(obj, "model_dump", None)
    if callable(model_dump):
        return model_dump(mode="json")
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
    if isinstance(obj, (set, frozenset, tuple)):
        return list(obj)
    # Dates and other YAML scalars
    return str(obj)


def safe_json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode object to JSON string using fastest available library.

    Objects exposing ``to_dict()`` (nodes, event subscriptions) are encoded
    through it.

    Args:
        obj: Object to encode
        **kwargs: Additional arguments (indent, etc.)

    Returns:
        JSON string
    """
    indent = kwargs.get("indent", 0)

    # Use orjson for compact output (fastest)
    if not indent:
        try:
            return orjson.dumps(
                obj, default=_default, option=orjson.OPT_PASSTHROUGH_DATACLASS
            ).decode("utf-8")
        except TypeError:
            # Fallback for edge cases (e.g., integers outside 64-bit range, non-str keys)
            pass

    # Use stdlib for pretty-printed output or as fallback (most compatible)
    return json.dumps(obj, indent=indent or None, default=_default)
