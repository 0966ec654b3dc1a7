"""
values.py

Tagged values for the flat, string keyed response map. The provider payload has
an unknown shape but a known key convention, so every entry carries its kind
alongside the raw value.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from .errors import MalformedDataError


class ValueKind(Enum):
    """Kinds of values found in a flattened response."""

    NUMBER = "number"
    STRING = "string"
    TIMESTAMP = "timestamp"
    NULL = "null"


@dataclass(frozen=True)
class Value:
    """A single response value together with its kind."""

    kind: ValueKind
    raw: Any = None

    @classmethod
    def number(cls, raw) -> "Value":
        return cls(ValueKind.NUMBER, raw)

    @classmethod
    def string(cls, raw: str) -> "Value":
        return cls(ValueKind.STRING, raw)

    @classmethod
    def timestamp(cls, seconds: int) -> "Value":
        return cls(ValueKind.TIMESTAMP, int(seconds))

    @classmethod
    def null(cls) -> "Value":
        return cls(ValueKind.NULL, None)

    @classmethod
    def of(cls, raw) -> "Value":
        """Tag a decoded JSON scalar."""
        if raw is None:
            return cls.null()
        if isinstance(raw, bool):
            return cls.number(int(raw))
        if isinstance(raw, (int, float)):
            return cls.number(raw)
        if isinstance(raw, str):
            return cls.string(raw)
        raise TypeError(f"unsupported scalar type {type(raw).__name__}")

    @property
    def is_null(self) -> bool:
        return self.kind is ValueKind.NULL

    def as_int(self) -> int:
        """
        Returns the value as integer.

        Raises:
            ValueError: if the value is null or not numeric.
        """
        if self.is_null:
            raise ValueError("null value has no integer representation")
        if self.kind is ValueKind.STRING:
            return int(float(self.raw.strip()))
        return int(self.raw)

    def as_float(self) -> float:
        if self.is_null:
            raise ValueError("null value has no numeric representation")
        if self.kind is ValueKind.STRING:
            return float(self.raw.strip())
        return float(self.raw)

    def as_str(self) -> str:
        return "" if self.is_null else str(self.raw)


def flatten_json(payload) -> Dict[str, Value]:
    """
    Flattens a decoded JSON object into a single level map.

    Nested object keys and list indices are joined with an underscore, so
    ``{"data": {"1717250400": [1.2, 3.4]}}`` becomes
    ``data_1717250400_0`` and ``data_1717250400_1``.

    Raises:
        MalformedDataError: if the top level is not a JSON object.
    """
    if not isinstance(payload, dict):
        raise MalformedDataError(
            f"expected a JSON object, got {type(payload).__name__}"
        )
    flat: Dict[str, Value] = {}
    _flatten_into(flat, "", payload)
    return flat


def _flatten_into(flat, prefix, node):
    if isinstance(node, dict):
        children = ((str(key), child) for key, child in node.items())
    elif isinstance(node, list):
        children = ((str(index), child) for index, child in enumerate(node))
    else:
        try:
            flat[prefix] = Value.of(node)
        except TypeError as e:
            raise MalformedDataError(f"unexpected value for '{prefix}': {e}") from e
        return
    for key, child in children:
        _flatten_into(flat, f"{prefix}_{key}" if prefix else key, child)
