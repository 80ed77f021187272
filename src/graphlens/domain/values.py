"""Typed values returned by the embedded graph engine.

``Value`` is a closed union. Code that inspects a value matches on every
member and ends in ``assert_never`` so a new engine value kind shows up
as a type error at each inspection site rather than a silent fallthrough.

Fixed-width engine integers (int8..int64) collapse to ``IntValue`` and
float32/float64 collapse to ``FloatValue``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, assert_never


@dataclass(frozen=True)
class InternalId:
    """Engine address of one stored entity instance."""

    table_id: int
    offset: int

    def __str__(self) -> str:
        return f"{self.table_id}:{self.offset}"


@dataclass(frozen=True)
class StringValue:
    value: str


@dataclass(frozen=True)
class IntValue:
    value: int


@dataclass(frozen=True)
class FloatValue:
    value: float


@dataclass(frozen=True)
class BoolValue:
    value: bool


@dataclass(frozen=True)
class IdValue:
    value: InternalId


@dataclass(frozen=True)
class NodeValue:
    """A node instance: id, label, and properties in engine order.

    Property keys may repeat; lookups take the first match.
    """

    id: InternalId
    label: str
    properties: tuple[tuple[str, Value], ...] = field(default_factory=tuple)

    def get(self, key: str) -> Value | None:
        """Return the first property value stored under *key*."""
        for name, value in self.properties:
            if name == key:
                return value
        return None


@dataclass(frozen=True)
class RelValue:
    """A relationship instance between two node ids."""

    label: str
    src: InternalId
    dst: InternalId


@dataclass(frozen=True)
class OtherValue:
    """Any engine value without a dedicated variant (lists, maps, dates, NULL)."""

    raw: Any = None


type Value = (
    StringValue
    | IntValue
    | FloatValue
    | BoolValue
    | IdValue
    | NodeValue
    | RelValue
    | OtherValue
)

type Row = list[Value]


def _float_text(number: float) -> str:
    """Shortest round-trip digits, always positional (no exponent)."""
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    text = format(Decimal(repr(number)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text

def display_text(value: Value) -> str:
    """Render a value as display text for node names.

    Examples:
        >>> display_text(StringValue("Ada"))
        'Ada'
        >>> display_text(BoolValue(True))
        'true'
        >>> display_text(FloatValue(3.0))
        '3'
    """
    match value:
        case StringValue(value=text):
            return text
        case BoolValue(value=flag):
            return "true" if flag else "false"
        case IntValue(value=number):
            return str(number)
        case FloatValue(value=number):
            return _float_text(number)
        case IdValue(value=internal_id):
            return str(internal_id)
        case NodeValue(id=internal_id, label=label):
            return f"{label}({internal_id})"
        case RelValue(label=label, src=src, dst=dst):
            return f"({src})-[{label}]->({dst})"
        case OtherValue(raw=raw):
            return "" if raw is None else str(raw)
        case _:
            assert_never(value)
