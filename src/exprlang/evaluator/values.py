"""Runtime values: every expression evaluates to a Number or a Text."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Number:
    value: float

    def __str__(self) -> str:
        if self.value.is_integer():
            return str(int(self.value))
        return repr(self.value)


@dataclass(frozen=True, slots=True)
class Text:
    value: str

    def __str__(self) -> str:
        return self.value


Value = Number | Text

# Substituted for a sub-result whose error was collected rather than raised.
# It is a Text, so feeding it to a numeric operator collects a follow-on
# TYPE_MISMATCH as well: "1 + ;" records a SYNTAX and a TYPE_MISMATCH error.
PLACEHOLDER = Text("")


def to_value(obj: object) -> Value:
    """Convert a host Python object into a runtime value.

    Accepts `Number`/`Text` unchanged, ``int``/``float`` as Number and
    ``str`` as Text.  Anything else (``bool`` included) is a TypeError.
    """
    if isinstance(obj, (Number, Text)):
        return obj
    if isinstance(obj, bool):
        raise TypeError("bool is not an exprlang value")
    if isinstance(obj, (int, float)):
        return Number(float(obj))
    if isinstance(obj, str):
        return Text(obj)
    raise TypeError(f"Cannot convert {type(obj).__name__} to an exprlang value")


def format_value(value: Value) -> str:
    """Render a value for display: strings quoted, integral numbers without '.0'."""
    if isinstance(value, Text):
        return f'"{value.value}"'
    return str(value)


def type_name(value: Value) -> str:
    return "number" if isinstance(value, Number) else "string"
