"""Binary operator dispatch and unary negation over runtime values.

``+`` adds two numbers or concatenates two strings.  ``- * / % ^`` are
numeric only.  Division and modulo by zero are errors rather than IEEE
infinities; ``%`` is the truncated remainder (the sign follows the dividend).
"""

from __future__ import annotations

import math
import operator
from typing import Callable

from exprlang.errors import ArithmeticFault, ExprSyntaxError, TypeMismatchError
from exprlang.evaluator.values import Number, Text, Value, type_name
from exprlang.lexer.tokens import Token

NUMERIC_OPERATORS: dict[str, Callable[[float, float], float]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "%": math.fmod,
    "^": math.pow,
}


def apply_operator(left: Value, op: Token, right: Value) -> Value:
    """Apply the binary operator *op* to two evaluated operands.

    Raises TypeMismatchError for operand types the operator does not accept
    and ArithmeticFault for division by zero, domain errors and overflow.
    """
    if op.value not in NUMERIC_OPERATORS:
        raise ExprSyntaxError(f"Unknown binary operator {op.value!r}", op.line, op.column, op.file)

    if isinstance(left, Number) and isinstance(right, Number):
        return Number(_compute(NUMERIC_OPERATORS[op.value], left.value, op, right.value))

    if op.value == "+" and isinstance(left, Text) and isinstance(right, Text):
        return Text(left.value + right.value)

    raise TypeMismatchError(
        f"Invalid operands for {op.value!r}: {type_name(left)} and {type_name(right)}",
        op.line, op.column, op.file,
    )


def negate(operand: Value, op: Token) -> Number:
    """Unary minus; only numbers can be negated."""
    if not isinstance(operand, Number):
        raise TypeMismatchError(
            f"Unary '-' requires a number, got {type_name(operand)}",
            op.line, op.column, op.file,
        )
    return Number(-operand.value)


def _compute(func: Callable[[float, float], float], left: float, op: Token, right: float) -> float:
    if op.value in ("/", "%") and right == 0:
        raise ArithmeticFault(
            "Division by zero" if op.value == "/" else "Modulo by zero",
            op.line, op.column, op.file,
        )
    try:
        return func(left, right)
    except (ValueError, OverflowError) as e:
        raise ArithmeticFault(f"Cannot evaluate {left!r} {op.value} {right!r}: {e}",
                              op.line, op.column, op.file) from e
