"""Tests for operator dispatch and the runtime value model."""

import math

import pytest

from exprlang.errors import ArithmeticFault, ExprSyntaxError, TypeMismatchError
from exprlang.evaluator.operators import apply_operator, negate
from exprlang.evaluator.values import Number, Text, format_value, to_value
from exprlang.lexer.tokens import Token, TokenType


def op(symbol: str) -> Token:
    return Token(TokenType.OPERATOR, symbol, 1, 1)


class TestApplyOperator:
    @pytest.mark.parametrize(
        ("symbol", "expected"),
        [("+", 8.0), ("-", 4.0), ("*", 12.0), ("/", 3.0), ("%", 0.0), ("^", 36.0)],
    )
    def test_numeric(self, symbol, expected):
        assert apply_operator(Number(6.0), op(symbol), Number(2.0)) == Number(expected)

    def test_concatenation(self):
        assert apply_operator(Text("foo"), op("+"), Text("bar")) == Text("foobar")

    @pytest.mark.parametrize("symbol", ["-", "*", "/", "%", "^"])
    def test_strings_only_support_plus(self, symbol):
        with pytest.raises(TypeMismatchError):
            apply_operator(Text("a"), op(symbol), Text("b"))

    def test_mixed_operands(self):
        with pytest.raises(TypeMismatchError, match="number and string"):
            apply_operator(Number(1.0), op("+"), Text("b"))

    def test_unknown_operator(self):
        with pytest.raises(ExprSyntaxError, match="Unknown binary operator '@'"):
            apply_operator(Number(1.0), op("@"), Number(2.0))

    def test_division_by_zero_is_an_error(self):
        with pytest.raises(ArithmeticFault):
            apply_operator(Number(1.0), op("/"), Number(0.0))

    def test_negative_base_fractional_power(self):
        with pytest.raises(ArithmeticFault):
            apply_operator(Number(-8.0), op("^"), Number(0.5))

    def test_overflow_to_infinity_in_multiplication(self):
        result = apply_operator(Number(1e308), op("*"), Number(10.0))
        assert math.isinf(result.value)

    def test_error_carries_operator_position(self):
        token = Token(TokenType.OPERATOR, "-", 3, 7, "calc.txt")
        with pytest.raises(TypeMismatchError) as exc_info:
            apply_operator(Text("a"), token, Number(1.0))
        assert str(exc_info.value).startswith("calc.txt:3:7: ")


class TestNegate:
    def test_number(self):
        assert negate(Number(2.5), op("-")) == Number(-2.5)

    def test_text(self):
        with pytest.raises(TypeMismatchError):
            negate(Text("a"), op("-"))


class TestValues:
    def test_to_value(self):
        assert to_value(3) == Number(3.0)
        assert to_value(1.5) == Number(1.5)
        assert to_value("s") == Text("s")
        assert to_value(Text("t")) == Text("t")

    @pytest.mark.parametrize("obj", [True, None, [1], {"a": 1}])
    def test_to_value_rejects(self, obj):
        with pytest.raises(TypeError):
            to_value(obj)

    def test_format_integral_number(self):
        assert format_value(Number(11.0)) == "11"

    def test_format_fraction(self):
        assert format_value(Number(0.25)) == "0.25"

    def test_format_text_is_quoted(self):
        assert format_value(Text("abcd")) == '"abcd"'

    def test_str_of_text_is_raw(self):
        assert str(Text("abcd")) == "abcd"

    def test_values_are_immutable(self):
        value = Number(1.0)
        with pytest.raises(AttributeError):
            value.value = 2.0
