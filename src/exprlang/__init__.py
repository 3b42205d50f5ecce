"""exprlang: a tokenizer and single-pass expression evaluator for numbers and strings."""

from exprlang.errors import (
    ArithmeticFault,
    DiagnosticSink,
    ErrorKind,
    ErrorPolicy,
    ExprError,
    ExprSyntaxError,
    InvalidCharacterError,
    RecoverableError,
    TypeMismatchError,
    UndefinedVariableError,
    UnterminatedLiteralError,
)
from exprlang.lexer import FunctionLiteral, Lexer, Token, TokenType
from exprlang.evaluator import Evaluator, EvaluatorOptions, Number, Text, Value

__version__ = "0.1.0"

__all__ = [
    "ArithmeticFault",
    "DiagnosticSink",
    "ErrorKind",
    "ErrorPolicy",
    "ExprError",
    "ExprSyntaxError",
    "InvalidCharacterError",
    "RecoverableError",
    "TypeMismatchError",
    "UndefinedVariableError",
    "UnterminatedLiteralError",
    "FunctionLiteral",
    "Lexer",
    "Token",
    "TokenType",
    "Evaluator",
    "EvaluatorOptions",
    "Number",
    "Text",
    "Value",
]
