"""Error taxonomy shared by the exprlang lexer and evaluator.

Two families of errors exist:

- Recoverable errors (syntax, type mismatch, unterminated literal,
  arithmetic) are handed to a `DiagnosticSink`.  Depending on the sink's
  policy they are raised straight away or collected so the evaluator can
  substitute a placeholder value and keep going.
- Fatal errors (undefined variable, invalid character) are always raised.
"""

from __future__ import annotations

import logging
from enum import Enum, auto

logger = logging.getLogger(__name__)


class ErrorKind(Enum):
    """Machine-readable category of an exprlang error."""

    SYNTAX = auto()
    TYPE_MISMATCH = auto()
    UNTERMINATED_LITERAL = auto()
    ARITHMETIC = auto()
    UNDEFINED_VARIABLE = auto()
    INVALID_CHARACTER = auto()


class ErrorPolicy(Enum):
    """What a `DiagnosticSink` does with a recoverable error."""

    RAISE = auto()      # Raise immediately
    COLLECT = auto()    # Record it and let the caller substitute a placeholder


class ExprError(Exception):
    """Base class for every error raised by exprlang, with source location."""

    kind: ErrorKind

    def __init__(self, message: str, line: int, column: int, file: str = "<input>"):
        self.message = message
        self.line = line
        self.column = column
        self.file = file
        super().__init__(f"{file}:{line}:{column}: {message}")


class RecoverableError(ExprError):
    """An error the evaluator can step over when collecting diagnostics."""


class ExprSyntaxError(RecoverableError):
    kind = ErrorKind.SYNTAX


class TypeMismatchError(RecoverableError):
    kind = ErrorKind.TYPE_MISMATCH


class UnterminatedLiteralError(RecoverableError):
    kind = ErrorKind.UNTERMINATED_LITERAL


class ArithmeticFault(RecoverableError):
    """Division or modulo by zero, a math domain error, or overflow."""

    kind = ErrorKind.ARITHMETIC


class UndefinedVariableError(ExprError):
    """Raised when an identifier has no binding in the variable table."""

    kind = ErrorKind.UNDEFINED_VARIABLE

    def __init__(self, name: str, line: int, column: int, file: str = "<input>"):
        self.name = name
        super().__init__(f"Undefined variable {name!r}", line, column, file)


class InvalidCharacterError(ExprError):
    """Raised when the lexer meets a character it has no rule for."""

    kind = ErrorKind.INVALID_CHARACTER

    def __init__(self, character: str, line: int, column: int, file: str = "<input>"):
        self.character = character
        super().__init__(f"Invalid character {character!r}", line, column, file)


class DiagnosticSink:
    """Receives recoverable errors and applies an `ErrorPolicy` to them.

    Usage::

        sink = DiagnosticSink(ErrorPolicy.COLLECT)
        sink.report(TypeMismatchError("bad operands", 1, 4))
        assert sink.has_errors
    """

    def __init__(self, policy: ErrorPolicy = ErrorPolicy.RAISE) -> None:
        self.policy = policy
        self.errors: list[RecoverableError] = []

    def report(self, error: RecoverableError) -> None:
        """Raise *error* or record it, depending on the policy."""
        if self.policy is ErrorPolicy.RAISE:
            raise error
        logger.debug(f"Collected {error.kind.name} diagnostic: {error}")
        self.errors.append(error)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)
