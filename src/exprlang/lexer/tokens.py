"""Token types, Token and FunctionLiteral dataclasses for the exprlang lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable


class TokenType(Enum):
    """Every distinct token the exprlang lexer can produce."""

    # Literals & names
    NUMBER = auto()
    STRING_LITERAL = auto()
    IDENTIFIER = auto()

    # Symbols
    OPERATOR = auto()               # + - * / % ^ . @ = < > !
    COMPARISON_OPERATOR = auto()    # == <= >= !=
    PUNCTUATION = auto()            # ( ) { } [ ] : ,
    FUNCTION_LINK = auto()          # => (function literals only)

    # Structure
    END_OF_LINE = auto()            # ;
    END_OF_INPUT = auto()

    # Keywords
    LET = auto()
    FUNCTION = auto()
    IF = auto()
    ELSE = auto()
    IN = auto()
    PRINT = auto()

    # Returned in place of FUNCTION so callers know to capture a literal
    FUNCTION_DECLARATION = auto()


# Map reserved words to token types
KEYWORDS: dict[str, TokenType] = {
    "let": TokenType.LET,
    "function": TokenType.FUNCTION,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "in": TokenType.IN,
    "print": TokenType.PRINT,
}


@dataclass(frozen=True, slots=True)
class Token:
    """A single token produced by the lexer.

    ``line`` and ``column`` are 1-based and point just past the last
    character of the token.
    """

    type: TokenType
    value: str
    line: int
    column: int
    file: str = "<input>"

    def is_operator(self, *symbols: str) -> bool:
        """True for an OPERATOR token whose text is one of *symbols*."""
        return self.type == TokenType.OPERATOR and self.value in symbols

    def is_punctuation(self, symbol: str) -> bool:
        return self.type == TokenType.PUNCTUATION and self.value == symbol

    def __repr__(self) -> str:
        if self.type == TokenType.END_OF_INPUT:
            return f"Token({self.type.name}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


@dataclass(frozen=True, slots=True)
class FunctionLiteral:
    """A captured, unevaluated function: name, parameter names and body tokens.

    Build instances with `capture`, which appends the terminating
    END_OF_LINE token to the body.
    """

    name: str
    parameters: tuple[str, ...]
    body: tuple[Token, ...]

    @classmethod
    def capture(
        cls,
        name: str,
        parameters: Iterable[str],
        body: Iterable[Token],
        terminator: Token,
    ) -> FunctionLiteral:
        end = Token(TokenType.END_OF_LINE, ";", terminator.line, terminator.column, terminator.file)
        return cls(name=name, parameters=tuple(parameters), body=(*body, end))

    def __str__(self) -> str:
        body = " ".join(
            f'"{tok.value}"' if tok.type == TokenType.STRING_LITERAL else tok.value
            for tok in self.body[:-1]
        )
        return f"{self.name}({', '.join(self.parameters)}) => {body}"
