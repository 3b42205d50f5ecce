"""exprlang lexer: pull tokenizer with pushback and function-literal capture."""

from exprlang.lexer.tokens import FunctionLiteral, Token, TokenType
from exprlang.lexer.lexer import Lexer

__all__ = ["FunctionLiteral", "Token", "TokenType", "Lexer"]
