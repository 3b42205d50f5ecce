"""exprlang lexer: hand-written pull tokenizer with token pushback.

Design decisions:
- Tokens are produced one at a time by `next_token`; the evaluator asks for
  exactly as many as it needs.
- `push_back` returns a token to the front of a lookahead deque, which is
  always drained before scanning resumes.
- Newlines are plain whitespace; statements end with ``;``.
- A character with no scanning rule raises `InvalidCharacterError` and is
  left unconsumed.
"""

from __future__ import annotations

import logging
from collections import deque

from exprlang.errors import (
    DiagnosticSink,
    ExprSyntaxError,
    InvalidCharacterError,
    RecoverableError,
    UnterminatedLiteralError,
)
from exprlang.lexer.tokens import KEYWORDS, FunctionLiteral, Token, TokenType

logger = logging.getLogger(__name__)

OPERATOR_CHARS = frozenset("+-*/%^.@")
PUNCTUATION_CHARS = frozenset("(){}[]:,")
COMPARISON_LEADERS = frozenset("=<>!")
DIGITS = frozenset("0123456789")


class Lexer:
    """Tokenizes exprlang source on demand.

    Usage::

        lexer = Lexer("3 + 4 * 2")
        tok = lexer.next_token()      # Token(NUMBER, '3', 1:2)
        lexer.push_back(tok)          # redelivered by the next call
    """

    def __init__(
        self,
        source: str,
        filename: str = "<input>",
        diagnostics: DiagnosticSink | None = None,
    ) -> None:
        self.source = source
        self.filename = filename
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticSink()
        self.pos = 0
        self.line = 1
        self.column = 1
        self.pending: deque[Token] = deque()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def next_token(self) -> Token:
        """Return the next token, draining pushed-back tokens first.

        Once the source is exhausted every call returns END_OF_INPUT.
        """
        if self.pending:
            return self.pending.popleft()

        self._skip_whitespace()
        if self._at_end():
            return self._make_token(TokenType.END_OF_INPUT, "")

        ch = self._peek()

        if ch in DIGITS:
            return self._scan_number()

        if ch.isalpha():
            tok = self._scan_word()
            if tok.type == TokenType.FUNCTION:
                return Token(TokenType.FUNCTION_DECLARATION, tok.value, tok.line, tok.column, tok.file)
            return tok

        if ch == '"':
            return self._scan_string()

        if ch in OPERATOR_CHARS:
            self._advance()
            return self._make_token(TokenType.OPERATOR, ch)

        if ch in PUNCTUATION_CHARS:
            self._advance()
            return self._make_token(TokenType.PUNCTUATION, ch)

        if ch == ";":
            self._advance()
            return self._make_token(TokenType.END_OF_LINE, ";")

        if ch in COMPARISON_LEADERS:
            self._advance()
            if not self._at_end() and self._peek() == "=":
                self._advance()
                return self._make_token(TokenType.COMPARISON_OPERATOR, ch + "=")
            return self._make_token(TokenType.OPERATOR, ch)

        raise InvalidCharacterError(ch, self.line, self.column, self.filename)

    def push_back(self, token: Token) -> None:
        """Return *token* to the stream; the latest pushed is redelivered first."""
        self.pending.appendleft(token)

    def tokenize(self) -> list[Token]:
        """Pull every remaining token, END_OF_INPUT included."""
        tokens = [self.next_token()]
        while tokens[-1].type != TokenType.END_OF_INPUT:
            tokens.append(self.next_token())
        return tokens

    def parse_function_literal(self) -> FunctionLiteral:
        """Capture ``name(param, ...) => body`` after a FUNCTION_DECLARATION token.

        The body is every token up to the next ``;`` or the end of input; the
        terminator itself is consumed.  Malformed headers are reported to the
        diagnostic sink and, when diagnostics are collected, parsing carries
        on with whatever was recovered.
        """
        self._skip_whitespace()
        if self._at_end() or not self._peek().isalpha():
            self._report(ExprSyntaxError, "Expected a function name")
        name = self._read_word()

        self._skip_whitespace()
        if not self._at_end() and self._peek() == "(":
            self._advance()
        else:
            self._report(ExprSyntaxError, "Expected '(' after function name")

        parameters = self._read_parameters()

        if self._scan_function_link() is None:
            self._report(ExprSyntaxError, "Expected '=>' after function parameters")

        body: list[Token] = []
        tok = self.next_token()
        while tok.type not in (TokenType.END_OF_LINE, TokenType.END_OF_INPUT):
            body.append(tok)
            tok = self.next_token()

        literal = FunctionLiteral.capture(name, parameters, body, terminator=tok)
        logger.debug(f"Captured function literal {literal}")
        return literal

    # ------------------------------------------------------------------
    # Token scanning
    # ------------------------------------------------------------------

    def _scan_number(self) -> Token:
        """Scan an integer or decimal literal, keeping its text as written."""
        chars: list[str] = []

        # Only reachable when called directly on a '-'; the dispatcher
        # always tokenizes '-' as an operator.
        if self._peek() == "-":
            chars.append(self._advance())

        while not self._at_end() and self._peek() in DIGITS:
            chars.append(self._advance())

        if not self._at_end() and self._peek() == ".":
            chars.append(self._advance())
            while not self._at_end() and self._peek() in DIGITS:
                chars.append(self._advance())

        return self._make_token(TokenType.NUMBER, "".join(chars))

    def _scan_word(self) -> Token:
        """Scan an identifier or reserved word."""
        word = self._read_word()
        return self._make_token(KEYWORDS.get(word, TokenType.IDENTIFIER), word)

    def _scan_string(self) -> Token:
        """Scan a double-quoted string literal; no escape sequences."""
        self._advance()  # consume opening quote
        chars: list[str] = []

        while not self._at_end() and self._peek() != '"':
            chars.append(self._advance())

        if self._at_end():
            self._report(UnterminatedLiteralError, "Unterminated string literal")
        else:
            self._advance()  # consume closing quote

        return self._make_token(TokenType.STRING_LITERAL, "".join(chars))

    def _scan_function_link(self) -> Token | None:
        """Scan the ``=>`` arrow of a function literal, or return None."""
        self._skip_whitespace()
        if not self._at_end() and self._peek() == "=" and self._peek_ahead(1) == ">":
            self._advance()
            self._advance()
            return self._make_token(TokenType.FUNCTION_LINK, "=>")
        return None

    def _read_parameters(self) -> list[str]:
        """Read names up to the closing ')' of a function literal header."""
        parameters: list[str] = []
        self._skip_whitespace()

        while not self._at_end() and self._peek() != ")":
            if self._peek().isalpha():
                parameters.append(self._read_word())
            else:
                self._report(ExprSyntaxError, "Expected a parameter name")
                while not self._at_end() and self._peek() not in ",)":
                    self._advance()

            self._skip_whitespace()
            if not self._at_end() and self._peek() == ",":
                self._advance()
                self._skip_whitespace()

        if self._at_end():
            self._report(ExprSyntaxError, "Expected ')' to close the parameter list")
        else:
            self._advance()  # consume ')'
        return parameters

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _peek(self) -> str:
        """Return the current character without consuming it."""
        return self.source[self.pos]

    def _peek_ahead(self, offset: int) -> str | None:
        """Return a character at an offset ahead, or None if past end."""
        idx = self.pos + offset
        if idx >= len(self.source):
            return None
        return self.source[idx]

    def _advance(self) -> str:
        """Consume and return the current character."""
        ch = self.source[self.pos]
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def _at_end(self) -> bool:
        return self.pos >= len(self.source)

    def _skip_whitespace(self) -> None:
        while not self._at_end() and self._peek().isspace():
            self._advance()

    def _read_word(self) -> str:
        chars: list[str] = []
        while not self._at_end() and self._peek().isalnum():
            chars.append(self._advance())
        return "".join(chars)

    def _report(self, error_type: type[RecoverableError], message: str) -> None:
        self.diagnostics.report(error_type(message, self.line, self.column, self.filename))

    def _make_token(self, token_type: TokenType, value: str) -> Token:
        return Token(token_type, value, self.line, self.column, self.filename)
