"""exprlang recursive descent evaluator.

Parses and computes in a single pass: every grammar rule returns the value
of what it parsed instead of building a tree.  Each loop pulls one token of
lookahead and pushes it back when it does not continue the rule.

Grammar (lowest precedence first):

    expression ::= term (('+' | '-') term)*
    term       ::= power (('*' | '/' | '%') power)*
    power      ::= primary ('^' primary)*
    primary    ::= NUMBER | STRING | IDENTIFIER | '(' expression ')'
                 | '-'+ (NUMBER | '(' expression ')' | expression)

``^`` is left-associative, so ``2 ^ 3 ^ 2`` is 64.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from exprlang.errors import (
    DiagnosticSink,
    ErrorPolicy,
    ExprSyntaxError,
    RecoverableError,
    UndefinedVariableError,
)
from exprlang.evaluator.operators import apply_operator, negate
from exprlang.evaluator.values import PLACEHOLDER, Number, Text, Value, to_value
from exprlang.lexer.lexer import Lexer
from exprlang.lexer.tokens import FunctionLiteral, Token, TokenType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluatorOptions:
    """Behavioural switches for an `Evaluator`."""

    policy: ErrorPolicy = ErrorPolicy.RAISE
    # Legacy behaviour: a parenthesised group empties the variable table
    clear_variables_on_group: bool = False


class Evaluator:
    """Evaluates exprlang source against a flat variable table.

    Usage::

        evaluator = Evaluator("x * (1 + 2)", variables={"x": 4})
        evaluator.evaluate()          # Number(value=12.0)
    """

    def __init__(
        self,
        source: str,
        filename: str = "<input>",
        variables: Mapping[str, object] | None = None,
        options: EvaluatorOptions | None = None,
    ) -> None:
        self.options = options or EvaluatorOptions()
        self.diagnostics = DiagnosticSink(self.options.policy)
        self.lexer = Lexer(source, filename, self.diagnostics)
        self.variables: dict[str, Value] = {}
        self.functions: dict[str, FunctionLiteral] = {}
        for name, value in (variables or {}).items():
            self.assign(name, value)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def evaluate(self) -> Value:
        """Evaluate one expression; tokens after it stay in the lexer."""
        return self._expression()

    def evaluate_all(self) -> list[Value]:
        """Evaluate every ``;``-separated statement and return their values.

        Statements introduced by ``function`` are captured as function
        literals into `functions` and produce no value.
        """
        results: list[Value] = []

        while True:
            tok = self.lexer.next_token()
            if tok.type == TokenType.END_OF_INPUT:
                break
            if tok.type == TokenType.END_OF_LINE:
                continue
            if tok.type == TokenType.FUNCTION_DECLARATION:
                literal = self.lexer.parse_function_literal()
                self.functions[literal.name] = literal
                continue

            self.lexer.push_back(tok)
            results.append(self._expression())
            self._end_statement()

        return results

    def assign(self, name: str, value: object) -> None:
        """Bind *name* to a value (Python ``int``/``float``/``str`` are converted)."""
        self.variables[name] = to_value(value)

    def lookup(self, name: str) -> Value | None:
        return self.variables.get(name)

    @property
    def errors(self) -> list[RecoverableError]:
        """Recoverable errors collected under `ErrorPolicy.COLLECT`."""
        return self.diagnostics.errors

    # ------------------------------------------------------------------
    # Grammar rules
    # ------------------------------------------------------------------

    def _expression(self) -> Value:
        left = self._term()
        while True:
            tok = self.lexer.next_token()
            if not tok.is_operator("+", "-"):
                self.lexer.push_back(tok)
                return left
            left = self._binary(left, tok, self._term())

    def _term(self) -> Value:
        left = self._power()
        while True:
            tok = self.lexer.next_token()
            if not tok.is_operator("*", "/", "%"):
                self.lexer.push_back(tok)
                return left
            left = self._binary(left, tok, self._power())

    def _power(self) -> Value:
        left = self._primary()
        while True:
            tok = self.lexer.next_token()
            if not tok.is_operator("^"):
                self.lexer.push_back(tok)
                return left
            left = self._binary(left, tok, self._primary())

    def _primary(self) -> Value:
        """Parse a primary expression (literals, variables, groups, unary minus)."""
        tok = self.lexer.next_token()

        if tok.type == TokenType.NUMBER:
            return Number(float(tok.value))

        if tok.type == TokenType.STRING_LITERAL:
            return Text(tok.value)

        if tok.type == TokenType.IDENTIFIER:
            value = self.variables.get(tok.value)
            if value is None:
                raise UndefinedVariableError(tok.value, tok.line, tok.column, tok.file)
            return value

        if tok.is_punctuation("("):
            return self._group()

        if tok.is_operator("-"):
            return self._negation(tok)

        # Leave statement ends and closers for the enclosing rule
        if tok.type in (TokenType.END_OF_LINE, TokenType.END_OF_INPUT) or tok.is_punctuation(")"):
            self.lexer.push_back(tok)
        return self._recover(ExprSyntaxError(
            f"Expected an expression, got {tok.type.name} ({tok.value!r})",
            tok.line, tok.column, tok.file,
        ))

    def _group(self) -> Value:
        """Parse the rest of ``( expression )`` after the opening parenthesis."""
        value = self._expression()

        if self.options.clear_variables_on_group:
            logger.debug(f"Clearing {len(self.variables)} variable(s) after group")
            self.variables.clear()

        return self._close_group(value)

    def _close_group(self, value: Value) -> Value:
        """Require the closing parenthesis of a group whose value is *value*."""
        tok = self.lexer.next_token()
        if not tok.is_punctuation(")"):
            self.lexer.push_back(tok)
            return self._recover(ExprSyntaxError(
                f"Expected ')' after expression, got {tok.type.name} ({tok.value!r})",
                tok.line, tok.column, tok.file,
            ))
        return value

    def _negation(self, minus: Token) -> Value:
        """Parse a chain of unary minuses; an odd count negates the operand."""
        negative = False
        tok = minus
        while tok.is_operator("-"):
            negative = not negative
            tok = self.lexer.next_token()

        if tok.type == TokenType.NUMBER:
            operand: Value = Number(float(tok.value))
        elif tok.is_punctuation("("):
            operand = self._close_group(self._expression())
        else:
            self.lexer.push_back(tok)
            operand = self._expression()

        try:
            result = negate(operand, minus)
        except RecoverableError as e:
            return self._recover(e)
        return result if negative else operand

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _binary(self, left: Value, op: Token, right: Value) -> Value:
        try:
            return apply_operator(left, op, right)
        except RecoverableError as e:
            return self._recover(e)

    def _recover(self, error: RecoverableError) -> Value:
        """Report *error*; if the sink keeps it, continue with the placeholder."""
        self.diagnostics.report(error)
        return PLACEHOLDER

    def _end_statement(self) -> None:
        """Require ``;`` or end of input after a top-level expression."""
        tok = self.lexer.next_token()
        if tok.type in (TokenType.END_OF_LINE, TokenType.END_OF_INPUT):
            self.lexer.push_back(tok)
            return

        self.diagnostics.report(ExprSyntaxError(
            f"Unexpected {tok.type.name} ({tok.value!r}) after expression",
            tok.line, tok.column, tok.file,
        ))
        # Collected: skip the rest of the statement
        while tok.type not in (TokenType.END_OF_LINE, TokenType.END_OF_INPUT):
            tok = self.lexer.next_token()
        self.lexer.push_back(tok)
