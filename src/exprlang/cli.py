"""exprlang command-line entry point.

Usage:
    exprlang eval <file> [options]      Evaluate every statement and print the values
    exprlang tokenize <file>            Display the token stream (debug)
    exprlang functions <file>           Show captured function literals

Options for eval:
    --set NAME=VALUE     Bind a variable (number if it parses as one, else string)
    --collect            Collect recoverable errors instead of stopping at the first
    --clear-on-group     Empty the variable table after each parenthesised group
    --verbose            Enable debug logging
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from exprlang.errors import ErrorPolicy, ExprError
from exprlang.evaluator.evaluator import Evaluator, EvaluatorOptions
from exprlang.evaluator.values import Number, Text, Value, format_value
from exprlang.lexer.lexer import Lexer
from exprlang.lexer.tokens import TokenType


def main(argv: list[str] | None = None) -> int:
    args = argv if argv is not None else sys.argv[1:]

    if len(args) < 1:
        print(__doc__.strip())
        return 1

    command = args[0]

    if command in ("--help", "-h"):
        print(__doc__.strip())
        return 0

    if command == "--version":
        from exprlang import __version__
        print(f"exprlang {__version__}")
        return 0

    if len(args) < 2:
        print(f"Error: command '{command}' requires a file argument")
        return 1

    filepath = Path(args[1])
    if not filepath.exists():
        print(f"Error: file not found: {filepath}")
        return 1

    source = filepath.read_text(encoding="utf-8")
    filename = str(filepath)

    if command == "tokenize":
        return _cmd_tokenize(source, filename)
    elif command == "eval":
        return _cmd_eval(source, filename, args[2:])
    elif command == "functions":
        return _cmd_functions(source, filename)
    else:
        print(f"Error: unknown command '{command}'")
        print(__doc__.strip())
        return 1


def _cmd_tokenize(source: str, filename: str) -> int:
    """Display the token stream."""
    lexer = Lexer(source, filename)
    try:
        tok = lexer.next_token()
        while tok.type != TokenType.END_OF_INPUT:
            print(tok)
            if tok.type == TokenType.FUNCTION_DECLARATION:
                print(f"  {lexer.parse_function_literal()}")
            tok = lexer.next_token()
    except ExprError as e:
        print(f"Lexer error: {e}")
        return 1
    print(tok)
    return 0


def _cmd_eval(source: str, filename: str, options: list[str]) -> int:
    """Evaluate all statements in the file."""
    variables: dict[str, Value] = {}
    policy = ErrorPolicy.RAISE
    clear_on_group = False

    i = 0
    while i < len(options):
        opt = options[i]
        if opt == "--set" and i + 1 < len(options):
            name, sep, raw = options[i + 1].partition("=")
            if not sep or not name:
                print(f"Error: --set expects NAME=VALUE, got '{options[i + 1]}'")
                return 1
            variables[name] = _parse_cli_value(raw)
            i += 2
            continue
        if opt == "--collect":
            policy = ErrorPolicy.COLLECT
        elif opt == "--clear-on-group":
            clear_on_group = True
        elif opt == "--verbose":
            logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
        else:
            print(f"Error: unknown option '{opt}'")
            return 1
        i += 1

    evaluator = Evaluator(
        source,
        filename,
        variables=variables,
        options=EvaluatorOptions(policy=policy, clear_variables_on_group=clear_on_group),
    )
    try:
        results = evaluator.evaluate_all()
    except ExprError as e:
        print(f"Error: {e}")
        return 1

    for value in results:
        print(format_value(value))

    for error in evaluator.errors:
        print(f"  ERROR {error.kind.name}: {error}")

    if evaluator.errors:
        print(f"{filename}: FAIL ({len(evaluator.errors)} error(s))")
        return 1
    return 0


def _cmd_functions(source: str, filename: str) -> int:
    """Display the function literals declared in the file."""
    evaluator = Evaluator(source, filename)
    try:
        evaluator.evaluate_all()
    except ExprError as e:
        print(f"Error: {e}")
        return 1

    for literal in evaluator.functions.values():
        print(f"Function: {literal.name}({', '.join(literal.parameters)})")
        print(f"  body: {' '.join(tok.value for tok in literal.body)}")
    return 0


def _parse_cli_value(raw: str) -> Value:
    try:
        return Number(float(raw))
    except ValueError:
        return Text(raw)


if __name__ == "__main__":
    sys.exit(main())
