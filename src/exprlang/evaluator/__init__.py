"""exprlang evaluator: single-pass recursive descent over a dynamically typed value model.

Components:
    - values: Number / Text runtime values and conversions
    - operators: binary operator dispatch and unary negation
    - evaluator: the grammar rules, variable table and error policy
"""

from exprlang.evaluator.values import PLACEHOLDER, Number, Text, Value, format_value, to_value
from exprlang.evaluator.operators import apply_operator, negate
from exprlang.evaluator.evaluator import Evaluator, EvaluatorOptions

__all__ = [
    "PLACEHOLDER",
    "Number",
    "Text",
    "Value",
    "format_value",
    "to_value",
    "apply_operator",
    "negate",
    "Evaluator",
    "EvaluatorOptions",
]
