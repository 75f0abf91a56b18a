# ExprCalc - Exceptions
# Copyright (c) 2024 ExprCalc Contributors. All rights reserved.

"""Exception hierarchy for ExprCalc."""

from __future__ import annotations
from typing import Optional, Sequence


class CalculatorError(Exception):
    """Base class for all ExprCalc exceptions."""
    pass


class ExpressionError(CalculatorError):
    """Raised when an expression tree is malformed."""

    def __init__(self, message: str, suggestion: Optional[str] = None):
        full_message = message
        if suggestion:
            full_message += f"\n  Suggestion: {suggestion}"
        super().__init__(full_message)
        self.suggestion = suggestion


class ArityError(ExpressionError):
    """Raised when an operation has the wrong number of children."""

    def __init__(self, operation: str, expected: int, actual: int):
        message = (
            f"Operation '{operation}' takes {expected} argument(s), "
            f"got {actual}"
        )
        super().__init__(message)
        self.operation = operation
        self.expected = expected
        self.actual = actual


class InvalidPlotVariableError(ExpressionError):
    """Raised when the sampling argument of plot is not a variable reference."""

    def __init__(self, found: str):
        super().__init__(
            f"plot expects a variable as its second argument, got {found}",
            suggestion="Write plot(expr, x, min, max, step) with a bare name for x.",
        )
        self.found = found


class EvaluationError(CalculatorError):
    """Base class for failures while evaluating, simplifying or plotting."""
    pass


class UndefinedVariableError(EvaluationError):
    """Raised when a variable has no binding in the environment."""

    def __init__(self, name: str):
        super().__init__(f"Undefined variable: '{name}'")
        self.name = name


class UnknownOperationError(EvaluationError):
    """Raised when an operation name is not recognized."""

    def __init__(self, name: str, context: Optional[str] = None):
        message = f"Unknown operation: '{name}'"
        if context:
            message += f" in {context}"
        suggestion = _get_suggestion_for_operation(name)
        if suggestion:
            message += f"\n  Suggestion: {suggestion}"
        super().__init__(message)
        self.name = name
        self.suggestion = suggestion


class InvalidRangeError(EvaluationError):
    """Raised when a plot range has its lower bound above its upper bound."""

    def __init__(self, minimum: float, maximum: float):
        super().__init__(f"Invalid plot range: min {minimum} > max {maximum}")
        self.minimum = minimum
        self.maximum = maximum


class AlreadyBoundVariableError(EvaluationError):
    """Raised when the plot sampling variable already has a binding."""

    def __init__(self, name: str):
        super().__init__(
            f"Variable '{name}' is already defined; plot needs a fresh variable"
        )
        self.name = name


class NonPositiveStepError(EvaluationError):
    """Raised when a plot step is zero or negative."""

    def __init__(self, step: float, position: Optional[float] = None):
        if position is None:
            message = f"Plot step must be positive, got {step}"
        else:
            message = f"Plot step {step} is too small to advance past {position}"
        super().__init__(message)
        self.step = step
        self.position = position


class FreeVariableInPlotBodyError(EvaluationError):
    """Raised when a plotted expression uses undefined variables."""

    def __init__(self, names: Sequence[str]):
        self.names = sorted(names)
        listed = ", ".join(f"'{n}'" for n in self.names)
        super().__init__(f"Plotted expression contains undefined variable(s): {listed}")


class CyclicDefinitionError(EvaluationError):
    """Raised when a chain of variable bindings refers back to itself."""

    def __init__(self, chain: Sequence[str]):
        self.chain = list(chain)
        super().__init__(f"Cyclic variable definition: {' -> '.join(self.chain)}")


def _get_suggestion_for_operation(name: str) -> Optional[str]:
    """Get a helpful suggestion for an unknown operation name."""
    suggestions = {
        'sine': "Did you mean 'sin'?",
        'cosine': "Did you mean 'cos'?",
        'neg': "Did you mean 'negate'? Use negate(x) or -x.",
        'minus': "Did you mean 'negate'? Use negate(x) or -x.",
        'pow': "Did you mean '^'? Use a ^ b for exponentiation.",
        'power': "Did you mean '^'? Use a ^ b for exponentiation.",
        '**': "Did you mean '^'? Use a ^ b for exponentiation.",
        'add': "Did you mean '+'?",
        'sub': "Did you mean '-'?",
        'mul': "Did you mean '*'?",
        'div': "Did you mean '/'?",
        'todouble': "Did you mean 'toDouble'? Operation names are case-sensitive.",
        'to_double': "Did you mean 'toDouble'?",
        'simplify': "simplify(...) is a command and cannot be nested inside an expression.",
        'toDouble': "toDouble(...) is a command and cannot be nested inside an expression.",
        'plot': "plot(...) is a command and cannot be nested inside an expression.",
        'tan': "tan is not supported. Use sin(x) / cos(x).",
    }
    return suggestions.get(name, suggestions.get(name.lower()))
