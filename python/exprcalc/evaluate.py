# ExprCalc - Numeric Evaluation
# Copyright (c) 2024 ExprCalc Contributors. All rights reserved.

"""
Numeric evaluation of expression trees.

Arithmetic follows IEEE-754 double semantics throughout: division by zero
gives an infinity or NaN, a negative base raised to a fractional power gives
NaN, and overflow gives an infinity. None of these raise. Plain Python
floats raise ZeroDivisionError or OverflowError (or go complex) in these
cases, so values are combined as numpy float64 with floating-point error
reporting switched off.

Example:
    >>> env = Environment({'x': 2})
    >>> to_double(var('x') ** 3 + 1, env)
    9.0
"""

from __future__ import annotations
from typing import Callable, Dict, Sequence
import logging

import numpy as np

from .environment import Chain, Environment
from .exceptions import ExpressionError, UnknownOperationError
from .expr import (
    BINARY_OPS, EVALUABLE_OPS,
    Expr, Number, Variable, Operation, Op,
    check_arity,
)

logger = logging.getLogger(__name__)


_BINARY: Dict[Op, Callable] = {
    Op.ADD: np.add,
    Op.SUB: np.subtract,
    Op.MUL: np.multiply,
    Op.DIV: np.divide,
    Op.POW: np.power,
}

_UNARY: Dict[Op, Callable] = {
    Op.NEGATE: lambda v: np.multiply(-1.0, v),
    Op.SIN: np.sin,
    Op.COS: np.cos,
}


def apply_op(operation: Op, values: Sequence[float]) -> float:
    """Apply an evaluable operation to already evaluated arguments."""
    args = [np.float64(v) for v in values]
    with np.errstate(all='ignore'):
        if operation in BINARY_OPS:
            result = _BINARY[operation](args[0], args[1])
        else:
            result = _UNARY[operation](args[0])
    return float(result)


def to_double(expr: Expr, env: Environment, _chain: Chain = ()) -> float:
    """
    Reduce a tree to a single float under the bindings in env.

    Variables are resolved through env, following chains of bindings to
    other variables or expressions. env is never modified.

    Raises:
        UndefinedVariableError: If a variable (directly or through a chain)
            has no binding.
        UnknownOperationError: If an operation is unknown, or is one of the
            calculator commands (toDouble, simplify, plot).
        CyclicDefinitionError: If a chain of bindings refers back to itself.
        ArityError: If an operation has the wrong number of children.
    """
    if isinstance(expr, Number):
        return expr.value

    if isinstance(expr, Variable):
        bound, chain = env.resolve(expr.name, _chain)
        return to_double(bound, env, chain)

    if isinstance(expr, Operation):
        operation = expr.op
        if operation not in EVALUABLE_OPS:
            raise UnknownOperationError(expr.name, context="a numeric expression")
        check_arity(expr)
        values = [to_double(child, env, _chain) for child in expr.args]
        return apply_op(operation, values)

    raise TypeError(f"Cannot evaluate {type(expr).__name__}")


def handle_to_double(env: Environment, node: Expr) -> Number:
    """
    Evaluate a `toDouble(inner)` command node.

    Returns:
        A Number holding the value of inner.
    """
    if not (isinstance(node, Operation) and node.name == Op.TO_DOUBLE.value):
        raise ExpressionError(f"Expected a toDouble(...) node, got {node}")
    check_arity(node)
    value = to_double(node.args[0], env)
    logger.debug("toDouble(%s) = %r", node.args[0], value)
    return Number(value)
