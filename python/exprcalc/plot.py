# ExprCalc - Plot Sampling
# Copyright (c) 2024 ExprCalc Contributors. All rights reserved.

"""
Sampling an expression over a range of one variable for plotting.

    >>> env = Environment()
    >>> xs, ys = sample(env, 3 * var('x'), var('x'), 2, 5, 0.5)
    >>> list(zip(xs, ys))[:3]
    [(2.0, 6.0), (2.5, 7.5), (3.0, 9.0)]
    >>> 'x' in env
    False
"""

from __future__ import annotations
from typing import List, Set, Tuple
import logging
import math

from .environment import Chain, Environment
from .exceptions import (
    AlreadyBoundVariableError,
    CyclicDefinitionError,
    ExpressionError,
    FreeVariableInPlotBodyError,
    InvalidPlotVariableError,
    InvalidRangeError,
    NonPositiveStepError,
)
from .evaluate import to_double
from .expr import Expr, ExprLike, Number, Variable, Operation, Op, _to_expr, check_arity

logger = logging.getLogger(__name__)


def unbound_names(expr: Expr, env: Environment, _chain: Chain = ()) -> Set[str]:
    """Names of variables reachable from expr, through bindings, that have no binding."""
    if isinstance(expr, Variable):
        if expr.name in _chain:
            raise CyclicDefinitionError(_chain + (expr.name,))
        bound = env.lookup(expr.name)
        if bound is None:
            return {expr.name}
        return unbound_names(bound, env, _chain + (expr.name,))
    missing: Set[str] = set()
    for child in expr.children:
        missing |= unbound_names(child, env, _chain)
    return missing


def sample(
    env: Environment,
    body: ExprLike,
    variable: Expr,
    minimum: ExprLike,
    maximum: ExprLike,
    step: ExprLike,
) -> Tuple[List[float], List[float]]:
    """
    Evaluate body at variable = minimum, minimum + step, ... up to maximum.

    minimum, maximum and step may themselves be expressions and are
    evaluated under env first. The sampling variable must not be bound in
    env; it is bound only while sampling and is gone again when this
    returns or raises.

    Returns:
        The x values and the matching y values.

    Raises:
        InvalidPlotVariableError: If variable is not a Variable.
        InvalidRangeError: If minimum > maximum, or a bound is not finite.
        AlreadyBoundVariableError: If variable is already bound.
        NonPositiveStepError: If step <= 0, or too small to advance x.
        FreeVariableInPlotBodyError: If body uses an unbound variable other
            than the sampling variable.
        UndefinedVariableError, UnknownOperationError: From evaluating the
            range arguments or the body.
    """
    if not isinstance(variable, Variable):
        raise InvalidPlotVariableError(str(variable))
    body = _to_expr(body)
    name = variable.name

    lo = to_double(_to_expr(minimum), env)
    hi = to_double(_to_expr(maximum), env)
    dx = to_double(_to_expr(step), env)

    if lo > hi or not (math.isfinite(lo) and math.isfinite(hi)):
        raise InvalidRangeError(lo, hi)
    if name in env:
        raise AlreadyBoundVariableError(name)
    if not dx > 0:
        raise NonPositiveStepError(dx)

    with env.scoped_binding(name, env.config.placeholder):
        missing = unbound_names(body, env)
        if missing:
            raise FreeVariableInPlotBodyError(missing)

    xs: List[float] = []
    ys: List[float] = []
    with env.scoped_binding(name, lo):
        index = 0
        x = lo
        while x <= hi:
            env.bind(name, x)
            xs.append(x)
            ys.append(to_double(body, env))
            index += 1
            following = lo + index * dx
            if following == x:
                raise NonPositiveStepError(dx, position=x)
            x = following

    logger.debug("Sampled %s at %d point(s) over [%r, %r]", body, len(xs), lo, hi)
    return xs, ys


def plot(
    env: Environment,
    body: ExprLike,
    variable: Expr,
    minimum: ExprLike,
    maximum: ExprLike,
    step: ExprLike,
) -> Number:
    """
    Sample body and hand the points to the environment's sink.

    Returns:
        A placeholder Number; plotting has no numeric result of its own.
    """
    xs, ys = sample(env, body, variable, minimum, maximum, step)
    config = env.config
    env.sink.render(config.series_label, variable.name, config.output_id, xs, ys)
    return Number(config.placeholder)


def handle_plot(env: Environment, node: Expr) -> Number:
    """Run a `plot(body, var, min, max, step)` command node."""
    if not (isinstance(node, Operation) and node.name == Op.PLOT.value):
        raise ExpressionError(f"Expected a plot(...) node, got {node}")
    check_arity(node)
    return plot(env, *node.args)
