# ExprCalc - Constant Folding
# Copyright (c) 2024 ExprCalc Contributors. All rights reserved.

"""
Constant-folding simplification of expression trees.

simplify() rewrites a tree into the most reduced form the current bindings
allow. Bound variables are replaced by what they resolve to, and an
operation whose children all reduce to numbers is replaced by its value when
the operation is one of FOLDABLE_OPS. Everything else keeps its shape with
simplified children, so unbound variables stay symbolic.

Only `+`, `*` and `negate` fold. `-`, `/`, `^`, `sin` and `cos` are kept
as written even when their arguments are numbers, so `2 - 1` stays `2 - 1`
while `2 + 1` becomes `3`.

Example:
    >>> env = Environment({'a': 4})
    >>> str(simplify(var('a') * 2 + var('x'), env))
    '(8 + x)'
"""

from __future__ import annotations
import logging

from .environment import Chain, Environment
from .exceptions import CyclicDefinitionError, ExpressionError
from .evaluate import apply_op, to_double
from .expr import Expr, Number, Variable, Operation, Op, check_arity

logger = logging.getLogger(__name__)


FOLDABLE_OPS = frozenset({Op.ADD, Op.MUL, Op.NEGATE})


def is_calculable(expr: Expr, env: Environment, _chain: Chain = ()) -> bool:
    """
    True for a number, or a variable whose binding chain ends in one.

    Operations are never calculable on their own; simplify() folds them
    into numbers first where it can.
    """
    if isinstance(expr, Number):
        return True
    if isinstance(expr, Variable):
        if expr.name in _chain:
            raise CyclicDefinitionError(_chain + (expr.name,))
        bound = env.lookup(expr.name)
        if bound is None:
            return False
        return is_calculable(bound, env, _chain + (expr.name,))
    return False


def simplify(expr: Expr, env: Environment, _chain: Chain = ()) -> Expr:
    """
    Return the most reduced equivalent of expr under env.

    The result never contains a bound variable. Applying simplify to its own
    result under the same env returns an equal tree, and wherever expr can be
    evaluated the result evaluates to the same value.

    Raises:
        UnknownOperationError: If an operation name is not known.
        ArityError: If an operation has the wrong number of children.
        CyclicDefinitionError: If a chain of bindings refers back to itself.
    """
    if isinstance(expr, Number):
        return expr

    if isinstance(expr, Variable):
        if env.lookup(expr.name) is None:
            return expr
        bound, chain = env.resolve(expr.name, _chain)
        if is_calculable(bound, env, chain):
            return Number(to_double(bound, env, chain))
        return simplify(bound, env, chain)

    if isinstance(expr, Operation):
        operation = check_arity(expr)
        children = tuple(simplify(child, env, _chain) for child in expr.args)
        if operation in FOLDABLE_OPS and all(
            is_calculable(child, env, _chain) for child in children
        ):
            value = apply_op(operation, [to_double(c, env, _chain) for c in children])
            logger.debug("Folded %s to %r", expr, value)
            return Number(value)
        return expr.with_children(children)

    raise TypeError(f"Cannot simplify {type(expr).__name__}")


def handle_simplify(env: Environment, node: Expr) -> Expr:
    """Simplify the argument of a `simplify(inner)` command node."""
    if not (isinstance(node, Operation) and node.name == Op.SIMPLIFY.value):
        raise ExpressionError(f"Expected a simplify(...) node, got {node}")
    check_arity(node)
    return simplify(node.args[0], env)
