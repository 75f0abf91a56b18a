# ExprCalc - Command Dispatch
# Copyright (c) 2024 ExprCalc Contributors. All rights reserved.

"""Dispatch of top-level calculator input to the command handlers."""

from __future__ import annotations
import logging

from .environment import Environment
from .evaluate import handle_to_double
from .expr import Expr, Operation, Op
from .plot import handle_plot
from .simplify import handle_simplify, simplify

logger = logging.getLogger(__name__)


_HANDLERS = {
    Op.TO_DOUBLE.value: handle_to_double,
    Op.SIMPLIFY.value: handle_simplify,
    Op.PLOT.value: handle_plot,
}


def interpret(env: Environment, node: Expr) -> Expr:
    """
    Run one parsed input line.

    `toDouble(...)`, `simplify(...)` and `plot(...)` go to their handlers.
    Any other tree is simplified, which is what a calculator shows for a
    bare expression.
    """
    if isinstance(node, Operation) and node.name in _HANDLERS:
        logger.debug("Running %s command", node.name)
        return _HANDLERS[node.name](env, node)
    return simplify(node, env)
