# ExprCalc
# Copyright (c) 2024 ExprCalc Contributors. All rights reserved.

"""
ExprCalc - Expression trees for an interactive calculator.

Evaluate, constant-fold and plot arithmetic expression trees against an
explicit environment of variable bindings.

Example:
    >>> import exprcalc as ec
    >>> env = ec.Environment({'c': 4})
    >>> x = ec.var('x')
    >>> ec.to_double(ec.var('c') * 2, env)
    8.0
    >>> str(ec.simplify(ec.var('c') + 3 * x, env))
    '(4 + (3 * x))'
    >>> ec.plot(env, x ** 2, x, -1, 1, 0.5)
    Number(value=1.0)
"""

__version__ = "0.1.0"

# Expression trees
from .expr import (
    Op,
    Expr,
    Number,
    Variable,
    Operation,
    check_arity,
    num,
    var,
    op,
    negate,
    sin,
    cos,
    to_double_node,
    simplify_node,
    plot_node,
)

# Configuration
from .config import Config

# Session state
from .environment import Environment

# Rendering
from .sink import PlotSink, RecordingSink, RenderCall, MatplotlibSink

# Evaluation, simplification and plotting
from .evaluate import to_double, handle_to_double
from .simplify import simplify, is_calculable, handle_simplify, FOLDABLE_OPS
from .plot import plot, sample, handle_plot
from .interpreter import interpret

# Exceptions
from .exceptions import (
    CalculatorError,
    ExpressionError,
    ArityError,
    InvalidPlotVariableError,
    EvaluationError,
    UndefinedVariableError,
    UnknownOperationError,
    InvalidRangeError,
    AlreadyBoundVariableError,
    NonPositiveStepError,
    FreeVariableInPlotBodyError,
    CyclicDefinitionError,
)

__all__ = [
    # Version
    "__version__",
    # Expression trees
    "Op",
    "Expr",
    "Number",
    "Variable",
    "Operation",
    "check_arity",
    "num",
    "var",
    "op",
    "negate",
    "sin",
    "cos",
    "to_double_node",
    "simplify_node",
    "plot_node",
    # Configuration
    "Config",
    # Session state
    "Environment",
    # Rendering
    "PlotSink",
    "RecordingSink",
    "RenderCall",
    "MatplotlibSink",
    # Operations
    "to_double",
    "handle_to_double",
    "simplify",
    "is_calculable",
    "handle_simplify",
    "FOLDABLE_OPS",
    "plot",
    "sample",
    "handle_plot",
    "interpret",
    # Exceptions
    "CalculatorError",
    "ExpressionError",
    "ArityError",
    "InvalidPlotVariableError",
    "EvaluationError",
    "UndefinedVariableError",
    "UnknownOperationError",
    "InvalidRangeError",
    "AlreadyBoundVariableError",
    "NonPositiveStepError",
    "FreeVariableInPlotBodyError",
    "CyclicDefinitionError",
]
