# ExprCalc - Expression Trees
# Copyright (c) 2024 ExprCalc Contributors. All rights reserved.

"""
Expression trees for ExprCalc.

A tree is one of three immutable node shapes: a numeric literal, a variable
reference, or an operation applied to an ordered tuple of children. Trees
support natural Python math syntax for building them by hand.

Example:
    >>> x = var('x')
    >>> expr = 3 * x + sin(x)
    >>> expr.free_vars()
    frozenset({'x'})
    >>> str(expr)
    '((3 * x) + sin(x))'
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Tuple, Union

from .exceptions import ArityError, UnknownOperationError


# Type alias for things that can be converted to expressions
ExprLike = Union['Expr', int, float]


class Op(str, Enum):
    """Operation names understood by the calculator."""

    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'
    POW = '^'
    NEGATE = 'negate'
    SIN = 'sin'
    COS = 'cos'
    TO_DOUBLE = 'toDouble'
    SIMPLIFY = 'simplify'
    PLOT = 'plot'

    @property
    def arity(self) -> int:
        """Number of children an operation node with this name must have."""
        return _ARITY[self]

    @classmethod
    def lookup(cls, name: str) -> Op:
        """
        Map an operation name to its Op.

        Raises:
            UnknownOperationError: If the name is not a known operation.
        """
        try:
            return cls(name)
        except ValueError:
            raise UnknownOperationError(name) from None

    def __str__(self) -> str:
        return self.value


_ARITY = {
    Op.ADD: 2,
    Op.SUB: 2,
    Op.MUL: 2,
    Op.DIV: 2,
    Op.POW: 2,
    Op.NEGATE: 1,
    Op.SIN: 1,
    Op.COS: 1,
    Op.TO_DOUBLE: 1,
    Op.SIMPLIFY: 1,
    Op.PLOT: 5,
}

BINARY_OPS = frozenset({Op.ADD, Op.SUB, Op.MUL, Op.DIV, Op.POW})
UNARY_OPS = frozenset({Op.NEGATE, Op.SIN, Op.COS})

# Operations with a numeric meaning; the rest are calculator commands
EVALUABLE_OPS = BINARY_OPS | UNARY_OPS
COMMAND_OPS = frozenset({Op.TO_DOUBLE, Op.SIMPLIFY, Op.PLOT})


class Expr(ABC):
    """
    Base class for expression tree nodes.

    Nodes are immutable and compare structurally, so two separately built
    trees for the same expression are equal and hash alike.
    """

    @abstractmethod
    def free_vars(self) -> FrozenSet[str]:
        """Return all variable names referenced in this tree."""
        ...

    @property
    def children(self) -> Tuple[Expr, ...]:
        return ()

    def is_number(self) -> bool:
        return False

    def is_variable(self) -> bool:
        return False

    def is_operation(self) -> bool:
        return False

    # Operator overloading for natural math syntax
    def __neg__(self) -> Expr:
        return Operation(Op.NEGATE.value, (self,))

    def __add__(self, other: ExprLike) -> Expr:
        return Operation(Op.ADD.value, (self, _to_expr(other)))

    def __radd__(self, other: ExprLike) -> Expr:
        return Operation(Op.ADD.value, (_to_expr(other), self))

    def __sub__(self, other: ExprLike) -> Expr:
        return Operation(Op.SUB.value, (self, _to_expr(other)))

    def __rsub__(self, other: ExprLike) -> Expr:
        return Operation(Op.SUB.value, (_to_expr(other), self))

    def __mul__(self, other: ExprLike) -> Expr:
        return Operation(Op.MUL.value, (self, _to_expr(other)))

    def __rmul__(self, other: ExprLike) -> Expr:
        return Operation(Op.MUL.value, (_to_expr(other), self))

    def __truediv__(self, other: ExprLike) -> Expr:
        return Operation(Op.DIV.value, (self, _to_expr(other)))

    def __rtruediv__(self, other: ExprLike) -> Expr:
        return Operation(Op.DIV.value, (_to_expr(other), self))

    def __pow__(self, other: ExprLike) -> Expr:
        return Operation(Op.POW.value, (self, _to_expr(other)))

    def __rpow__(self, other: ExprLike) -> Expr:
        return Operation(Op.POW.value, (_to_expr(other), self))


def _to_expr(x: ExprLike) -> Expr:
    """Convert a value to an Expr."""
    if isinstance(x, Expr):
        return x
    elif isinstance(x, (int, float)) and not isinstance(x, bool):
        return Number(x)
    else:
        raise TypeError(f"Cannot convert {type(x).__name__} to Expr")


# Integral values at or above this print in float notation
_INTEGER_DISPLAY_LIMIT = 1e16


@dataclass(frozen=True)
class Number(Expr):
    """A numeric literal, stored as a float."""
    value: float

    def __post_init__(self):
        object.__setattr__(self, 'value', float(self.value))

    def free_vars(self) -> FrozenSet[str]:
        return frozenset()

    def is_number(self) -> bool:
        return True

    def __str__(self) -> str:
        if self.value.is_integer() and abs(self.value) < _INTEGER_DISPLAY_LIMIT:
            return str(int(self.value))
        return repr(self.value)


@dataclass(frozen=True)
class Variable(Expr):
    """A reference to whatever the environment binds to `name`."""
    name: str

    def free_vars(self) -> FrozenSet[str]:
        return frozenset({self.name})

    def is_variable(self) -> bool:
        return True

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Operation(Expr):
    """
    An operation applied to an ordered tuple of children.

    The name is kept as the raw string a parser produced so that an
    unrecognized name can still be represented and reported when the tree
    is evaluated. Use `check_arity` to validate a node at the point of use.
    """
    name: str
    args: Tuple[Expr, ...] = ()

    def __post_init__(self):
        if isinstance(self.name, Op):
            object.__setattr__(self, 'name', self.name.value)
        object.__setattr__(self, 'args', tuple(self.args))

    @property
    def children(self) -> Tuple[Expr, ...]:
        return self.args

    @property
    def op(self) -> Op:
        """The Op for this node's name; raises UnknownOperationError."""
        return Op.lookup(self.name)

    def free_vars(self) -> FrozenSet[str]:
        result: FrozenSet[str] = frozenset()
        for child in self.args:
            result = result | child.free_vars()
        return result

    def is_operation(self) -> bool:
        return True

    def with_children(self, children) -> Operation:
        """Return a copy of this node with the children replaced."""
        return Operation(self.name, tuple(children))

    def __str__(self) -> str:
        if self.name in _INFIX and len(self.args) == 2:
            return f"({self.args[0]} {self.name} {self.args[1]})"
        if self.name == Op.NEGATE.value and len(self.args) == 1:
            operand = str(self.args[0])
            if operand.startswith("-"):
                return f"-({operand})"
            return f"-{operand}"
        inner = ", ".join(str(c) for c in self.args)
        return f"{self.name}({inner})"


_INFIX = frozenset(o.value for o in BINARY_OPS)


def check_arity(node: Operation) -> Op:
    """
    Resolve a node's operation and check its number of children.

    Returns:
        The node's Op.

    Raises:
        UnknownOperationError: If the name is not a known operation.
        ArityError: If the child count does not match the operation.
    """
    operation = node.op
    if len(node.args) != operation.arity:
        raise ArityError(node.name, operation.arity, len(node.args))
    return operation


# Constructors

def num(value: float) -> Number:
    """Create a numeric literal."""
    return Number(value)


def var(name: str) -> Variable:
    """Create a variable reference."""
    return Variable(name)


def op(name: Union[str, Op], *children: ExprLike) -> Operation:
    """Create an operation node from a name and its children."""
    return Operation(name, tuple(_to_expr(c) for c in children))


def negate(e: ExprLike) -> Operation:
    """Negation: -e."""
    return op(Op.NEGATE, e)


def sin(e: ExprLike) -> Operation:
    """Sine, argument in radians."""
    return op(Op.SIN, e)


def cos(e: ExprLike) -> Operation:
    """Cosine, argument in radians."""
    return op(Op.COS, e)


def to_double_node(e: ExprLike) -> Operation:
    """The `toDouble(e)` command."""
    return op(Op.TO_DOUBLE, e)


def simplify_node(e: ExprLike) -> Operation:
    """The `simplify(e)` command."""
    return op(Op.SIMPLIFY, e)


def plot_node(
    body: ExprLike,
    variable: Union[Variable, str],
    minimum: ExprLike,
    maximum: ExprLike,
    step: ExprLike,
) -> Operation:
    """The `plot(body, variable, min, max, step)` command."""
    if isinstance(variable, str):
        variable = Variable(variable)
    return op(Op.PLOT, body, variable, minimum, maximum, step)
