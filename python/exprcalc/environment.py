# ExprCalc - Environment
# Copyright (c) 2024 ExprCalc Contributors. All rights reserved.

"""
Variable bindings and the plot sink for one calculator session.

Every evaluator takes the Environment as an explicit argument; there is no
module-level session state.
"""

from __future__ import annotations
from contextlib import contextmanager
from typing import Dict, Iterator, Mapping, Optional, Tuple
import logging

from .config import Config
from .exceptions import CyclicDefinitionError, UndefinedVariableError
from .expr import Expr, ExprLike, _to_expr
from .sink import PlotSink, RecordingSink

logger = logging.getLogger(__name__)

# Names of the variables currently being resolved, outermost first
Chain = Tuple[str, ...]


class Environment:
    """
    Mapping from variable name to bound expression tree, plus a plot sink.

    Example:
        >>> env = Environment()
        >>> env.bind('x', 3)
        >>> env.lookup('x')
        Number(value=3.0)
        >>> with env.scoped_binding('t', 0.5):
        ...     't' in env
        True
        >>> 't' in env
        False
    """

    def __init__(
        self,
        variables: Optional[Mapping[str, ExprLike]] = None,
        sink: Optional[PlotSink] = None,
        config: Optional[Config] = None,
    ):
        self.variables: Dict[str, Expr] = {}
        for name, value in (variables or {}).items():
            self.variables[name] = _to_expr(value)
        self.sink: PlotSink = sink if sink is not None else RecordingSink(max_calls=1)
        self.config = config if config is not None else Config()

    def lookup(self, name: str) -> Optional[Expr]:
        """Return the tree bound to name, or None when unbound."""
        return self.variables.get(name)

    def bind(self, name: str, value: ExprLike) -> None:
        self.variables[name] = _to_expr(value)

    def unbind(self, name: str) -> Optional[Expr]:
        """Remove a binding, returning the removed tree if there was one."""
        return self.variables.pop(name, None)

    def __contains__(self, name: object) -> bool:
        return name in self.variables

    def __len__(self) -> int:
        return len(self.variables)

    @contextmanager
    def scoped_binding(self, name: str, value: ExprLike) -> Iterator[None]:
        """
        Bind name for the duration of a with-block.

        On exit, by return or by exception, the binding that existed before
        the block is put back; if there was none, name is unbound again.
        Rebinding name inside the block is allowed.
        """
        previous = self.lookup(name)
        self.bind(name, value)
        logger.debug("Bound %s temporarily", name)
        try:
            yield
        finally:
            if previous is None:
                self.unbind(name)
            else:
                self.variables[name] = previous
            logger.debug("Released temporary binding of %s", name)

    def resolve(self, name: str, chain: Chain = ()) -> Tuple[Expr, Chain]:
        """
        Follow one link of a binding chain.

        Args:
            name: Variable to look up.
            chain: Names already being resolved by the caller.

        Returns:
            The bound tree and the chain extended with name.

        Raises:
            CyclicDefinitionError: If name is already in chain.
            UndefinedVariableError: If name is unbound.
        """
        if name in chain:
            raise CyclicDefinitionError(chain + (name,))
        bound = self.lookup(name)
        if bound is None:
            raise UndefinedVariableError(name)
        return bound, chain + (name,)

    def __repr__(self) -> str:
        names = ", ".join(sorted(self.variables))
        return f"Environment({{{names}}}, sink={type(self.sink).__name__})"
