# ExprCalc - Environment Tests
# Copyright (c) 2024 ExprCalc Contributors. All rights reserved.

"""Tests for variable bindings, scoped bindings and chain resolution."""

import pytest

from exprcalc.config import Config
from exprcalc.environment import Environment
from exprcalc.exceptions import CyclicDefinitionError, UndefinedVariableError
from exprcalc.expr import num, var
from exprcalc.sink import RecordingSink


class TestBindings:
    """Tests for lookup, bind and unbind."""

    def test_initial_values_converted(self):
        env = Environment({'x': 3, 'y': var('x') + 1})
        assert env.lookup('x') == num(3)
        assert env.lookup('y') == var('x') + 1

    def test_lookup_missing(self):
        assert Environment().lookup('x') is None

    def test_bind_and_contains(self):
        env = Environment()
        env.bind('x', 2.5)
        assert 'x' in env
        assert len(env) == 1

    def test_unbind_returns_previous(self):
        env = Environment({'x': 1})
        assert env.unbind('x') == num(1)
        assert 'x' not in env

    def test_unbind_missing_is_noop(self):
        assert Environment().unbind('x') is None

    def test_defaults(self):
        env = Environment()
        assert isinstance(env.sink, RecordingSink)
        assert env.sink.max_calls == 1
        assert env.config == Config()

    def test_sessions_isolated(self):
        a = Environment()
        b = Environment()
        a.bind('x', 1)
        assert 'x' not in b


class TestScopedBinding:
    """Tests for temporary bindings."""

    def test_removed_after_block(self):
        env = Environment()
        with env.scoped_binding('t', 1):
            assert env.lookup('t') == num(1)
        assert 't' not in env

    def test_removed_after_exception(self):
        env = Environment()
        with pytest.raises(RuntimeError):
            with env.scoped_binding('t', 1):
                raise RuntimeError("boom")
        assert 't' not in env

    def test_rebinding_inside_block(self):
        env = Environment()
        with env.scoped_binding('t', 1):
            env.bind('t', 2)
            assert env.lookup('t') == num(2)
        assert 't' not in env

    def test_previous_binding_restored(self):
        env = Environment({'t': 9})
        with env.scoped_binding('t', 1):
            pass
        assert env.lookup('t') == num(9)


class TestResolve:
    """Tests for following binding chains."""

    def test_resolve_extends_chain(self):
        env = Environment({'a': var('b')})
        bound, chain = env.resolve('a')
        assert bound == var('b')
        assert chain == ('a',)

    def test_resolve_undefined(self):
        with pytest.raises(UndefinedVariableError) as exc_info:
            Environment().resolve('q')
        assert exc_info.value.name == 'q'

    def test_resolve_cycle(self):
        env = Environment({'a': var('b'), 'b': var('a')})
        with pytest.raises(CyclicDefinitionError) as exc_info:
            env.resolve('a', ('a', 'b'))
        assert exc_info.value.chain == ['a', 'b', 'a']
