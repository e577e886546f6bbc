"""Tests for the immutable address environment."""

import pytest

from pyscopelang import Env, ErrorCodes, ScopeLangError, empty_env, heap_addr, stack_addr
from pyscopelang.env import lookup_address


class TestEnv:
    """Tests for Env."""

    def test_empty(self):
        env = empty_env()
        assert len(env) == 0
        assert env.lookup("x") is None
        assert str(env) == "{}"

    def test_extend_returns_new_env(self):
        env = empty_env()
        extended = env.extend("x", stack_addr(0))
        assert "x" in extended
        assert "x" not in env
        assert extended.lookup("x") == stack_addr(0)

    def test_extend_shadows_without_mutating(self):
        outer = Env({"x": stack_addr(0)})
        inner = outer.extend("x", stack_addr(1))
        assert inner.lookup("x") == stack_addr(1)
        assert outer.lookup("x") == stack_addr(0)

    def test_bindings_is_a_copy(self):
        env = Env({"x": stack_addr(0)})
        env.bindings["y"] = heap_addr(0)
        assert "y" not in env

    def test_str(self):
        env = empty_env().extend("x", stack_addr(0)).extend("y", stack_addr(1))
        assert str(env) == "{x -> stack[0], y -> stack[1]}"


class TestLookupAddress:
    """Tests for lookup_address."""

    def test_bound(self):
        env = Env({"p": stack_addr(3)})
        assert lookup_address(env, "p") == stack_addr(3)

    def test_unbound(self):
        with pytest.raises(ScopeLangError) as exc_info:
            lookup_address(empty_env(), "nope")
        assert exc_info.value.code == ErrorCodes.UNDEFINED_VARIABLE
        assert "nope" in exc_info.value.message
