"""Tests for the numeric operator table."""

import pytest

from pyscopelang import ErrorCodes, ScopeLangError
from pyscopelang.operators import NUMERIC_OPERATORS, lookup_operator, trunc_div, trunc_rem


class TestOperatorTable:
    """Tests for operator lookup."""

    def test_every_numeric_kind_is_registered(self):
        kinds = {op.kind for op in NUMERIC_OPERATORS}
        assert kinds == {"add", "sub", "mul", "div", "rem", "lt", "gt"}

    def test_lookup(self):
        assert lookup_operator("mul").apply(6, 7) == 42
        assert lookup_operator("sub").symbol == "-"

    def test_str_shows_symbol(self):
        assert str(lookup_operator("add")) == "NumericOperator(add, '+')"

    def test_lookup_unknown(self):
        assert lookup_operator("eq") is None

    def test_relational_results_are_zero_or_one(self):
        assert lookup_operator("lt").apply(1, 2) == 1
        assert lookup_operator("lt").apply(2, 2) == 0
        assert lookup_operator("gt").apply(3, 2) == 1
        assert lookup_operator("gt").apply(2, 3) == 0


class TestTruncatingDivision:
    """Division and remainder truncate toward zero."""

    @pytest.mark.parametrize("a, b, q, r", [
        (7, 2, 3, 1),
        (-7, 2, -3, -1),
        (7, -2, -3, 1),
        (-7, -2, 3, -1),
        (6, 3, 2, 0),
        (0, 5, 0, 0),
    ])
    def test_quotient_and_remainder(self, a, b, q, r):
        assert trunc_div(a, b) == q
        assert trunc_rem(a, b) == r

    def test_divide_by_zero(self):
        with pytest.raises(ScopeLangError) as exc_info:
            trunc_div(10, 0)
        assert exc_info.value.code == ErrorCodes.DIVIDE_BY_ZERO

    def test_remainder_by_zero(self):
        with pytest.raises(ScopeLangError) as exc_info:
            trunc_rem(10, 0)
        assert exc_info.value.code == ErrorCodes.DIVIDE_BY_ZERO
