"""
ScopeLang Numeric Operators
Arithmetic and relational operators over integers

Each operator is registered under its expression kind. Implementations
receive plain ints (operand checking happens in the evaluator) and return
the integer result; relational operators return 1 or 0.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from pyscopelang.errors import ScopeLangError


#==============================================================================
# Operator Class
#==============================================================================

@dataclass(frozen=True)
class NumericOperator:
    """
    A binary operator over integers.

    Attributes:
        kind: Expression kind the operator implements (e.g. "add")
        symbol: Surface symbol, shown by str() (e.g. "+")
        impl: Implementation taking two ints and returning an int
    """
    kind: str
    symbol: str
    impl: Callable[[int, int], int]

    def apply(self, a: int, b: int) -> int:
        return self.impl(a, b)

    def __str__(self) -> str:
        return f"NumericOperator({self.kind}, {self.symbol!r})"


#==============================================================================
# Integer Division (truncating toward zero)
#==============================================================================

def trunc_div(a: int, b: int) -> int:
    """
    Integer division truncating toward zero.

    Raises:
        ScopeLangError: If b is zero
    """
    if b == 0:
        raise ScopeLangError.divide_by_zero()
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def trunc_rem(a: int, b: int) -> int:
    """
    Remainder matching trunc_div; the sign follows the dividend.

    Raises:
        ScopeLangError: If b is zero
    """
    return a - b * trunc_div(a, b)


#==============================================================================
# Operator Table
#==============================================================================

def _define(kind: str, symbol: str, impl: Callable[[int, int], int]) -> NumericOperator:
    return NumericOperator(kind, symbol, impl)


NUMERIC_OPERATORS: List[NumericOperator] = [
    _define("add", "+", lambda a, b: a + b),
    _define("sub", "-", lambda a, b: a - b),
    _define("mul", "*", lambda a, b: a * b),
    _define("div", "/", trunc_div),
    _define("rem", "%", trunc_rem),
    _define("lt", "<", lambda a, b: 1 if a < b else 0),
    _define("gt", ">", lambda a, b: 1 if a > b else 0),
]

_REGISTRY: Dict[str, NumericOperator] = {op.kind: op for op in NUMERIC_OPERATORS}


def lookup_operator(kind: str) -> Optional[NumericOperator]:
    """
    Look up a numeric operator by expression kind.

    Args:
        kind: Expression kind (e.g. "add", "lt")

    Returns:
        The operator if registered, None otherwise
    """
    return _REGISTRY.get(kind)
