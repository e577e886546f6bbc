"""
ScopeLang Type Definitions
Implements the Address, Value, and Expression AST domains

This module provides frozen dataclasses for immutable representations,
using Union types with Literal 'kind' fields for dispatch.
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from typing import (
    Union,
    Literal,
    TypeAlias,
)


#==============================================================================
# Address Domain (storage locations)
#==============================================================================

@dataclass(frozen=True)
class HeapAddr:
    """Location in the heap region"""
    kind: Literal["heap"]
    index: int

    def __add__(self, offset: int) -> HeapAddr:
        return HeapAddr("heap", self.index + offset)

    def __str__(self) -> str:
        return f"heap[{self.index}]"


@dataclass(frozen=True)
class StackAddr:
    """Location in the stack region"""
    kind: Literal["stack"]
    index: int

    def __add__(self, offset: int) -> StackAddr:
        return StackAddr("stack", self.index + offset)

    def __str__(self) -> str:
        return f"stack[{self.index}]"


Address: TypeAlias = Union[HeapAddr, StackAddr]


def heap_addr(index: int) -> HeapAddr:
    return HeapAddr("heap", index)


def stack_addr(index: int) -> StackAddr:
    return StackAddr("stack", index)


#==============================================================================
# Value Domain (v - runtime values)
#==============================================================================

@dataclass(frozen=True)
class NumV:
    """Integer value"""
    kind: Literal["num"]
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class PairV:
    """Reference to two contiguous cells holding a pair's components"""
    kind: Literal["pair"]
    addr: Address

    def __str__(self) -> str:
        return f"pair@{self.addr}"


Value: TypeAlias = Union[NumV, PairV]


def num_val(value: int) -> NumV:
    return NumV("num", value)


def pair_val(addr: Address) -> PairV:
    return PairV("pair", addr)


def is_num(v: Value) -> bool:
    """Check if value is a number"""
    return v.kind == "num"


def is_pair(v: Value) -> bool:
    """Check if value is a pair reference"""
    return v.kind == "pair"


#==============================================================================
# Expression AST (e - syntactic expressions)
#==============================================================================

BinaryKind: TypeAlias = Literal[
    "add", "sub", "mul", "div", "rem",  # arithmetic
    "lt", "gt",                         # relational
    "eq", "deq",                        # shallow / deep equality
]

NUMERIC_KINDS: frozenset[str] = frozenset({"add", "sub", "mul", "div", "rem", "lt", "gt"})
BINARY_KINDS: frozenset[str] = NUMERIC_KINDS | {"eq", "deq"}


@dataclass(frozen=True)
class NumExpr:
    """Integer literal"""
    kind: Literal["num"]
    value: int


@dataclass(frozen=True)
class VarExpr:
    """Variable reference"""
    kind: Literal["var"]
    name: str


@dataclass(frozen=True)
class BinaryExpr:
    """Binary operator application"""
    kind: BinaryKind
    left: Expr
    right: Expr


@dataclass(frozen=True)
class AssignExpr:
    """Assignment to an existing variable"""
    kind: Literal["assign"]
    name: str
    value: Expr


@dataclass(frozen=True)
class WriteExpr:
    """Output statement"""
    kind: Literal["write"]
    expr: Expr


@dataclass(frozen=True)
class SeqExpr:
    """Sequencing: evaluate first, then then"""
    kind: Literal["seq"]
    first: Expr
    then: Expr


@dataclass(frozen=True)
class IfExpr:
    """Conditional expression"""
    kind: Literal["if"]
    cond: Expr
    then_branch: Expr
    else_branch: Expr


@dataclass(frozen=True)
class WhileExpr:
    """While loop"""
    kind: Literal["while"]
    cond: Expr
    body: Expr


@dataclass(frozen=True)
class LetExpr:
    """Let binding, stack-allocated for the extent of body"""
    kind: Literal["let"]
    name: str
    value: Expr
    body: Expr


@dataclass(frozen=True)
class PairExpr:
    """Heap-allocated pair construction"""
    kind: Literal["pair"]
    left: Expr
    right: Expr


@dataclass(frozen=True)
class IsPairExpr:
    """Pair predicate"""
    kind: Literal["isPair"]
    expr: Expr


@dataclass(frozen=True)
class PairGetExpr:
    """First/second component accessor"""
    kind: Literal["fst", "snd"]
    expr: Expr


@dataclass(frozen=True)
class PairSetExpr:
    """First/second component mutator"""
    kind: Literal["setFst", "setSnd"]
    pair: Expr
    value: Expr


Expr: TypeAlias = Union[
    NumExpr,
    VarExpr,
    BinaryExpr,
    AssignExpr,
    WriteExpr,
    SeqExpr,
    IfExpr,
    WhileExpr,
    LetExpr,
    PairExpr,
    IsPairExpr,
    PairGetExpr,
    PairSetExpr,
]


#==============================================================================
# Expression Constructors
#==============================================================================

def num_expr(value: int) -> NumExpr:
    return NumExpr("num", value)


def var_expr(name: str) -> VarExpr:
    return VarExpr("var", name)


def binary_expr(kind: BinaryKind, left: Expr, right: Expr) -> BinaryExpr:
    if kind not in BINARY_KINDS:
        raise ValueError(f"Unknown binary operator kind: {kind}")
    return BinaryExpr(kind, left, right)


def add_expr(left: Expr, right: Expr) -> BinaryExpr:
    return BinaryExpr("add", left, right)


def sub_expr(left: Expr, right: Expr) -> BinaryExpr:
    return BinaryExpr("sub", left, right)


def mul_expr(left: Expr, right: Expr) -> BinaryExpr:
    return BinaryExpr("mul", left, right)


def div_expr(left: Expr, right: Expr) -> BinaryExpr:
    return BinaryExpr("div", left, right)


def rem_expr(left: Expr, right: Expr) -> BinaryExpr:
    return BinaryExpr("rem", left, right)


def lt_expr(left: Expr, right: Expr) -> BinaryExpr:
    return BinaryExpr("lt", left, right)


def gt_expr(left: Expr, right: Expr) -> BinaryExpr:
    return BinaryExpr("gt", left, right)


def eq_expr(left: Expr, right: Expr) -> BinaryExpr:
    return BinaryExpr("eq", left, right)


def deq_expr(left: Expr, right: Expr) -> BinaryExpr:
    return BinaryExpr("deq", left, right)


def assign_expr(name: str, value: Expr) -> AssignExpr:
    return AssignExpr("assign", name, value)


def write_expr(expr: Expr) -> WriteExpr:
    return WriteExpr("write", expr)


def seq_expr(first: Expr, then: Expr) -> SeqExpr:
    return SeqExpr("seq", first, then)


def seq_exprs(*exprs: Expr) -> Expr:
    """Right-nested sequence of one or more expressions"""
    if not exprs:
        raise ValueError("seq_exprs requires at least one expression")
    result = exprs[-1]
    for expr in reversed(exprs[:-1]):
        result = seq_expr(expr, result)
    return result


def if_expr(cond: Expr, then_branch: Expr, else_branch: Expr) -> IfExpr:
    return IfExpr("if", cond, then_branch, else_branch)


def while_expr(cond: Expr, body: Expr) -> WhileExpr:
    return WhileExpr("while", cond, body)


def let_expr(name: str, value: Expr, body: Expr) -> LetExpr:
    return LetExpr("let", name, value, body)


def pair_expr(left: Expr, right: Expr) -> PairExpr:
    return PairExpr("pair", left, right)


def is_pair_expr(expr: Expr) -> IsPairExpr:
    return IsPairExpr("isPair", expr)


def fst_expr(expr: Expr) -> PairGetExpr:
    return PairGetExpr("fst", expr)


def snd_expr(expr: Expr) -> PairGetExpr:
    return PairGetExpr("snd", expr)


def set_fst_expr(pair: Expr, value: Expr) -> PairSetExpr:
    return PairSetExpr("setFst", pair, value)


def set_snd_expr(pair: Expr, value: Expr) -> PairSetExpr:
    return PairSetExpr("setSnd", pair, value)


#==============================================================================
# Expression Formatting
#==============================================================================

def format_expr(expr: Expr) -> str:
    """
    Render an expression in constructor form.

    Example:
        Let(x, Num(5), Seq(Assign(x, Add(Var(x), Num(1))), Var(x)))
    """
    label = expr.kind[0].upper() + expr.kind[1:]
    parts = []
    for f in fields(expr):
        if f.name == "kind":
            continue
        part = getattr(expr, f.name)
        if isinstance(part, (str, int)):
            parts.append(str(part))
        else:
            parts.append(format_expr(part))
    return f"{label}({', '.join(parts)})"
