"""
ScopeLang Python Implementation

A tree-walking evaluator for ScopeLang, a small imperative expression
language with integers, mutable variables, lexical let-bindings and
mutable heap-allocated pairs.

Variables live in a stack region released when their let-scope ends;
pairs live in a heap region that is never reclaimed.
"""

from __future__ import annotations

#==============================================================================
# Types
#==============================================================================

from pyscopelang.types import (
    # Addresses
    Address,
    HeapAddr,
    StackAddr,
    heap_addr,
    stack_addr,
    # Values
    Value,
    NumV,
    PairV,
    num_val,
    pair_val,
    is_num,
    is_pair,
    # Expressions
    Expr,
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
    format_expr,
)

#==============================================================================
# Expression Constructors
#==============================================================================

from pyscopelang.types import (
    num_expr,
    var_expr,
    binary_expr,
    add_expr,
    sub_expr,
    mul_expr,
    div_expr,
    rem_expr,
    lt_expr,
    gt_expr,
    eq_expr,
    deq_expr,
    assign_expr,
    write_expr,
    seq_expr,
    seq_exprs,
    if_expr,
    while_expr,
    let_expr,
    pair_expr,
    is_pair_expr,
    fst_expr,
    snd_expr,
    set_fst_expr,
    set_snd_expr,
)

#==============================================================================
# Errors, Storage and Environment
#==============================================================================

from pyscopelang.errors import (
    ErrorCodes,
    ScopeLangError,
    ValidationError,
    ValidationResult,
)

from pyscopelang.store import (
    Store,
    HeapStore,
    StackStore,
    Memory,
)

from pyscopelang.env import (
    Env,
    empty_env,
)

#==============================================================================
# Evaluation
#==============================================================================

from pyscopelang.evaluator import (
    EvalOptions,
    Evaluator,
    create_evaluator,
    evaluate,
    run_program,
)

from pyscopelang.document import (
    decode_expr,
    load_document,
    parse_document,
    parse_program,
)

from pyscopelang.validator import (
    validate_document,
    validate_program,
)

__version__ = "0.1.0"

__all__ = [
    # Addresses and values
    "Address", "HeapAddr", "StackAddr", "heap_addr", "stack_addr",
    "Value", "NumV", "PairV", "num_val", "pair_val", "is_num", "is_pair",
    # Expressions
    "Expr", "NumExpr", "VarExpr", "BinaryExpr", "AssignExpr", "WriteExpr",
    "SeqExpr", "IfExpr", "WhileExpr", "LetExpr", "PairExpr", "IsPairExpr",
    "PairGetExpr", "PairSetExpr", "format_expr",
    "num_expr", "var_expr", "binary_expr", "add_expr", "sub_expr", "mul_expr",
    "div_expr", "rem_expr", "lt_expr", "gt_expr", "eq_expr", "deq_expr",
    "assign_expr", "write_expr", "seq_expr", "seq_exprs", "if_expr",
    "while_expr", "let_expr", "pair_expr", "is_pair_expr", "fst_expr",
    "snd_expr", "set_fst_expr", "set_snd_expr",
    # Errors
    "ErrorCodes", "ScopeLangError", "ValidationError", "ValidationResult",
    # Storage and environment
    "Store", "HeapStore", "StackStore", "Memory", "Env", "empty_env",
    # Evaluation
    "EvalOptions", "Evaluator", "create_evaluator", "evaluate", "run_program",
    # Documents
    "decode_expr", "load_document", "parse_document", "parse_program",
    "validate_document", "validate_program",
]
