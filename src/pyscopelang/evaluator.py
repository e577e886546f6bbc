"""
ScopeLang Evaluator
Implements big-step evaluation: rho, sigma |- e ⇓ v, sigma'

The environment rho maps names to addresses and is threaded by value
through every recursive call. The memory sigma (a heap region and a stack
region) holds the contents of those addresses and is shared by the whole
run: let-bindings live on the stack for the extent of their body, pairs
live on the heap forever.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from pyscopelang.types import (
    Expr, Value,
    NumExpr, VarExpr, BinaryExpr, AssignExpr, WriteExpr, SeqExpr,
    IfExpr, WhileExpr, LetExpr, PairExpr, IsPairExpr, PairGetExpr, PairSetExpr,
    NUMERIC_KINDS,
    format_expr, num_val, pair_val, is_num, is_pair,
)
from pyscopelang.errors import ScopeLangError, exhaustive
from pyscopelang.env import Env, empty_env, lookup_address
from pyscopelang.operators import lookup_operator
from pyscopelang.store import HeapStore, Memory, StackStore

logger = logging.getLogger(__name__)


#==============================================================================
# Evaluation Options
#==============================================================================

@dataclass
class EvalOptions:
    """
    Options for expression evaluation.

    Attributes:
        verbosity: 0 = silent, 1 = report the result, >1 = also trace the
            expression, environment and both stores before every step
        output: Sink for write-statement text and trace lines
    """
    verbosity: int = 0
    output: Callable[[str], None] = print


#==============================================================================
# Evaluator Class
#==============================================================================

class Evaluator:
    """
    Big-step expression evaluator over a heap/stack memory.

    The evaluator implements the following inference rules:
    - E-Num:    rho |- n ⇓ n
    - E-Var:    rho(x) = a, sigma(a) = v ⇒ rho |- x ⇓ v
    - E-Let:    rho |- b ⇓ v1, a = push(), sigma[a:v1], rho[x:a] |- e ⇓ v2, pop()
                ⇒ rho |- let x = b in e ⇓ v2
    - E-Assign: rho |- e ⇓ v, rho(x) = a ⇒ rho |- x = e ⇓ v, sigma[a:v]
    - E-Pair:   rho |- l ⇓ v1, rho |- r ⇓ v2, a = allocate(2), sigma[a:v1, a+1:v2]
                ⇒ rho |- pair(l, r) ⇓ pair@a
    """

    def __init__(self, options: Optional[EvalOptions] = None):
        """
        Initialize the evaluator with fresh, empty storage.

        Args:
            options: Evaluation options (verbosity, output)
        """
        self._options = options or EvalOptions()
        self._memory = Memory()

    @property
    def options(self) -> EvalOptions:
        return self._options

    @property
    def memory(self) -> Memory:
        return self._memory

    @property
    def heap(self) -> HeapStore:
        return self._memory.heap

    @property
    def stack(self) -> StackStore:
        return self._memory.stack

    #---------------------------------------------------------------------------
    # Public Evaluation API
    #---------------------------------------------------------------------------

    def evaluate(self, expr: Expr, env: Optional[Env] = None) -> Value:
        """
        Evaluate an expression: rho |- e ⇓ v

        Args:
            expr: Expression to evaluate
            env: Address environment (empty if omitted)

        Returns:
            Result value

        Raises:
            ScopeLangError: If evaluation fails
        """
        return self._eval_expr(expr, env if env is not None else empty_env())

    def show_value(self, value: Value) -> str:
        """
        Render a value the way the write statement prints it.

        Numbers print in decimal; pairs print as (first.second), with
        nested pairs rendered recursively.
        """
        if is_num(value):
            return str(value.value)
        first = self._memory.get(value.addr)
        second = self._memory.get(value.addr + 1)
        return f"({self.show_value(first)}.{self.show_value(second)})"

    #---------------------------------------------------------------------------
    # Expression Evaluation (Dispatch)
    #---------------------------------------------------------------------------

    def _eval_expr(self, expr: Expr, env: Env) -> Value:
        """
        Main expression dispatch based on expression kind.

        Args:
            expr: Expression to evaluate
            env: Address environment

        Returns:
            Result value
        """
        self._trace(expr, env)

        kind = expr.kind

        if kind == "num":
            return self._eval_num(expr, env)
        elif kind == "var":
            return self._eval_var(expr, env)
        elif kind in NUMERIC_KINDS:
            return self._eval_numeric(expr, env)
        elif kind == "eq":
            return self._eval_eq(expr, env)
        elif kind == "deq":
            return self._eval_deq(expr, env)
        elif kind == "assign":
            return self._eval_assign(expr, env)
        elif kind == "write":
            return self._eval_write(expr, env)
        elif kind == "seq":
            return self._eval_seq(expr, env)
        elif kind == "if":
            return self._eval_if(expr, env)
        elif kind == "while":
            return self._eval_while(expr, env)
        elif kind == "let":
            return self._eval_let(expr, env)
        elif kind == "pair":
            return self._eval_pair(expr, env)
        elif kind == "isPair":
            return self._eval_is_pair(expr, env)
        elif kind in ("fst", "snd"):
            return self._eval_pair_get(expr, env)
        elif kind in ("setFst", "setSnd"):
            return self._eval_pair_set(expr, env)
        else:
            exhaustive(expr)

    #---------------------------------------------------------------------------
    # Variables and Arithmetic
    #---------------------------------------------------------------------------

    def _eval_num(self, expr: NumExpr, env: Env) -> Value:
        return num_val(expr.value)

    def _eval_var(self, expr: VarExpr, env: Env) -> Value:
        """
        E-Var: rho(x) = a    sigma(a) = v
               ------------------------
                     rho |- x ⇓ v
        """
        addr = lookup_address(env, expr.name)
        return self._memory.get(addr)

    def _eval_numeric(self, expr: BinaryExpr, env: Env) -> Value:
        """
        Arithmetic (+ - * / %) and relational (< >) operators.
        Both operands are evaluated, left first, before either is checked.
        """
        left = self._eval_expr(expr.left, env)
        right = self._eval_expr(expr.right, env)
        if not (is_num(left) and is_num(right)):
            raise ScopeLangError.non_numeric_operand()

        op = lookup_operator(expr.kind)
        if op is None:
            exhaustive(expr)
        return num_val(op.apply(left.value, right.value))

    def _eval_eq(self, expr: BinaryExpr, env: Env) -> Value:
        """
        Shallow equality: numbers by value, pairs by address identity.
        """
        left = self._eval_expr(expr.left, env)
        right = self._eval_expr(expr.right, env)
        if left.kind != right.kind:
            raise ScopeLangError.type_mismatch("cannot compare a number with a pair")
        return num_val(1 if left == right else 0)

    def _eval_deq(self, expr: BinaryExpr, env: Env) -> Value:
        """
        Deep equality: pairs compare structurally; mismatched kinds are unequal.
        """
        left = self._eval_expr(expr.left, env)
        right = self._eval_expr(expr.right, env)
        return num_val(1 if self._deep_equal(left, right) else 0)

    def _deep_equal(self, a: Value, b: Value) -> bool:
        if is_num(a) and is_num(b):
            return a.value == b.value
        if is_pair(a) and is_pair(b):
            return (
                self._deep_equal(self._memory.get(a.addr), self._memory.get(b.addr))
                and self._deep_equal(self._memory.get(a.addr + 1), self._memory.get(b.addr + 1))
            )
        return False

    #---------------------------------------------------------------------------
    # Mutation, Output and Control Flow
    #---------------------------------------------------------------------------

    def _eval_assign(self, expr: AssignExpr, env: Env) -> Value:
        """
        E-Assign: rho |- e ⇓ v    rho(x) = a
                  -------------------------
                  rho |- x = e ⇓ v, sigma[a:v]

        The environment is unchanged: the variable keeps its address.
        """
        value = self._eval_expr(expr.value, env)
        addr = lookup_address(env, expr.name)
        self._memory.set(addr, value)
        return value

    def _eval_write(self, expr: WriteExpr, env: Env) -> Value:
        value = self._eval_expr(expr.expr, env)
        self._options.output(self.show_value(value))
        return value

    def _eval_seq(self, expr: SeqExpr, env: Env) -> Value:
        """
        E-Seq: rho |- first ⇓ v1    rho |- then ⇓ v2
               ----------------------------
                    rho |- first; then ⇓ v2
        """
        self._eval_expr(expr.first, env)
        return self._eval_expr(expr.then, env)

    def _eval_if(self, expr: IfExpr, env: Env) -> Value:
        if self._test(expr.cond, env):
            return self._eval_expr(expr.then_branch, env)
        return self._eval_expr(expr.else_branch, env)

    def _eval_while(self, expr: WhileExpr, env: Env) -> Value:
        """
        E-While: rho |- cond ⇓ 0
                 ---------------------------
                 rho |- while(cond, body) ⇓ 0

        A nonzero condition evaluates the body and re-enters the loop.
        Re-entry is iterative, so loop count does not consume call depth;
        each re-entry is traced like a fresh evaluation of the loop node.
        """
        while self._test(expr.cond, env):
            self._eval_expr(expr.body, env)
            self._trace(expr, env)
        return num_val(0)

    def _test(self, cond: Expr, env: Env) -> bool:
        value = self._eval_expr(cond, env)
        if not is_num(value):
            raise ScopeLangError.non_numeric_operand("condition must be numeric")
        return value.value != 0

    #---------------------------------------------------------------------------
    # Let Binding (stack region)
    #---------------------------------------------------------------------------

    def _eval_let(self, expr: LetExpr, env: Env) -> Value:
        """
        E-Let: rho |- b ⇓ v1    a = push()    rho[x:a] |- e ⇓ v2    pop()
               ----------------------------------------------------
                          rho |- let x = b in e ⇓ v2

        The extended environment is visible to the body only. The cell is
        popped when the body finishes, so its index is reused by the next
        push and rho[x:a] must not outlive this call.
        """
        bound = self._eval_expr(expr.value, env)
        addr = self.stack.push()
        self._memory.set(addr, bound)
        try:
            return self._eval_expr(expr.body, env.extend(expr.name, addr))
        finally:
            self.stack.pop()

    #---------------------------------------------------------------------------
    # Pairs (heap region)
    #---------------------------------------------------------------------------

    def _eval_pair(self, expr: PairExpr, env: Env) -> Value:
        left = self._eval_expr(expr.left, env)
        right = self._eval_expr(expr.right, env)
        addr = self.heap.allocate(2)
        self._memory.set(addr, left)
        self._memory.set(addr + 1, right)
        return pair_val(addr)

    def _eval_is_pair(self, expr: IsPairExpr, env: Env) -> Value:
        value = self._eval_expr(expr.expr, env)
        return num_val(1 if is_pair(value) else 0)

    def _eval_pair_get(self, expr: PairGetExpr, env: Env) -> Value:
        value = self._eval_expr(expr.expr, env)
        if not is_pair(value):
            raise ScopeLangError.not_a_pair(expr.kind)
        offset = 0 if expr.kind == "fst" else 1
        return self._memory.get(value.addr + offset)

    def _eval_pair_set(self, expr: PairSetExpr, env: Env) -> Value:
        """
        Overwrite one component in place. The result refers to the same
        address, so every alias of the pair observes the change.
        """
        target = self._eval_expr(expr.pair, env)
        if not is_pair(target):
            raise ScopeLangError.not_a_pair(expr.kind)
        value = self._eval_expr(expr.value, env)
        offset = 0 if expr.kind == "setFst" else 1
        self._memory.set(target.addr + offset, value)
        return pair_val(target.addr)

    #---------------------------------------------------------------------------
    # Utility Functions
    #---------------------------------------------------------------------------

    def _trace(self, expr: Expr, env: Env) -> None:
        if self._options.verbosity <= 1:
            return
        out = self._options.output
        out(f"expr = {format_expr(expr)}")
        out(f"env = {env}")
        out(f"stack = {self.stack}")
        out(f"heap = {self.heap}")


#==============================================================================
# Program Evaluation (High-Level API)
#==============================================================================

def run_program(expr: Expr, options: Optional[EvalOptions] = None) -> int:
    """
    Evaluate a whole program and return its integer result.

    The program runs in an empty environment with fresh storage. After
    evaluation the stack must be empty and the value must be a number.

    Args:
        expr: Program expression
        options: Evaluation options (optional)

    Returns:
        The program's integer value

    Raises:
        ScopeLangError: If evaluation fails, the stack is left unbalanced,
            or the program does not evaluate to a number
    """
    evaluator = Evaluator(options)
    logger.debug("running program")
    value = evaluator.evaluate(expr)

    if evaluator.options.verbosity > 0:
        evaluator.options.output(f"Evaluates to: {value}")
    if not evaluator.stack.is_empty():
        raise ScopeLangError.stack_not_empty(evaluator.stack.stack_pointer)
    if not is_num(value):
        raise ScopeLangError.non_numeric_result()

    logger.debug("program finished with %d", value.value)
    return value.value


#==============================================================================
# Convenience Functions
#==============================================================================

def create_evaluator(options: Optional[EvalOptions] = None) -> Evaluator:
    """
    Create an evaluator instance with fresh storage.

    Args:
        options: Evaluation options (optional)

    Returns:
        New Evaluator instance
    """
    return Evaluator(options)


def evaluate(expr: Expr, env: Optional[Env] = None, options: Optional[EvalOptions] = None) -> Value:
    """
    Convenience function for single-expression evaluation on fresh storage.

    Args:
        expr: Expression to evaluate
        env: Address environment (optional)
        options: Evaluation options (optional)

    Returns:
        Result value
    """
    return Evaluator(options).evaluate(expr, env)
