"""
Tests for whole-program runs: the top-level contract, the storage laws
and the reference scenarios.
"""

import pytest

from pyscopelang import (
    ErrorCodes,
    EvalOptions,
    Evaluator,
    ScopeLangError,
    StackStore,
    add_expr,
    assign_expr,
    deq_expr,
    div_expr,
    eq_expr,
    fst_expr,
    gt_expr,
    heap_addr,
    let_expr,
    mul_expr,
    num_expr,
    pair_expr,
    pair_val,
    seq_expr,
    seq_exprs,
    set_snd_expr,
    snd_expr,
    sub_expr,
    var_expr,
    while_expr,
    write_expr,
)


def n(value):
    return num_expr(value)


def v(name):
    return var_expr(name)


def sum_loop():
    """let n = 3 in let s = 0 in (while (n > 0) (s = s + n; n = n - 1); s)"""
    return let_expr("n", n(3), let_expr("s", n(0), seq_expr(
        while_expr(gt_expr(v("n"), n(0)), seq_expr(
            assign_expr("s", add_expr(v("s"), v("n"))),
            assign_expr("n", sub_expr(v("n"), n(1))),
        )),
        v("s"),
    )))


class TestScenarios:
    """Reference programs and their results."""

    def test_precedence(self, run):
        assert run(add_expr(n(1), mul_expr(n(2), n(3)))) == 7

    def test_assignment_in_let(self, run):
        expr = let_expr("x", n(5), seq_expr(assign_expr("x", add_expr(v("x"), n(1))), v("x")))
        assert run(expr) == 6

    def test_sum_loop(self, run):
        assert run(sum_loop()) == 6

    def test_pair_components(self, run):
        expr = let_expr("p", pair_expr(n(1), n(2)), add_expr(fst_expr(v("p")), snd_expr(v("p"))))
        assert run(expr) == 3

    def test_divide_by_zero(self, run):
        with pytest.raises(ScopeLangError) as exc_info:
            run(div_expr(n(10), n(0)))
        assert exc_info.value.code == ErrorCodes.DIVIDE_BY_ZERO

    def test_unbound_variable(self, run):
        with pytest.raises(ScopeLangError) as exc_info:
            run(add_expr(v("ghost"), n(1)))
        assert exc_info.value.code == ErrorCodes.UNDEFINED_VARIABLE


class TestTopLevelContract:
    """Tests for run_program's completion checks and reporting."""

    def test_pair_result_is_rejected(self, run):
        with pytest.raises(ScopeLangError) as exc_info:
            run(pair_expr(n(1), n(2)))
        assert exc_info.value.code == ErrorCodes.NON_NUMERIC_RESULT
        assert exc_info.value.message == "program must return a number"

    def test_residual_stack_is_rejected(self, run, monkeypatch):
        monkeypatch.setattr(StackStore, "pop", lambda self: None)
        with pytest.raises(ScopeLangError) as exc_info:
            run(let_expr("x", n(1), v("x")))
        assert exc_info.value.code == ErrorCodes.STACK_NOT_EMPTY

    def test_verbosity_one_reports_value(self, run, output):
        assert run(add_expr(n(2), n(2)), verbosity=1) == 4
        assert output == ["Evaluates to: 4"]

    def test_silent_by_default(self, run, output):
        run(n(1))
        assert output == []

    def test_write_output_precedes_report(self, run, output):
        run(seq_expr(write_expr(pair_expr(n(1), n(2))), n(0)), verbosity=1)
        assert output == ["(1.2)", "Evaluates to: 0"]

    def test_error_record(self, run):
        with pytest.raises(ScopeLangError) as exc_info:
            run(div_expr(n(1), n(0)))
        assert exc_info.value.to_dict() == {
            "kind": "error",
            "code": "DivideByZero",
            "message": "divide by zero",
        }


class TestStorageLaws:
    """Push/pop balance, monotonic allocation and aliasing."""

    def test_push_pop_balance(self, output):
        evaluator = Evaluator(EvalOptions(output=output.append))
        evaluator.evaluate(sum_loop())
        assert evaluator.stack.is_empty()

    def test_nested_lets_reach_expected_depth(self, output):
        depths = []
        evaluator = Evaluator(EvalOptions(output=output.append))

        class Probe(StackStore):
            def push(self):
                addr = super().push()
                depths.append(self.stack_pointer)
                return addr

        evaluator.memory.stack = Probe()
        evaluator.evaluate(let_expr("a", n(1), let_expr("b", n(2), let_expr("c", n(3), v("c")))))
        assert depths == [1, 2, 3]
        assert evaluator.stack.is_empty()

    def test_heap_addresses_strictly_increase(self, evaluator):
        addrs = [evaluator.evaluate(pair_expr(n(i), n(i))).addr for i in range(4)]
        assert addrs == [heap_addr(0), heap_addr(2), heap_addr(4), heap_addr(6)]

    def test_heap_is_never_reclaimed(self, evaluator):
        evaluator.evaluate(let_expr("p", pair_expr(n(1), n(2)), n(0)))
        assert evaluator.evaluate(pair_expr(n(3), n(4))) == pair_val(heap_addr(2))
        assert evaluator.heap.get(0).value == 1

    def test_shallow_vs_deep_on_fresh_pairs(self, run):
        def compare(op):
            return let_expr("a", pair_expr(n(1), n(2)), let_expr("b", pair_expr(n(1), n(2)),
                            op(v("a"), v("b"))))
        assert run(compare(eq_expr)) == 0
        assert run(compare(deq_expr)) == 1

    def test_assignment_invisible_after_scope(self, run):
        expr = seq_exprs(
            let_expr("x", n(1), assign_expr("x", n(99))),
            let_expr("y", n(2), v("y")),
        )
        assert run(expr) == 2

    def test_mutation_seen_through_alias(self, run):
        expr = let_expr("p", pair_expr(n(1), n(2)), let_expr("q", v("p"), seq_exprs(
            set_snd_expr(v("q"), n(9)),
            add_expr(mul_expr(snd_expr(v("p")), n(10)), fst_expr(v("p"))),
        )))
        assert run(expr) == 91
