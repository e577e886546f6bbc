"""
Pytest configuration and fixtures for ScopeLang evaluator tests.

Provides reusable fixtures for:
- Evaluating expressions on a fresh evaluator with captured output
- Running whole programs through the top-level contract
- Locating the example program documents
"""

from pathlib import Path

import pytest

from pyscopelang import EvalOptions, Evaluator, run_program


@pytest.fixture
def output():
    """Lines written by write statements and tracing."""
    return []


@pytest.fixture
def evaluator(output):
    """A fresh evaluator whose output is captured in `output`."""
    return Evaluator(EvalOptions(output=output.append))


@pytest.fixture
def run(output):
    """
    Fixture that returns a function to run a whole program.

    Usage:
        assert run(add_expr(num_expr(1), num_expr(2))) == 3
    """
    def _run(expr, verbosity=0):
        return run_program(expr, EvalOptions(verbosity=verbosity, output=output.append))
    return _run


@pytest.fixture
def examples_dir():
    """Path to the example program documents."""
    return Path(__file__).parent.parent / "examples"
