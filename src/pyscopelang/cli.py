#!/usr/bin/env python3
"""
ScopeLang Python CLI

A command-line interface for validating and running ScopeLang program
documents (JSON expression trees).

Usage:
    python -m pyscopelang.cli <path> [options]
    pyscopelang <path> [options]

Examples:
    pyscopelang examples/sum-loop.json
    pyscopelang examples/pairs.json --debug 1
    pyscopelang examples/pairs.json --debug 2 --log-level DEBUG
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from pyscopelang.document import decode_expr, load_document
from pyscopelang.errors import ScopeLangError
from pyscopelang.evaluator import EvalOptions, run_program
from pyscopelang.types import format_expr
from pyscopelang.validator import validate_document


#==============================================================================
# CLI Output Formatting
#==============================================================================

class Colors:
    """ANSI color codes for terminal output"""
    RESET = "\x1b[0m"
    BOLD = "\x1b[1m"
    DIM = "\x1b[2m"
    RED = "\x1b[31m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    CYAN = "\x1b[36m"


def print_msg(msg: str, color: str = Colors.RESET) -> None:
    """Print a message with optional color"""
    print(f"{color}{msg}{Colors.RESET}")


#==============================================================================
# Main CLI
#==============================================================================

def run_document(
    path: str,
    debug: int = 0,
    validate_only: bool = False,
) -> int:
    """
    Run a ScopeLang program document.

    Args:
        path: Path to the document
        debug: Verbosity level (0 silent, 1 input/AST/result, >1 trace)
        validate_only: Only validate, don't evaluate

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    doc = load_document(path)
    if doc is None:
        print_msg(f"Error: Could not load document: {path}", Colors.RED)
        return 1

    validation_result = validate_document(doc)
    if not validation_result.valid:
        print_msg("Validation failed:", Colors.RED)
        for error in validation_result.errors:
            print_msg(f"  - {error.path}: {error.message}", Colors.RED)
        return 1

    if validate_only:
        print_msg("✓ Validation passed", Colors.GREEN)
        return 0

    program = decode_expr(doc["program"], "$.program")
    if debug > 0:
        print(f"Input:  {doc.get('description', json.dumps(doc['program']))}")
        print("AST:    " + format_expr(program))

    try:
        result = run_program(program, EvalOptions(verbosity=debug))
    except ScopeLangError as e:
        print_msg(f"Interp Error: {e.message}", Colors.RED)
        return 1
    except RecursionError:
        print_msg("Interp Error: maximum recursion depth exceeded", Colors.RED)
        return 1

    print(result)

    if "expected_result" in doc and debug > 0:
        expected = doc["expected_result"]
        if result == expected:
            print_msg(f"✓ Matches expected result ({expected})", Colors.GREEN)
        else:
            print_msg(f"✗ Expected {expected}", Colors.YELLOW)

    return 0


def show_help() -> None:
    """Show help message"""
    print_msg(f"\n{Colors.BOLD}ScopeLang Python CLI{Colors.RESET}\n")
    print_msg(f"{Colors.BOLD}Usage:{Colors.RESET}")
    print("  pyscopelang <path> [options]\n")
    print_msg(f"{Colors.BOLD}Examples:{Colors.RESET}")
    print_msg("  pyscopelang examples/sum-loop.json", Colors.CYAN)
    print_msg("  pyscopelang examples/pairs.json --debug 2", Colors.CYAN)
    print()
    print_msg(f"{Colors.BOLD}Options:{Colors.RESET}")
    print("  -d, --debug <level>     0 silent, 1 show input/AST/result, 2 trace every step")
    print("  --validate              Only validate, don't evaluate")
    print("  --log-level <level>     Logging level (DEBUG, INFO, WARNING, ...)")
    print("  -h, --help              Show this help message")
    print()


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        description="ScopeLang Python CLI - Run and validate ScopeLang documents",
        add_help=False,  # We'll handle help ourselves
    )

    parser.add_argument(
        "path",
        nargs="?",
        help="Path to the ScopeLang document",
    )

    parser.add_argument(
        "-d", "--debug",
        type=int,
        default=0,
        help="Verbosity level",
    )

    parser.add_argument(
        "--validate",
        action="store_true",
        help="Only validate, don't evaluate",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        dest="log_level",
        default="WARNING",
        help="Logging level",
    )

    parser.add_argument(
        "-h", "--help",
        action="store_true",
        help="Show help message",
    )

    args = parser.parse_args(argv)

    if args.help or not args.path:
        show_help()
        return 0

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    return run_document(
        args.path,
        debug=args.debug,
        validate_only=args.validate,
    )


if __name__ == "__main__":
    sys.exit(main())
