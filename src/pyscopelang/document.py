"""
ScopeLang Program Documents
Loading JSON program documents and decoding them into expression trees

A document wraps a kind-tagged expression tree:

    {
        "version": "1.0.0",
        "program": {"kind": "add",
                    "left": {"kind": "num", "value": 1},
                    "right": {"kind": "num", "value": 2}},
        "expected_result": 3
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pyscopelang.errors import ScopeLangError, ValidationError
from pyscopelang.types import (
    Expr,
    BINARY_KINDS,
    AssignExpr, BinaryExpr, IfExpr, IsPairExpr, LetExpr, NumExpr, PairExpr,
    PairGetExpr, PairSetExpr, SeqExpr, VarExpr, WhileExpr, WriteExpr,
)
from pyscopelang.validator import validate_document, validate_program

Document = dict[str, Any]


#==============================================================================
# Document Loading
#==============================================================================

def load_document(path: str | Path) -> Document | None:
    """
    Load a program document from a file path.

    Args:
        path: Path to the JSON document

    Returns:
        The parsed document, or None if the file is missing, not UTF-8 or not JSON
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
        return json.loads(content)
    except (FileNotFoundError, json.JSONDecodeError, UnicodeDecodeError, OSError):
        return None


#==============================================================================
# Decoding
#==============================================================================

def decode_expr(node: Any, path: str = "$") -> Expr:
    """
    Convert a JSON expression node into an expression tree.

    Args:
        node: JSON node (normally already validated)
        path: JSON path of the node, for error messages

    Returns:
        The decoded expression

    Raises:
        ScopeLangError: If the node is malformed
    """
    if not isinstance(node, dict):
        raise _malformed(path, "Expression must be an object")

    kind = node.get("kind")
    if not isinstance(kind, str):
        raise _malformed(path, f"Unknown expression kind: {kind!r}")

    def sub(field_name: str) -> Expr:
        if field_name not in node:
            raise _malformed(path, f"Missing required field '{field_name}' for {kind}")
        return decode_expr(node[field_name], f"{path}.{field_name}")

    def name() -> str:
        value = node.get("name")
        if not isinstance(value, str):
            raise _malformed(f"{path}.name", "Name must be a string")
        return value

    if kind == "num":
        value = node.get("value")
        if not isinstance(value, int) or isinstance(value, bool):
            raise _malformed(f"{path}.value", "Value must be an integer")
        return NumExpr("num", value)
    elif kind == "var":
        return VarExpr("var", name())
    elif kind in BINARY_KINDS:
        return BinaryExpr(kind, sub("left"), sub("right"))
    elif kind == "assign":
        return AssignExpr("assign", name(), sub("value"))
    elif kind == "write":
        return WriteExpr("write", sub("expr"))
    elif kind == "seq":
        return SeqExpr("seq", sub("first"), sub("then"))
    elif kind == "if":
        return IfExpr("if", sub("cond"), sub("then_branch"), sub("else_branch"))
    elif kind == "while":
        return WhileExpr("while", sub("cond"), sub("body"))
    elif kind == "let":
        return LetExpr("let", name(), sub("value"), sub("body"))
    elif kind == "pair":
        return PairExpr("pair", sub("left"), sub("right"))
    elif kind == "isPair":
        return IsPairExpr("isPair", sub("expr"))
    elif kind in ("fst", "snd"):
        return PairGetExpr(kind, sub("expr"))
    elif kind in ("setFst", "setSnd"):
        return PairSetExpr(kind, sub("pair"), sub("value"))
    else:
        raise _malformed(path, f"Unknown expression kind: {kind!r}")


def _malformed(path: str, message: str) -> ScopeLangError:
    return ScopeLangError.validation([ValidationError(path, message)])


#==============================================================================
# Validate-then-decode
#==============================================================================

def parse_program(node: Any) -> Expr:
    """
    Validate and decode a bare JSON expression tree.

    Raises:
        ScopeLangError: Listing every validation problem found
    """
    result = validate_program(node)
    if not result.valid:
        raise ScopeLangError.validation(result.errors)
    return decode_expr(node)


def parse_document(doc: Any) -> Expr:
    """
    Validate a program document and decode its program tree.

    Args:
        doc: Parsed JSON document

    Returns:
        The program expression

    Raises:
        ScopeLangError: Listing every validation problem found
    """
    result = validate_document(doc)
    if not result.valid:
        raise ScopeLangError.validation(result.errors)
    return decode_expr(doc["program"], "$.program")
