# ScopeLang Document Validator
# Manual structural validation for JSON program documents

from __future__ import annotations

import re
from typing import Any

from pyscopelang.errors import (
    ValidationError,
    combine_results,
    invalid_result,
    valid_result,
    ValidationResult,
)
from pyscopelang.types import BINARY_KINDS


#==============================================================================
# Validation Patterns
#==============================================================================

ID_PATTERN = re.compile(r'^[a-zA-Z_][a-zA-Z0-9_]*$')
SEMVER_PATTERN = re.compile(r'^\d+\.\d+\.\d+(-[a-zA-Z0-9.]+)?$')

# Required fields per node kind: "expr" for sub-expressions, "id" for names
NODE_FIELDS: dict[str, dict[str, str]] = {
    "num": {"value": "int"},
    "var": {"name": "id"},
    **{kind: {"left": "expr", "right": "expr"} for kind in BINARY_KINDS},
    "assign": {"name": "id", "value": "expr"},
    "write": {"expr": "expr"},
    "seq": {"first": "expr", "then": "expr"},
    "if": {"cond": "expr", "then_branch": "expr", "else_branch": "expr"},
    "while": {"cond": "expr", "body": "expr"},
    "let": {"name": "id", "value": "expr", "body": "expr"},
    "pair": {"left": "expr", "right": "expr"},
    "isPair": {"expr": "expr"},
    "fst": {"expr": "expr"},
    "snd": {"expr": "expr"},
    "setFst": {"pair": "expr", "value": "expr"},
    "setSnd": {"pair": "expr", "value": "expr"},
}


#==============================================================================
# Validation State
#==============================================================================

class ValidationState:
    """State tracking during validation"""

    def __init__(self) -> None:
        self.errors: list[ValidationError] = []
        self.path: list[str] = ["$"]

    def push_path(self, segment: str) -> None:
        """Push a path segment onto the validation path"""
        self.path.append(segment)

    def pop_path(self) -> None:
        """Pop the last path segment from the validation path"""
        self.path.pop()

    def current_path(self) -> str:
        """Get the current validation path as a dot-separated string"""
        return ".".join(self.path)

    def add_error(self, message: str, value: Any | None = None) -> None:
        """Add a validation error to the state"""
        self.errors.append(ValidationError(
            path=self.current_path(),
            message=message,
            value=value,
        ))

    def result(self, value: Any) -> ValidationResult:
        if self.errors:
            return invalid_result(self.errors)
        return valid_result(value)


#==============================================================================
# Primitive Validators
#==============================================================================

def validate_object(value: Any) -> bool:
    """Check if value is a dict (object)"""
    return isinstance(value, dict)


def validate_int(value: Any) -> bool:
    """Check if value is an integer (JSON booleans are rejected)"""
    return isinstance(value, int) and not isinstance(value, bool)


def validate_id(value: Any) -> bool:
    """Check if value is a valid identifier string"""
    return isinstance(value, str) and ID_PATTERN.match(value) is not None


def validate_version(value: Any) -> bool:
    """Check if value is a valid semver string"""
    return isinstance(value, str) and SEMVER_PATTERN.match(value) is not None


#==============================================================================
# Expression Validation
#==============================================================================

def validate_expr(state: ValidationState, value: Any) -> bool:
    """
    Validate an expression node and, recursively, its children.

    Every problem is recorded in the state; validation does not stop at
    the first error.

    Returns:
        True if no errors were found in this subtree
    """
    errors_before = len(state.errors)

    if not validate_object(value):
        state.add_error("Expression must be an object", value)
        return False

    kind = value.get("kind")
    if not isinstance(kind, str) or kind not in NODE_FIELDS:
        state.add_error(f"Unknown expression kind: {kind!r}", kind)
        return False

    for field_name, field_type in NODE_FIELDS[kind].items():
        state.push_path(field_name)
        if field_name not in value:
            state.add_error(f"Missing required field '{field_name}' for {kind}")
        else:
            field_value = value[field_name]
            if field_type == "expr":
                validate_expr(state, field_value)
            elif field_type == "id" and not validate_id(field_value):
                state.add_error("Name must be a valid identifier", field_value)
            elif field_type == "int" and not validate_int(field_value):
                state.add_error("Value must be an integer", field_value)
        state.pop_path()

    return len(state.errors) == errors_before


#==============================================================================
# Document Validation
#==============================================================================

def validate_program(expr: Any) -> ValidationResult:
    """
    Validate a bare expression tree.

    Args:
        expr: JSON expression node

    Returns:
        Validation result with errors if any
    """
    state = ValidationState()
    validate_expr(state, expr)
    return state.result(expr)


def _validate_header(doc: dict[str, Any]) -> ValidationResult:
    state = ValidationState()

    if "version" in doc:
        state.push_path("version")
        if not validate_version(doc["version"]):
            state.add_error("Version must be a semver string", doc["version"])
        state.pop_path()

    if "expected_result" in doc:
        state.push_path("expected_result")
        if not validate_int(doc["expected_result"]):
            state.add_error("Expected result must be an integer", doc["expected_result"])
        state.pop_path()

    return state.result(doc)


def validate_document(doc: Any) -> ValidationResult:
    """
    Validate a ScopeLang program document.

    Args:
        doc: Parsed JSON document

    Returns:
        Validation result with errors if any
    """
    if not validate_object(doc):
        return invalid_result([ValidationError("$", "Document must be an object", doc)])

    if "program" not in doc:
        return invalid_result([ValidationError("$", "Missing required field 'program'")])

    state = ValidationState()
    state.push_path("program")
    validate_expr(state, doc["program"])
    program_result = state.result(doc["program"])

    result = combine_results([_validate_header(doc), program_result])
    if not result.valid:
        return result
    return valid_result(doc)
