# ScopeLang Error Types
# Error domain for document validation and evaluation errors

from __future__ import annotations

from enum import Enum
from typing import Any


#==============================================================================
# Error Codes
#==============================================================================

class ErrorCodes(str, Enum):
    """Error code constants for ScopeLang errors"""

    # Lookup errors
    UNDEFINED_VARIABLE = "UndefinedVariable"

    # Storage faults (well-formed programs never raise these)
    UNDEFINED_CONTENTS = "UndefinedContents"
    EMPTY_STACK = "EmptyStack"

    # Operand errors
    NON_NUMERIC_OPERAND = "NonNumericOperand"
    DIVIDE_BY_ZERO = "DivideByZero"
    TYPE_MISMATCH = "TypeMismatch"
    NOT_A_PAIR = "NotAPair"

    # Program-level errors
    STACK_NOT_EMPTY = "StackNotEmpty"
    NON_NUMERIC_RESULT = "NonNumericResult"

    # Document errors
    VALIDATION_ERROR = "ValidationError"


#==============================================================================
# ScopeLang Error Class
#==============================================================================

class ScopeLangError(Exception):
    """Base exception class for all ScopeLang errors"""

    def __init__(self, code: ErrorCodes, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, str]:
        """Convert to a plain error record"""
        return {
            "kind": "error",
            "code": self.code.value,
            "message": self.message,
        }

    #---------------------------------------------------------------------------
    # Static factory methods for common errors
    #---------------------------------------------------------------------------

    @staticmethod
    def undefined_variable(name: str) -> "ScopeLangError":
        """Create an UndefinedVariable error"""
        return ScopeLangError(
            ErrorCodes.UNDEFINED_VARIABLE,
            f"undefined variable: {name}",
        )

    @staticmethod
    def undefined_contents(region: str, index: int) -> "ScopeLangError":
        """Create an UndefinedContents error"""
        return ScopeLangError(
            ErrorCodes.UNDEFINED_CONTENTS,
            f"undefined contents at {region}[{index}]",
        )

    @staticmethod
    def empty_stack() -> "ScopeLangError":
        """Create an EmptyStack error"""
        return ScopeLangError(ErrorCodes.EMPTY_STACK, "stack storage is empty")

    @staticmethod
    def non_numeric_operand(context: str | None = None) -> "ScopeLangError":
        """Create a NonNumericOperand error"""
        message = context or "non-numeric argument to numeric operator"
        return ScopeLangError(ErrorCodes.NON_NUMERIC_OPERAND, message)

    @staticmethod
    def divide_by_zero() -> "ScopeLangError":
        """Create a DivideByZero error"""
        return ScopeLangError(ErrorCodes.DIVIDE_BY_ZERO, "divide by zero")

    @staticmethod
    def type_mismatch(context: str) -> "ScopeLangError":
        """Create a TypeMismatch error"""
        return ScopeLangError(ErrorCodes.TYPE_MISMATCH, f"type mismatch: {context}")

    @staticmethod
    def not_a_pair(operation: str) -> "ScopeLangError":
        """Create a NotAPair error"""
        return ScopeLangError(
            ErrorCodes.NOT_A_PAIR,
            f"not a pair: {operation} expects a pair operand",
        )

    @staticmethod
    def stack_not_empty(depth: int) -> "ScopeLangError":
        """Create a StackNotEmpty error"""
        return ScopeLangError(
            ErrorCodes.STACK_NOT_EMPTY,
            f"stack not empty at program end (depth {depth})",
        )

    @staticmethod
    def non_numeric_result() -> "ScopeLangError":
        """Create a NonNumericResult error"""
        return ScopeLangError(
            ErrorCodes.NON_NUMERIC_RESULT,
            "program must return a number",
        )

    @staticmethod
    def validation(errors: list["ValidationError"]) -> "ScopeLangError":
        """Create a ValidationError summarising every problem found"""
        details = "; ".join(f"{e.path}: {e.message}" for e in errors)
        return ScopeLangError(
            ErrorCodes.VALIDATION_ERROR,
            f"invalid program document: {details}",
        )


#==============================================================================
# Validation Error Types
#==============================================================================

class ValidationError:
    """A single validation error"""

    def __init__(self, path: str, message: str, value: Any | None = None):
        self.path = path
        self.message = message
        self.value = value

    def __repr__(self) -> str:
        return f"ValidationError({self.path!r}, {self.message!r})"


class ValidationResult:
    """Result of a validation operation"""

    def __init__(self, valid: bool, errors: list[ValidationError], value: Any | None = None):
        self.valid = valid
        self.errors = errors
        self.value = value


def valid_result(value: Any) -> ValidationResult:
    """Create a successful validation result"""
    return ValidationResult(valid=True, errors=[], value=value)


def invalid_result(errors: list[ValidationError]) -> ValidationResult:
    """Create a failed validation result"""
    return ValidationResult(valid=False, errors=errors)


def combine_results(results: list[ValidationResult]) -> ValidationResult:
    """Combine multiple validation results"""
    all_errors: list[ValidationError] = []
    for r in results:
        all_errors.extend(r.errors)

    if all_errors:
        return invalid_result(all_errors)

    values = [r.value for r in results if r.value is not None]
    return valid_result(values)


#==============================================================================
# Exhaustiveness Checking
#==============================================================================

def exhaustive(value: Any) -> None:
    """
    Asserts that a value is unreachable, ensuring exhaustive handling.
    Use in dispatch fall-through branches to catch unhandled variants.

    Raises:
        AssertionError: If called (indicating unhandled case)
    """
    raise AssertionError(f"Unexpected value: {value!r}")
