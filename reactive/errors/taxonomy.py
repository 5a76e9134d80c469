"""
errors/taxonomy.py - Error classification system

Every error raised by the engine carries a category and a stable code so
callers can tell registration-time failures (fatal for a record type)
from per-call failures (fatal only for that call).
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence


class ErrorCategory(Enum):
    """Error categories."""
    # Registration-time graph errors
    DEPENDENCY = "dependency"

    # Per-call field validation errors
    VALIDATION = "validation"

    # Lifecycle / internal consistency errors
    STATE = "state"


class ErrorCode(Enum):
    """Specific error codes."""

    # Validation (1xxx)
    VAL_FAILED = 1001
    VAL_MISSING_FIELD = 1003
    VAL_UNKNOWN_FIELD = 1005
    VAL_COMPUTED_FIELD = 1006

    # State (5xxx)
    STA_INCONSISTENT = 5001
    STA_MISSING_DEP = 5002
    STA_CIRCULAR_DEP = 5003
    STA_DUPLICATE_COMPUTATION = 5006
    STA_UNDECLARED_FIELD = 5007
    STA_REGISTRATION_CLOSED = 5008
    STA_INVALID_TYPE = 5009


def _field_list(fields: Iterable[str]) -> str:
    return ", ".join(fields)


# =============================================================================
# BASE
# =============================================================================

class ReactiveError(Exception):
    """Base exception for all record engine errors."""

    code: ErrorCode = ErrorCode.STA_INCONSISTENT
    category: ErrorCategory = ErrorCategory.STATE

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code.value,
            "category": self.category.value,
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


# =============================================================================
# REGISTRATION-TIME (DEPENDENCY GRAPH) ERRORS
# =============================================================================

class DependencyGraphError(ReactiveError):
    """Base exception for dependency graph errors."""

    code = ErrorCode.STA_INCONSISTENT
    category = ErrorCategory.DEPENDENCY


class UnknownDependencyError(DependencyGraphError):
    """Raised when a computation depends on a field the record does not declare."""

    code = ErrorCode.STA_MISSING_DEP

    def __init__(self, field: str, dependency: str):
        self.field = field
        self.dependency = dependency
        super().__init__(
            f"Computed field '{field}' depends on unknown field '{dependency}'",
            {"field": field, "dependency": dependency},
        )


class CyclicDependencyError(DependencyGraphError):
    """Raised when a cyclic dependency is detected."""

    code = ErrorCode.STA_CIRCULAR_DEP

    def __init__(self, cycle: List[str]):
        self.cycle = cycle
        super().__init__(
            f"Cyclic dependency detected: {' -> '.join(cycle)}",
            {"cycle": list(cycle)},
        )


class DuplicateComputationError(DependencyGraphError):
    """Raised when a field is the target of more than one computation."""

    code = ErrorCode.STA_DUPLICATE_COMPUTATION

    def __init__(self, field: str):
        self.field = field
        super().__init__(
            f"Field '{field}' already has a computation",
            {"field": field},
        )


class UndeclaredFieldError(DependencyGraphError):
    """Raised when a computation targets a field the record does not declare."""

    code = ErrorCode.STA_UNDECLARED_FIELD

    def __init__(self, field: str):
        self.field = field
        super().__init__(
            f"Cannot compute undeclared field '{field}'",
            {"field": field},
        )


class InvalidRecordTypeError(DependencyGraphError):
    """Raised when a record type whose registration failed is used."""

    code = ErrorCode.STA_INVALID_TYPE

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Record type '{name}' has an invalid dependency graph and cannot be used",
            {"record_type": name},
        )


# =============================================================================
# LIFECYCLE / INTERNAL ERRORS
# =============================================================================

class InternalGraphError(ReactiveError):
    """Raised when a validated graph still cannot be ordered."""

    code = ErrorCode.STA_INCONSISTENT

    def __init__(self, fields: Sequence[str]):
        self.fields = list(fields)
        super().__init__(
            f"No computable field among pending fields: {_field_list(self.fields)}",
            {"fields": self.fields},
        )


class RegistrationClosedError(ReactiveError):
    """Raised when registering a computation on a frozen record type."""

    code = ErrorCode.STA_REGISTRATION_CLOSED

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Record type '{name}' is frozen; computations must be registered "
            f"before the first instance is created",
            {"record_type": name},
        )


# =============================================================================
# PER-CALL VALIDATION ERRORS
# =============================================================================

class FieldValidationError(ReactiveError, ValueError):
    """Base exception for rejected create/update attributes."""

    code = ErrorCode.VAL_FAILED
    category = ErrorCategory.VALIDATION

    def __init__(self, message: str, fields: Sequence[str]):
        self.fields = list(fields)
        super().__init__(message, {"fields": self.fields})


class ComputedFieldAssignmentError(FieldValidationError):
    """Raised when computed fields are assigned while the record type forbids it."""

    code = ErrorCode.VAL_COMPUTED_FIELD

    def __init__(self, fields: Sequence[str]):
        super().__init__(
            f"Cannot set computed fields: {_field_list(fields)}. "
            f"Set allow_setting_computed_fields=True to enable this behavior.",
            fields,
        )


class RequiredFieldMissingError(FieldValidationError):
    """Raised when required input fields are not supplied."""

    code = ErrorCode.VAL_MISSING_FIELD

    def __init__(self, fields: Sequence[str]):
        super().__init__(f"Missing required fields: {_field_list(fields)}", fields)


class UnknownFieldError(FieldValidationError):
    """Raised when attributes name fields the record does not declare."""

    code = ErrorCode.VAL_UNKNOWN_FIELD

    def __init__(self, fields: Sequence[str]):
        super().__init__(f"Unknown fields: {_field_list(fields)}", fields)
