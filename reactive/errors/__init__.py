"""
errors/ - Error Taxonomy

Structured error classification for registration-time and per-call
failures.
"""

from .taxonomy import (
    ErrorCategory,
    ErrorCode,
    ReactiveError,
    DependencyGraphError,
    UnknownDependencyError,
    CyclicDependencyError,
    DuplicateComputationError,
    UndeclaredFieldError,
    InvalidRecordTypeError,
    InternalGraphError,
    RegistrationClosedError,
    FieldValidationError,
    ComputedFieldAssignmentError,
    RequiredFieldMissingError,
    UnknownFieldError,
)

__all__ = [
    "ErrorCategory",
    "ErrorCode",
    "ReactiveError",
    # Registration time
    "DependencyGraphError",
    "UnknownDependencyError",
    "CyclicDependencyError",
    "DuplicateComputationError",
    "UndeclaredFieldError",
    "InvalidRecordTypeError",
    # Lifecycle
    "InternalGraphError",
    "RegistrationClosedError",
    # Per call
    "FieldValidationError",
    "ComputedFieldAssignmentError",
    "RequiredFieldMissingError",
    "UnknownFieldError",
]
