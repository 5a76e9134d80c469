"""
Reactive Records

Records whose computed fields are pure functions of other fields and are
recomputed, in dependency order and only where affected, whenever the
fields they depend on change. Every operation returns a new immutable
record.
"""

from reactive.core import ABSENT, Record, RecordType, normalize_attrs
from reactive.dependencies import Computation, DependencyGraph
from reactive.errors import (
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

__version__ = "0.1.0"

__all__ = [
    "ABSENT",
    "Record",
    "RecordType",
    "normalize_attrs",
    "Computation",
    "DependencyGraph",
    # Errors
    "ReactiveError",
    "DependencyGraphError",
    "UnknownDependencyError",
    "CyclicDependencyError",
    "DuplicateComputationError",
    "UndeclaredFieldError",
    "InvalidRecordTypeError",
    "InternalGraphError",
    "RegistrationClosedError",
    "FieldValidationError",
    "ComputedFieldAssignmentError",
    "RequiredFieldMissingError",
    "UnknownFieldError",
]
