"""
Core Module

Record types, immutable record instances, and attribute normalization.
"""

from reactive.core.record import ABSENT, Record
from reactive.core.record_type import RecordType
from reactive.core.normalize import normalize_attrs

__all__ = [
    "ABSENT",
    "Record",
    "RecordType",
    "normalize_attrs",
]
