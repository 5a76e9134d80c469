"""
validation/ - Attribute validation

Schema checks applied to create/update attributes before any
recomputation runs.
"""

from .schema import (
    AUTO_REQUIRED,
    RecordSchema,
)

__all__ = [
    "AUTO_REQUIRED",
    "RecordSchema",
]
