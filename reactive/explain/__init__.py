"""
explain/ - Human-readable views of a record type
"""

from .mermaid import (
    format_field_id,
    generate_mermaid_diagram,
)

__all__ = [
    "format_field_id",
    "generate_mermaid_diagram",
]
