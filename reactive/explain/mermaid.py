"""
explain/mermaid.py - MermaidJS dependency diagrams

Renders a record type's field dependencies as a MermaidJS flowchart:
input fields and computed fields as styled nodes, one arrow per
dependency -> dependent edge.
"""

from __future__ import annotations
from typing import Iterable, List, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from ..dependencies import Computation

INPUT_FIELD_STYLE = "fill:#e1f5fe,stroke:#0277bd,stroke-width:2px"
COMPUTED_FIELD_STYLE = "fill:#f3e5f5,stroke:#7b1fa2,stroke-width:2px"


def format_field_id(field: str) -> str:
    """Node id for a field: upper case, underscores removed."""
    return field.upper().replace("_", "")


def format_field_node(field: str) -> str:
    return f"{format_field_id(field)}[{field}]"


def _field_nodes(fields: Iterable[str], label: str) -> List[str]:
    nodes = sorted(f"    {format_field_node(f)}" for f in fields)
    if not nodes:
        return []
    return [f"    %% {label}"] + nodes


def _dependency_edges(computations: Iterable["Computation"]) -> List[str]:
    edges = {
        f"    {format_field_id(dep)} --> {format_field_id(c.field)}"
        for c in computations
        for dep in c.deps
    }
    if not edges:
        return []
    return ["    %% Dependencies"] + sorted(edges)


def _class_assignment(fields: Sequence[str], class_name: str) -> List[str]:
    if not fields:
        return []
    field_ids = ",".join(format_field_id(f) for f in sorted(fields))
    return [f"    class {field_ids} {class_name}"]


def generate_mermaid_diagram(
    fields: Sequence[str],
    computations: Sequence["Computation"],
) -> str:
    """
    Generate a MermaidJS flowchart of field dependencies.

    Args:
        fields: Every declared field of the record type
        computations: The record type's computations

    Returns:
        Flowchart source, one statement per line
    """
    computed = {c.field for c in computations}
    input_fields = [f for f in fields if f not in computed]
    computed_fields = [f for f in fields if f in computed]

    lines = ["flowchart TD"]
    lines += _field_nodes(input_fields, "Input fields")
    lines += _field_nodes(computed_fields, "Computed fields")
    lines += _dependency_edges(computations)
    lines += [
        "    %% Styling",
        f"    classDef inputField {INPUT_FIELD_STYLE}",
        f"    classDef computedField {COMPUTED_FIELD_STYLE}",
    ]
    lines += _class_assignment(input_fields, "inputField")
    lines += _class_assignment(computed_fields, "computedField")

    return "\n".join(lines)
