"""
Dependency & Recompute Engine

Provides:
- DependencyGraph: DAG of field dependencies, built once per record type
- topological_sort: Deterministic dependency ordering of computations
- AffectedFieldResolver: Computed fields invalidated by a change
- CascadeExecutor: Ordered, all-or-nothing recomputation
"""

from .graph import (
    Computation,
    ComputeFunc,
    DependencyGraph,
)
from .topology import topological_sort
from .invalidation import (
    AffectedFieldResolver,
    InvalidationEvent,
)
from .cascade import (
    CascadeExecutor,
    CascadeResult,
    RecalculationResult,
)

__all__ = [
    # Graph
    "Computation",
    "ComputeFunc",
    "DependencyGraph",
    # Ordering
    "topological_sort",
    # Invalidation
    "AffectedFieldResolver",
    "InvalidationEvent",
    # Cascade
    "CascadeExecutor",
    "CascadeResult",
    "RecalculationResult",
]
