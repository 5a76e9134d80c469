"""
dependencies/topology.py - Computation ordering

Linearizes a subset of a record type's computations so that every field
comes after all of the fields it depends on.
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Mapping, Optional, Set, TYPE_CHECKING
import heapq
import logging

from ..errors import InternalGraphError

if TYPE_CHECKING:
    from .graph import Computation

logger = logging.getLogger(__name__)


def topological_sort(
    computations: Iterable["Computation"],
    positions: Optional[Mapping[str, int]] = None,
) -> List["Computation"]:
    """
    Order computations using Kahn's algorithm.

    Only dependencies that are themselves members of ``computations``
    constrain the order; any other dependency is an already available
    value. Among simultaneously eligible fields the one with the lowest
    position is emitted first, so identical input always yields an
    identical order.

    Args:
        computations: Subset of a record type's computations
        positions: Field -> declaration position. Defaults to the order
                   of ``computations``.

    Returns:
        The computations in dependency order

    Raises:
        InternalGraphError: If the subset contains a cycle
    """
    members: Dict[str, "Computation"] = {}
    position: Dict[str, int] = dict(positions) if positions is not None else {}
    for index, computation in enumerate(computations):
        members[computation.field] = computation
        position.setdefault(computation.field, index)

    # In-degree within the subset, plus reverse edges restricted to it
    in_degree: Dict[str, int] = {}
    dependents: Dict[str, Set[str]] = {f: set() for f in members}
    for f, computation in members.items():
        internal = {d for d in computation.deps if d in members}
        in_degree[f] = len(internal)
        for dep in internal:
            dependents[dep].add(f)

    ready = [(position[f], f) for f, degree in in_degree.items() if degree == 0]
    heapq.heapify(ready)

    ordered: List["Computation"] = []
    while ready:
        _, f = heapq.heappop(ready)
        ordered.append(members[f])

        for dependent in dependents[f]:
            in_degree[dependent] -= 1
            if in_degree[dependent] == 0:
                heapq.heappush(ready, (position[dependent], dependent))

    if len(ordered) != len(members):
        placed = {c.field for c in ordered}
        stuck = sorted((f for f in members if f not in placed), key=position.__getitem__)
        logger.error(f"Topological sort stalled with {len(stuck)} pending fields")
        raise InternalGraphError(stuck)

    return ordered
