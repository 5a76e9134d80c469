"""
dependencies/invalidation.py - Affected field resolution

Given the fields an update changed, finds every computed field that is
now stale: the fields reachable from the changed set along dependency
edges.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Set, Tuple, TYPE_CHECKING
import logging

import networkx as nx

if TYPE_CHECKING:
    from .graph import Computation, DependencyGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvalidationEvent:
    """What a set of changes invalidated."""
    changed: FrozenSet[str]
    affected: Tuple["Computation", ...] = field(default_factory=tuple)

    @property
    def affected_fields(self) -> List[str]:
        return [c.field for c in self.affected]

    def to_dict(self) -> Dict[str, object]:
        return {
            "changed": sorted(self.changed),
            "affected": self.affected_fields,
        }


class AffectedFieldResolver:
    """
    Resolves the computations invalidated by a set of changed fields.

    A computed field that is itself among the changed fields is not
    reported just because it changed; whether an explicitly assigned
    computed field is kept or recomputed is the caller's policy. Its
    dependents are still reported.
    """

    def __init__(self, dependency_graph: "DependencyGraph"):
        self._graph = dependency_graph

    def resolve(self, changed: Iterable[str]) -> InvalidationEvent:
        """
        Find the computations affected by ``changed``.

        Args:
            changed: Names of fields whose values were assigned

        Returns:
            InvalidationEvent with affected computations in registration order
        """
        changed_set = frozenset(changed)
        digraph = self._graph.digraph

        reachable: Set[str] = set()
        for name in changed_set:
            if name in digraph:
                reachable |= nx.descendants(digraph, name)
        reachable -= changed_set

        affected = tuple(
            c for c in self._graph.computations
            if c.field in reachable
        )

        logger.debug(
            f"Invalidated {len(affected)} computed fields of "
            f"{self._graph.name} due to {sorted(changed_set)} change"
        )
        return InvalidationEvent(changed=changed_set, affected=affected)
