"""
dependencies/graph.py - Field dependency graph

Defines the directed acyclic graph of field dependencies for one record
type. Built once, when the record type is defined, and shared read-only
by every instance and every update afterwards.

Edges run dependency -> dependent: if ``sum`` is computed from ``a``
and ``b`` the graph holds ``a -> sum`` and ``b -> sum``.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Set, Tuple
import logging

import networkx as nx

from ..errors import (
    CyclicDependencyError,
    DuplicateComputationError,
    UndeclaredFieldError,
    UnknownDependencyError,
)
from .topology import topological_sort

logger = logging.getLogger(__name__)


# Computation bodies receive their dependency values as keyword arguments
ComputeFunc = Callable[..., Any]


# =============================================================================
# COMPUTATION
# =============================================================================

@dataclass(frozen=True)
class Computation:
    """A computed field: its dependencies and the function producing it."""
    field: str
    deps: Tuple[str, ...]
    body: ComputeFunc

    def __post_init__(self):
        # Accept any sequence of names, store an immutable tuple
        object.__setattr__(self, "deps", tuple(self.deps))

    @property
    def arity(self) -> int:
        """Number of declared dependencies."""
        return len(self.deps)

    def evaluate(self, values: Dict[str, Any]) -> Any:
        """Call the body with exactly the declared dependency values."""
        return self.body(**{dep: values[dep] for dep in self.deps})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "deps": list(self.deps),
            "arity": self.arity,
        }


# =============================================================================
# DEPENDENCY GRAPH
# =============================================================================

class DependencyGraph:
    """
    Directed acyclic graph of field dependencies.

    Use ``DependencyGraph.build`` to construct one; the builder validates
    the computations and freezes the result.
    """

    def __init__(
        self,
        name: str,
        fields: Tuple[str, ...],
        computations: Tuple[Computation, ...],
        digraph: nx.DiGraph,
    ):
        self._name = name
        self._fields = fields
        self._computations = computations
        self._by_field: Dict[str, Computation] = {c.field: c for c in computations}
        self._positions: Dict[str, int] = {c.field: i for i, c in enumerate(computations)}
        self._digraph = digraph
        self._full_order: Tuple[Computation, ...] = tuple(
            topological_sort(computations, self._positions)
        )
        nx.freeze(self._digraph)

    @classmethod
    def build(
        cls,
        name: str,
        fields: Sequence[str],
        computations: Iterable[Computation],
    ) -> "DependencyGraph":
        """
        Validate computations and build the graph.

        Args:
            name: Record type name (for logging and error messages)
            fields: Every declared field, input and computed
            computations: Computations in registration order

        Raises:
            UndeclaredFieldError: A computation targets an undeclared field
            DuplicateComputationError: A field has two computations
            UnknownDependencyError: A dependency names an undeclared field
            CyclicDependencyError: The dependencies form a cycle
        """
        fields = tuple(fields)
        computations = tuple(computations)
        declared = set(fields)

        seen: Set[str] = set()
        for computation in computations:
            if computation.field not in declared:
                raise UndeclaredFieldError(computation.field)
            if computation.field in seen:
                raise DuplicateComputationError(computation.field)
            seen.add(computation.field)

            for dep in computation.deps:
                if dep not in declared:
                    raise UnknownDependencyError(computation.field, dep)

        digraph = nx.DiGraph(name=name)
        for position, f in enumerate(fields):
            digraph.add_node(f, computed=f in seen, position=position)
        for computation in computations:
            for dep in computation.deps:
                digraph.add_edge(dep, computation.field)

        cycle = cls._detect_cycle(digraph)
        if cycle:
            raise CyclicDependencyError(cycle)

        graph = cls(name, fields, computations, digraph)

        logger.debug(
            f"Dependency graph built for {name}: {len(fields)} fields, "
            f"{len(computations)} computed, {digraph.number_of_edges()} edges"
        )
        return graph

    @staticmethod
    def _detect_cycle(digraph: nx.DiGraph) -> Optional[List[str]]:
        """Return one cycle as a closed field path, or None."""
        try:
            edges = nx.find_cycle(digraph, orientation="original")
        except nx.NetworkXNoCycle:
            return None
        return [edge[0] for edge in edges] + [edges[-1][1]]

    # -------------------------------------------------------------------------
    # Read-only accessors
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def fields(self) -> Tuple[str, ...]:
        """All declared fields in declaration order."""
        return self._fields

    @property
    def computations(self) -> Tuple[Computation, ...]:
        """All computations in registration order."""
        return self._computations

    @property
    def computed_fields(self) -> Tuple[str, ...]:
        return tuple(f for f in self._fields if f in self._by_field)

    @property
    def input_fields(self) -> Tuple[str, ...]:
        return tuple(f for f in self._fields if f not in self._by_field)

    @property
    def positions(self) -> Dict[str, int]:
        """Computed field -> registration position (topological tie-break)."""
        return dict(self._positions)

    @property
    def full_order(self) -> Tuple[Computation, ...]:
        """Every computation in dependency order."""
        return self._full_order

    @property
    def digraph(self) -> nx.DiGraph:
        """The underlying (frozen) networkx graph."""
        return self._digraph

    def get_computation(self, field: str) -> Optional[Computation]:
        return self._by_field.get(field)

    def is_computed(self, field: str) -> bool:
        return field in self._by_field

    def has_field(self, field: str) -> bool:
        return field in self._digraph

    def get_direct_dependencies(self, field: str) -> Set[str]:
        """Fields that this field directly depends on."""
        if field not in self._digraph:
            return set()
        return set(self._digraph.predecessors(field))

    def get_direct_dependents(self, field: str) -> Set[str]:
        """Fields that directly depend on this field."""
        if field not in self._digraph:
            return set()
        return set(self._digraph.successors(field))

    def get_all_downstream(self, field: str) -> Set[str]:
        """All fields transitively computed from this field."""
        if field not in self._digraph:
            return set()
        return nx.descendants(self._digraph, field)

    def get_required_inputs(self) -> Tuple[str, ...]:
        """Input fields that at least one computation depends on."""
        return tuple(
            f for f in self.input_fields
            if self._digraph.out_degree(f) > 0
        )

    def ordered(self, fields: Iterable[str]) -> List[Computation]:
        """Computations of the given computed fields, in dependency order."""
        subset = [self._by_field[f] for f in fields if f in self._by_field]
        return topological_sort(subset, self._positions)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize graph structure (without computation bodies)."""
        return {
            "name": self._name,
            "fields": list(self._fields),
            "input_fields": list(self.input_fields),
            "computed_fields": list(self.computed_fields),
            "computations": [c.to_dict() for c in self._computations],
            "edges": [
                {"source": source, "target": target}
                for source, target in self._digraph.edges()
            ],
            "order": [c.field for c in self._full_order],
        }

    def __contains__(self, field: object) -> bool:
        return field in self._digraph

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return (
            f"DependencyGraph(name={self._name!r}, "
            f"fields={len(self._fields)}, "
            f"computed={len(self._computations)}, "
            f"edges={self._digraph.number_of_edges()})"
        )
