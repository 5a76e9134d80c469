"""
dependencies/cascade.py - Cascade executor

Executes recomputations in dependency order on a private copy of a
record's values. Either every computation in the pass succeeds and a
new set of values is returned, or the first failure propagates and the
copy is discarded.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence, TYPE_CHECKING
import logging
import time
import uuid

if TYPE_CHECKING:
    from .graph import Computation, DependencyGraph

logger = logging.getLogger(__name__)


# =============================================================================
# RESULTS
# =============================================================================

@dataclass
class RecalculationResult:
    """Result of recomputing a single field."""
    field: str
    old_value: Any = None
    new_value: Any = None
    value_changed: bool = False
    execution_time_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "old_value": repr(self.old_value),
            "new_value": repr(self.new_value),
            "value_changed": self.value_changed,
            "execution_time_ms": self.execution_time_ms,
        }


@dataclass
class CascadeResult:
    """Result of a cascade recomputation."""
    cascade_id: str
    started_at: datetime
    values: Dict[str, Any] = field(default_factory=dict)
    completed_at: Optional[datetime] = None

    # Per field, in execution order
    results: Dict[str, RecalculationResult] = field(default_factory=dict)

    total_time_ms: float = 0.0
    triggered_by: str = "system"

    @property
    def recomputed(self) -> List[str]:
        return list(self.results)

    @property
    def changed_fields(self) -> List[str]:
        return [f for f, r in self.results.items() if r.value_changed]

    def get_summary(self) -> Dict[str, Any]:
        return {
            "cascade_id": self.cascade_id,
            "triggered_by": self.triggered_by,
            "recomputed": len(self.results),
            "changed": len(self.changed_fields),
            "total_time_ms": self.total_time_ms,
        }


# =============================================================================
# CASCADE EXECUTOR
# =============================================================================

class CascadeExecutor:
    """Applies an ordered sequence of computations to record values."""

    def __init__(self, dependency_graph: "DependencyGraph"):
        self._graph = dependency_graph

    def execute(
        self,
        values: Mapping[str, Any],
        order: Sequence["Computation"],
        triggered_by: str = "system",
    ) -> CascadeResult:
        """
        Recompute ``order`` on top of ``values``.

        Each computation reads its dependencies as they stand after the
        earlier computations of this same pass.

        Args:
            values: Current field values (not modified)
            order: Computations in dependency order
            triggered_by: Operation name for logging

        Returns:
            CascadeResult holding the new values

        Raises:
            Whatever a computation body raises, unchanged
        """
        start = time.perf_counter()
        result = CascadeResult(
            cascade_id=uuid.uuid4().hex[:8],
            started_at=datetime.now(),
            triggered_by=triggered_by,
        )

        working = dict(values)
        for computation in order:
            result.results[computation.field] = self._execute_single(computation, working)

        result.values = working
        result.completed_at = datetime.now()
        result.total_time_ms = (time.perf_counter() - start) * 1000

        if order:
            logger.debug(
                f"Cascade {result.cascade_id} ({self._graph.name}/{triggered_by}) complete: "
                f"{len(result.results)} recomputed, {len(result.changed_fields)} changed "
                f"in {result.total_time_ms:.3f}ms"
            )
        return result

    def _execute_single(
        self,
        computation: "Computation",
        working: Dict[str, Any],
    ) -> RecalculationResult:
        """Recompute one field in place on the working copy."""
        old_value = working.get(computation.field)

        start = time.perf_counter()
        try:
            new_value = computation.evaluate(working)
        except Exception as e:
            logger.error(
                f"Computation error for {self._graph.name}.{computation.field}: {e}"
            )
            raise
        elapsed_ms = (time.perf_counter() - start) * 1000

        working[computation.field] = new_value
        return RecalculationResult(
            field=computation.field,
            old_value=old_value,
            new_value=new_value,
            value_changed=_safe_differs(old_value, new_value),
            execution_time_ms=elapsed_ms,
        )


def _safe_differs(old: Any, new: Any) -> bool:
    """Compare values whose __eq__ may be ambiguous (e.g. arrays)."""
    if old is new:
        return False
    try:
        return bool(old != new)
    except (TypeError, ValueError):
        return True
