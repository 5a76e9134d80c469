"""
tests/unit/test_dependencies_cascade.py - Tests for the cascade executor.
"""

import pytest

from reactive.dependencies import (
    CascadeExecutor,
    CascadeResult,
    Computation,
    DependencyGraph,
    RecalculationResult,
)


@pytest.fixture
def graph():
    """a, b -> sum -> double."""
    return DependencyGraph.build(
        "Calc",
        ["a", "b", "sum", "double"],
        [
            Computation("sum", ("a", "b"), lambda a, b: a + b),
            Computation("double", ("sum",), lambda sum: sum * 2),
        ],
    )


class TestCascadeExecutor:
    """Test ordered recomputation on a working copy."""

    def test_execute_full_order(self, graph):
        """Test that later computations see earlier results."""
        executor = CascadeExecutor(graph)
        result = executor.execute({"a": 1, "b": 2, "sum": None, "double": None}, graph.full_order)
        assert result.values == {"a": 1, "b": 2, "sum": 3, "double": 6}
        assert result.recomputed == ["sum", "double"]

    def test_input_values_not_modified(self, graph):
        """Test that the caller's mapping is left untouched."""
        values = {"a": 1, "b": 2, "sum": None, "double": None}
        CascadeExecutor(graph).execute(values, graph.full_order)
        assert values["sum"] is None

    def test_partial_order(self, graph):
        """Test recomputing only a subset."""
        values = {"a": 1, "b": 2, "sum": 50, "double": None}
        result = CascadeExecutor(graph).execute(values, graph.ordered(["double"]))
        assert result.values["sum"] == 50
        assert result.values["double"] == 100

    def test_empty_order(self, graph):
        """Test that an empty order returns the values as given."""
        values = {"a": 1, "b": 2, "sum": 3, "double": 6}
        result = CascadeExecutor(graph).execute(values, ())
        assert result.values == values
        assert result.recomputed == []

    def test_changed_fields_tracked(self, graph):
        """Test that only fields whose value moved are reported changed."""
        values = {"a": 1, "b": 2, "sum": 3, "double": 0}
        result = CascadeExecutor(graph).execute(values, graph.full_order)
        assert result.changed_fields == ["double"]
        assert result.results["sum"].value_changed is False
        assert result.results["double"].old_value == 0

    def test_failure_propagates_unchanged(self, graph):
        """Test that a body's exception escapes as is."""
        failing = DependencyGraph.build(
            "Failing",
            ["a", "bad"],
            [Computation("bad", ("a",), lambda a: 1 / a)],
        )
        with pytest.raises(ZeroDivisionError):
            CascadeExecutor(failing).execute({"a": 0, "bad": None}, failing.full_order)

    def test_triggered_by_and_summary(self, graph):
        """Test result metadata."""
        result = CascadeExecutor(graph).execute(
            {"a": 1, "b": 1, "sum": None, "double": None},
            graph.full_order,
            triggered_by="update",
        )
        summary = result.get_summary()
        assert summary["triggered_by"] == "update"
        assert summary["recomputed"] == 2
        assert result.completed_at is not None
        assert len(result.cascade_id) == 8


class TestResults:
    """Test result dataclasses."""

    def test_recalculation_result_to_dict(self):
        """Test per-field result serialization."""
        data = RecalculationResult(field="sum", old_value=None, new_value=3, value_changed=True).to_dict()
        assert data["field"] == "sum"
        assert data["new_value"] == "3"
        assert data["value_changed"] is True

    def test_cascade_result_defaults(self):
        """Test an empty cascade result."""
        from datetime import datetime

        result = CascadeResult(cascade_id="abc", started_at=datetime.now())
        assert result.recomputed == []
        assert result.changed_fields == []
        assert result.triggered_by == "system"
