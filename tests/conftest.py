"""
Test Configuration and Fixtures

Provides ready-made record types used across unit and integration tests.
"""

import pytest
from collections import Counter
from typing import Callable

from reactive import RecordType


class CallCounter:
    """
    Wraps computation bodies to count how often each field is computed.

    Usage:
        calls = CallCounter()
        rt.register("sum", ["a", "b"], calls.wrap("sum", lambda a, b: a + b))
        ...
        assert calls["sum"] == 1
    """

    def __init__(self):
        self.counts = Counter()

    def wrap(self, field: str, body: Callable) -> Callable:
        def counted(**kwargs):
            self.counts[field] += 1
            return body(**kwargs)
        return counted

    def reset(self) -> None:
        self.counts.clear()

    def __getitem__(self, field: str) -> int:
        return self.counts[field]


@pytest.fixture
def calls():
    """Fresh call counter."""
    return CallCounter()


@pytest.fixture
def calculator_type():
    """a, b inputs; sum = a + b."""
    rt = RecordType("Calculator", ["a", "b", "sum"])
    rt.register("sum", ["a", "b"], lambda a, b: a + b)
    return rt


@pytest.fixture
def permissive_calculator_type():
    """Calculator that accepts direct assignment of computed fields."""
    rt = RecordType("AllowedCalculator", ["a", "b", "sum"], allow_setting_computed_fields=True)
    rt.register("sum", ["a", "b"], lambda a, b: a + b)
    return rt


@pytest.fixture
def chain_type(calls):
    """
    base -> step1 -> step2 -> final, plus an unrelated sibling.

    Bodies are counted through the ``calls`` fixture.
    """
    rt = RecordType("Chain", ["base", "step1", "step2", "final", "other", "sibling"])
    rt.register("step1", ["base"], calls.wrap("step1", lambda base: base * 2))
    rt.register("step2", ["step1"], calls.wrap("step2", lambda step1: step1 + 10))
    rt.register("final", ["step2"], calls.wrap("final", lambda step2: step2 * step2))
    rt.register("sibling", ["other"], calls.wrap("sibling", lambda other: (other or 0) + 1))
    return rt
