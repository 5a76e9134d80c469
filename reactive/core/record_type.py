"""
Record Types

A RecordType declares a record's fields and the computations that
derive some of them from others, then creates and updates immutable
Record instances, recomputing exactly the computed fields an
assignment affects.

Usage:
    calc = RecordType("Calculator", ["a", "b", "sum"])

    @calc.computed("sum", deps=["a", "b"])
    def _sum(a, b):
        return a + b

    record = calc.create(a=1, b=2)      # record.sum == 3
    updated = calc.put(record, "a", 10)  # updated.sum == 12, record unchanged

Computations must be registered before the first instance is created;
the first ``create`` (or an explicit ``freeze``) fixes the dependency
graph for the lifetime of the type.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple
import logging
import threading

from ..bootstrap.config import RecordOptions
from ..dependencies import (
    AffectedFieldResolver,
    CascadeExecutor,
    Computation,
    ComputeFunc,
    DependencyGraph,
    topological_sort,
)
from ..errors import (
    ComputedFieldAssignmentError,
    DependencyGraphError,
    InvalidRecordTypeError,
    RegistrationClosedError,
)
from ..explain import generate_mermaid_diagram
from ..validation import RecordSchema
from ..validation.schema import Required
from .normalize import Attrs, normalize_attrs
from .record import ABSENT, Record, reserved_field_names

logger = logging.getLogger(__name__)


class RecordType:
    """Declares a record's fields and computations; creates and updates records."""

    def __init__(
        self,
        name: str,
        fields: Sequence[str],
        *,
        required: Required = None,
        **options: Any,
    ):
        """
        Args:
            name: Type name used in reprs, logs and errors
            fields: Every field of the record, input and computed. Names of
                    Record methods (keys, get, to_dict, ...) are not allowed
            required: None, input field names, or "auto" for every input
                      some computation depends on
            **options: ``allow_setting_computed_fields`` (or its historical
                       name ``allow_updating_computed_fields``)
        """
        fields = tuple(fields)
        duplicates = sorted({f for f in fields if fields.count(f) > 1})
        if duplicates:
            raise ValueError(f"Duplicate fields declared on {name}: {', '.join(duplicates)}")
        reserved = [f for f in fields if f in reserved_field_names()]
        if reserved:
            raise ValueError(f"Reserved field names declared on {name}: {', '.join(reserved)}")

        self._name = name
        self._fields = fields
        self._options = RecordOptions.from_kwargs(**options)
        self._required = required

        self._computations: List[Computation] = []
        self._graph: DependencyGraph = DependencyGraph.build(name, fields, [])
        self._definition_error: Optional[DependencyGraphError] = None

        # Set once by freeze()
        self._lock = threading.Lock()
        self._frozen = False
        self._schema: Optional[RecordSchema] = None
        self._resolver: Optional[AffectedFieldResolver] = None
        self._executor: Optional[CascadeExecutor] = None

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register(self, field: str, deps: Iterable[str], body: ComputeFunc) -> Computation:
        """
        Register the computation of ``field`` from ``deps``.

        ``body`` is called with the dependency values as keyword
        arguments and must not depend on anything else.

        Raises:
            RegistrationClosedError: The type is already frozen
            UnknownDependencyError: A dependency is not a declared field
            CyclicDependencyError: The new computation closes a cycle
            DuplicateComputationError: ``field`` already has a computation
            UndeclaredFieldError: ``field`` is not declared
            InvalidRecordTypeError: An earlier registration failed
        """
        self._check_definition()
        if self._frozen:
            raise RegistrationClosedError(self._name)

        computation = Computation(field=field, deps=tuple(deps), body=body)
        candidates = self._computations + [computation]
        try:
            graph = DependencyGraph.build(self._name, self._fields, candidates)
        except DependencyGraphError as e:
            self._definition_error = e
            logger.error(f"Record type {self._name} rejected computation of {field}: {e}")
            raise

        self._computations = candidates
        self._graph = graph
        return computation

    def computed(self, field: str, deps: Iterable[str] = ()) -> Callable[[ComputeFunc], ComputeFunc]:
        """Decorator form of ``register``; returns the function unchanged."""
        def decorator(body: ComputeFunc) -> ComputeFunc:
            self.register(field, deps, body)
            return body
        return decorator

    def freeze(self) -> DependencyGraph:
        """Close registration and prepare the type for use. Idempotent."""
        self._check_definition()
        if self._frozen:
            return self._graph

        with self._lock:
            if not self._frozen:
                self._schema = RecordSchema(self._name, self._graph, self._required)
                self._resolver = AffectedFieldResolver(self._graph)
                self._executor = CascadeExecutor(self._graph)
                self._frozen = True
                logger.info(
                    f"Record type {self._name} frozen: "
                    f"inputs={list(self._graph.input_fields)}, "
                    f"computed={[c.field for c in self._graph.full_order]}"
                )
        return self._graph

    def _check_definition(self) -> None:
        if self._definition_error is not None:
            raise InvalidRecordTypeError(self._name) from self._definition_error

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def fields(self) -> Tuple[str, ...]:
        return self._fields

    @property
    def input_fields(self) -> Tuple[str, ...]:
        return self._graph.input_fields

    @property
    def computed_fields(self) -> Tuple[str, ...]:
        return self._graph.computed_fields

    @property
    def computations(self) -> Tuple[Computation, ...]:
        return self._graph.computations

    @property
    def graph(self) -> DependencyGraph:
        return self._graph

    @property
    def options(self) -> RecordOptions:
        return self._options

    @property
    def allow_setting_computed_fields(self) -> bool:
        return self._options.allow_setting_computed_fields

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    @property
    def schema(self) -> RecordSchema:
        self.freeze()
        return self._schema

    def is_computed(self, field: str) -> bool:
        return self._graph.is_computed(field)

    # -------------------------------------------------------------------------
    # Update protocol
    # -------------------------------------------------------------------------

    def create(self, attrs: Attrs = None, **kwargs: Any) -> Record:
        """
        Create a record from input values and compute every computed field.

        Attributes may be a mapping, (field, value) pairs, or keyword
        arguments. Fields not supplied are ``None``. When the type allows
        setting computed fields, supplied computed values are kept and
        only the remaining computed fields are computed.

        Raises:
            UnknownFieldError: Attributes name undeclared fields
            RequiredFieldMissingError: A required input field is absent
            ComputedFieldAssignmentError: Computed fields supplied while not allowed
        """
        graph = self.freeze()
        values = normalize_attrs(attrs, **kwargs)

        self._schema.validate_create(values)
        overrides = self._check_assignments(values)

        raw = {f: values.get(f, ABSENT) for f in self._fields}
        if overrides:
            order = topological_sort(
                [c for c in graph.computations if c.field not in overrides],
                graph.positions,
            )
        else:
            order = graph.full_order

        result = self._executor.execute(raw, order, triggered_by="create")
        return Record(self, result.values)

    def update(self, instance: Record, changes: Attrs = None, **kwargs: Any) -> Record:
        """
        Return a copy of ``instance`` with ``changes`` applied.

        Changed fields are overwritten as given; every computed field
        reachable from them is recomputed in dependency order. All other
        fields are carried over untouched.

        Raises:
            TypeError: ``instance`` is not a record of this type
            UnknownFieldError: Changes name undeclared fields
            ComputedFieldAssignmentError: Computed fields changed while not allowed
        """
        self.freeze()
        self._check_instance(instance)
        changes = normalize_attrs(changes, **kwargs)

        self._schema.validate_update(changes)
        self._check_assignments(changes)

        values = instance.to_dict()
        values.update(changes)

        event = self._resolver.resolve(changes)
        order = topological_sort(event.affected, self._graph.positions)

        result = self._executor.execute(values, order, triggered_by="update")
        return Record(self, result.values)

    def put(self, instance: Record, field: str, value: Any) -> Record:
        """Set a single field; same as ``update(instance, {field: value})``."""
        return self.update(instance, {field: value})

    def recompute(self, instance: Record) -> Record:
        """Recompute every computed field of ``instance`` from its current values."""
        graph = self.freeze()
        self._check_instance(instance)
        result = self._executor.execute(instance.to_dict(), graph.full_order, triggered_by="recompute")
        return Record(self, result.values)

    def _check_instance(self, instance: Any) -> None:
        if not isinstance(instance, Record) or instance.record_type is not self:
            raise TypeError(f"Expected a {self._name} record, got {instance!r}")

    def _check_assignments(self, attrs: Dict[str, Any]) -> List[str]:
        """Computed fields named in ``attrs``; raises unless they are allowed."""
        offending = [f for f in attrs if self._graph.is_computed(f)]
        if offending and not self._options.allow_setting_computed_fields:
            raise ComputedFieldAssignmentError(offending)
        return offending

    # -------------------------------------------------------------------------
    # Presentation
    # -------------------------------------------------------------------------

    def mermaid(self) -> str:
        """MermaidJS flowchart of this type's field dependencies."""
        self._check_definition()
        return generate_mermaid_diagram(self._fields, self._graph.computations)

    def __repr__(self) -> str:
        return (
            f"RecordType({self._name!r}, fields={list(self._fields)!r}, "
            f"computed={list(self._graph.computed_fields)!r})"
        )
