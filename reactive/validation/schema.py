"""
validation/schema.py - Record attribute schema

Checks the attributes given to create/update against the declared
fields of a record type: no unknown fields, and every required input
field present on create.

Required fields are either listed explicitly or derived automatically
(``required="auto"``): every input field that some computation depends
on.
"""

from __future__ import annotations
from typing import Any, Iterable, List, Mapping, Tuple, Type, Union, TYPE_CHECKING
import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError, create_model

from ..errors import RequiredFieldMissingError, UnknownFieldError

if TYPE_CHECKING:
    from ..dependencies import DependencyGraph

logger = logging.getLogger(__name__)

AUTO_REQUIRED = "auto"

Required = Union[None, str, Iterable[str]]


class RecordSchema:
    """Validates create/update attributes for one record type."""

    def __init__(
        self,
        name: str,
        dependency_graph: "DependencyGraph",
        required: Required = None,
    ):
        self._name = name
        self._graph = dependency_graph
        self._required = self._resolve_required(required)
        self._model = self._build_model()
        logger.debug(f"Schema for {name}: required={list(self._required)}")

    def _resolve_required(self, required: Required) -> Tuple[str, ...]:
        if required is None:
            return ()
        if required == AUTO_REQUIRED:
            return self._graph.get_required_inputs()
        if isinstance(required, str):
            required = [required]

        names = tuple(dict.fromkeys(required))
        unknown = [f for f in names if not self._graph.has_field(f)]
        if unknown:
            raise ValueError(f"Required fields are not declared on {self._name}: {', '.join(unknown)}")
        computed = [f for f in names if self._graph.is_computed(f)]
        if computed:
            raise ValueError(f"Computed fields cannot be required: {', '.join(computed)}")
        return names

    def _build_model(self) -> Type[BaseModel]:
        """One Any-typed model field per record field, keyed by position."""
        definitions = {}
        for position, f in enumerate(self._graph.fields):
            if f in self._required:
                definitions[f"f{position}"] = (Any, Field(..., alias=f))
            else:
                definitions[f"f{position}"] = (Any, Field(default=None, alias=f))

        return create_model(
            f"{self._name}Attributes",
            __config__=ConfigDict(extra="forbid"),
            **definitions,
        )

    @property
    def required_fields(self) -> Tuple[str, ...]:
        return self._required

    @property
    def model(self) -> Type[BaseModel]:
        return self._model

    def validate_create(self, attrs: Mapping[str, Any]) -> None:
        """
        Validate the attributes of a new record.

        Raises:
            UnknownFieldError: Attributes name undeclared fields
            RequiredFieldMissingError: Required input fields are absent
        """
        try:
            self._model.model_validate(dict(attrs))
        except ValidationError as exc:
            unknown = self._fields_with_error(exc, "extra_forbidden")
            if unknown:
                raise UnknownFieldError(unknown) from exc
            missing = self._fields_with_error(exc, "missing")
            if missing:
                raise RequiredFieldMissingError(missing) from exc
            raise

    def validate_update(self, changes: Mapping[str, Any]) -> None:
        """
        Validate the changes applied to an existing record.

        Raises:
            UnknownFieldError: Changes name undeclared fields
        """
        unknown = [f for f in changes if not self._graph.has_field(f)]
        if unknown:
            raise UnknownFieldError(unknown)

    @staticmethod
    def _fields_with_error(exc: ValidationError, error_type: str) -> List[str]:
        fields = []
        for error in exc.errors():
            if error["type"] == error_type and error["loc"]:
                fields.append(str(error["loc"][0]))
        return fields

    def to_dict(self) -> dict:
        return {
            "name": self._name,
            "input_fields": list(self._graph.input_fields),
            "computed_fields": list(self._graph.computed_fields),
            "required_fields": list(self._required),
        }
