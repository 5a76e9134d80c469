"""
Record Instances

An immutable mapping of field -> value with exactly one entry per
declared field of its record type. Records are never changed in place;
every create/update produces a new Record and the previous one stays
valid.
"""

from __future__ import annotations
from collections.abc import Mapping
from types import MappingProxyType
import copy
from typing import Any, Dict, Iterator, TYPE_CHECKING

if TYPE_CHECKING:
    from .record_type import RecordType


# Value of a declared field nobody supplied
ABSENT = None


def reserved_field_names() -> frozenset:
    """Names that attribute access on a Record resolves to methods, not fields."""
    return frozenset(name for name in dir(Record) if not name.startswith("_"))


class Record(Mapping):
    """Immutable record value with mapping and attribute access."""

    __slots__ = ("_record_type", "_values")

    def __init__(self, record_type: "RecordType", values: Dict[str, Any]):
        object.__setattr__(self, "_record_type", record_type)
        object.__setattr__(
            self,
            "_values",
            MappingProxyType({f: values.get(f, ABSENT) for f in record_type.fields}),
        )

    @property
    def record_type(self) -> "RecordType":
        return self._record_type

    def __getitem__(self, field: str) -> Any:
        return self._values[field]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal attribute lookup fails
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(
                f"{self._record_type.name!r} record has no field {name!r}"
            ) from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(
            f"Cannot assign to field {name!r}: records are immutable, use update()"
        )

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Cannot delete field {name!r}: records are immutable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return (
            self._record_type is other._record_type
            and dict(self._values) == dict(other._values)
        )

    def __reduce__(self):
        return (Record, (self._record_type, dict(self._values)))

    def __copy__(self) -> "Record":
        return self

    def __deepcopy__(self, memo: Dict[int, Any]) -> "Record":
        # Values are copied; the record type is shared, never copied
        return Record(self._record_type, copy.deepcopy(dict(self._values), memo))

    def to_dict(self) -> Dict[str, Any]:
        """Shallow copy of the field values."""
        return dict(self._values)

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self._values.items())
        return f"{self._record_type.name}({fields})"
