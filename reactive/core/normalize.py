"""
Attribute Normalization

Accepts the alternate shapes callers use for field assignments and
produces a single field -> value dict:

- a mapping: {"a": 1, "b": 2}
- an iterable of (field, value) pairs: [("a", 1), ("b", 2)]
- keyword arguments: a=1, b=2

Later assignments of the same field win, in the order above.
"""

from typing import Any, Dict, Iterable, Mapping, Tuple, Union

Attrs = Union[Mapping[str, Any], Iterable[Tuple[str, Any]], None]


def normalize_attrs(attrs: Attrs = None, **kwargs: Any) -> Dict[str, Any]:
    """
    Normalize attributes to a field -> value dict.

    Raises:
        TypeError: For entries that are not (str, value) pairs
    """
    normalized: Dict[str, Any] = {}

    if attrs is None:
        pass
    elif isinstance(attrs, Mapping):
        normalized.update(attrs)
    elif isinstance(attrs, (str, bytes)):
        raise TypeError(f"Expected a mapping or (field, value) pairs, got {type(attrs).__name__}")
    else:
        for entry in attrs:
            if not isinstance(entry, tuple) or len(entry) != 2:
                raise TypeError(f"Expected a (field, value) pair, got {entry!r}")
            key, value = entry
            normalized[key] = value

    normalized.update(kwargs)

    bad_keys = [k for k in normalized if not isinstance(k, str)]
    if bad_keys:
        raise TypeError(f"Field names must be strings: {bad_keys!r}")

    return normalized
