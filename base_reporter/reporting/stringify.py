"""
Stable string forms for assertion values.

Only used when an error asks for a diff and both sides are the same kind
of value; the result is what the diff renderer compares.
"""

import json
from enum import Enum
from typing import Any


class ValueKind(Enum):
    """The kinds of value an assertion can carry."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    SET = "set"
    OTHER = "other"


def value_kind(value: Any) -> ValueKind:
    """Classify `value` for the same-kind check."""
    if value is None:
        return ValueKind.NULL
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, dict):
        return ValueKind.MAPPING
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    if isinstance(value, (set, frozenset)):
        return ValueKind.SET
    return ValueKind.OTHER


def same_kind(a: Any, b: Any) -> bool:
    """True when both values are of one kind; arbitrary objects must share a type."""
    kind = value_kind(a)
    if kind != value_kind(b):
        return False
    if kind is ValueKind.OTHER:
        return type(a) is type(b)
    return True


CIRCULAR = "[Circular]"

_SCALARS = (str, int, float, bool, type(None))
_CONTAINERS = (dict, list, tuple, set, frozenset)


def _key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, _SCALARS):
        # Same spelling json uses for scalar keys
        return json.dumps(key)
    return repr(key)


def _canonical(value: Any, path: frozenset) -> Any:
    """Reduce `value` to JSON-safe data, marking containers already on `path`."""
    if isinstance(value, _SCALARS):
        return value
    if not isinstance(value, _CONTAINERS):
        return repr(value)
    if id(value) in path:
        return CIRCULAR
    path = path | {id(value)}
    if isinstance(value, dict):
        return {_key(k): _canonical(v, path) for k, v in value.items()}
    items = [_canonical(item, path) for item in value]
    if isinstance(value, (set, frozenset)):
        return sorted(items, key=repr)
    return items


def stringify(value: Any) -> str:
    """Return a deterministic, diff-friendly rendering of `value`.

    Mappings are emitted with sorted keys and two-space indentation so that
    structurally equal values render identically line by line. Keys that are
    not strings are spelled out, and a container nested inside itself is
    shown as ``[Circular]``. Never raises.
    """
    try:
        return json.dumps(_canonical(value, frozenset()), indent=2, sort_keys=True, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError):
        return repr(value)
