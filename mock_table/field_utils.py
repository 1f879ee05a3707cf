"""
Field utilities: nested-path lookup, type naming, text form and equality.

Rows are schema-less ``dict`` records, so every helper here works on raw
Python values.  Type names follow the JSON vocabulary used by condition
leaves:

    string   — str
    number   — int / float (bool excluded)
    boolean  — bool
    object   — dict
    array    — list / tuple
    null     — None
    unknown  — anything else (datetime, bytes, custom objects, …)
"""

import json
from typing import Any, Dict, List, Optional

# ---------------------- TYPE NAMES ----------------------

TYPE_STRING = "string"
TYPE_NUMBER = "number"
TYPE_BOOLEAN = "boolean"
TYPE_OBJECT = "object"
TYPE_ARRAY = "array"
TYPE_NULL = "null"
TYPE_UNKNOWN = "unknown"

_MISSING = object()


def is_number(value: Any) -> bool:
    """True for ints and floats; bools are not numbers here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def describe_type(value: Any) -> str:
    """Classify a single Python value into a type name."""
    if value is None:
        return TYPE_NULL
    if isinstance(value, bool):
        return TYPE_BOOLEAN
    if is_number(value):
        return TYPE_NUMBER
    if isinstance(value, str):
        return TYPE_STRING
    if isinstance(value, dict):
        return TYPE_OBJECT
    if isinstance(value, (list, tuple)):
        return TYPE_ARRAY
    return TYPE_UNKNOWN


# ---------------------- PATH LOOKUP ----------------------


def _step(container: Any, segment: str) -> Any:
    if isinstance(container, dict):
        return container.get(segment, _MISSING)
    if isinstance(container, (list, tuple)) and segment.isdigit():
        index = int(segment)
        if index < len(container):
            return container[index]
    return _MISSING


def get_path(row: Dict[str, Any], path: str, default: Any = None) -> Any:
    """Return the value at ``path`` inside ``row``.

    - A literal key (even one containing dots) wins when present.
    - Otherwise ``path`` is split on ``.``; dict segments are keys and
      numeric segments index into lists (``"tags.0"``).
    - Any missing step yields ``default``.
    """
    if not isinstance(row, dict):
        return default
    if path in row:
        return row[path]

    current: Any = row
    for segment in path.split("."):
        current = _step(current, segment)
        if current is _MISSING:
            return default
    return current


# ---------------------- TEXT FORM ----------------------


def to_text(value: Any) -> str:
    """Render a value the way string comparisons see it.

    ``None`` becomes ``""``, booleans are lower-case, integral floats drop
    the trailing ``.0`` and lists are comma-joined.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if is_number(value):
        return str(value)
    if isinstance(value, (list, tuple)):
        return ",".join(to_text(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, default=str)
    return str(value)


# ---------------------- EQUALITY ----------------------


def deep_equal(left: Any, right: Any) -> bool:
    """Structural equality that never treats booleans as numbers.

    ``1 == True`` holds in Python but not for row matching, so bools only
    equal bools.  Dicts and sequences are compared recursively.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    if is_number(left) and is_number(right):
        return left == right
    if isinstance(left, dict) and isinstance(right, dict):
        if left.keys() != right.keys():
            return False
        return all(deep_equal(left[k], right[k]) for k in left)
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        if len(left) != len(right):
            return False
        return all(deep_equal(a, b) for a, b in zip(left, right))
    if type(left) is not type(right):
        return False
    return left == right


def parse_number(value: Any) -> Optional[float]:
    """Parse a numeric string with ``float()``; ``None`` when it is not one."""
    if is_number(value):
        return value
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def narrow_number(value: float) -> Any:
    """Return an ``int`` for integral floats so ``"5"`` compares as ``5``."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def field_names(rows: List[Dict[str, Any]]) -> List[str]:
    """Sorted top-level field names seen across ``rows``."""
    names = set()
    for row in rows:
        names.update(row.keys())
    return sorted(names)
