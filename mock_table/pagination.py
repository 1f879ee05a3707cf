"""
Paginator: offset/limit parsing and slicing.

Policy:
- ``offset`` absent or unparsable → ``0``
- ``limit`` absent or unparsable  → no limit (everything from ``offset``)
- ``limit == 0``                   → empty page
- ``offset`` past the end          → empty page, never an error
- negative values are clamped to ``0``
"""

import math
import re
from typing import Any, Dict, List, Optional

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value: Any) -> Optional[int]:
    """Parse the leading integer of ``value``; ``None`` when there is none.

    ``"10"`` and ``"10px"`` both give ``10``, ``3.9`` gives ``3`` and
    ``"abc"``, ``None``, ``True`` give ``None``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT_RE.match(value)
        if match:
            try:
                return int(match.group(1))
            except ValueError:
                # digit strings past the interpreter's int conversion limit
                return None
    return None


def resolve_limit(limit: Any) -> Optional[int]:
    parsed = parse_int(limit)
    if parsed is None:
        return None
    return max(parsed, 0)


def resolve_offset(offset: Any) -> int:
    parsed = parse_int(offset)
    if parsed is None:
        return 0
    return max(parsed, 0)


def paginate(
    rows: List[Dict[str, Any]],
    limit: Optional[int],
    offset: int,
) -> List[Dict[str, Any]]:
    """Slice ``rows`` to ``[offset, offset + limit)`` (or ``[offset, end)``)."""
    if limit is None:
        return rows[offset:]
    return rows[offset:offset + limit]
