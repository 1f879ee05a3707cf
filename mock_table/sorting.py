"""
Sorter: stable multi-key ordering over rows.

Sort tokens look like ``"field:direction"``; only ``desc`` sorts
descending, anything else (including no direction) is ascending.
"""

from typing import Any, Dict, List, Optional, Tuple

from mock_table.field_utils import get_path, is_number, to_text

SORT_ASC = "asc"
SORT_DESC = "desc"

# Rank of each value family inside one column; missing values sort last.
_RANK_NUMBER = 0
_RANK_STRING = 1
_RANK_OTHER = 2
_RANK_MISSING = 3


def parse_sort_tokens(sorts: List[str]) -> List[Tuple[str, str]]:
    """Split ``["status:asc", "id:desc"]`` into ``[("status", "asc"), ("id", "desc")]``."""
    parsed: List[Tuple[str, str]] = []
    for token in sorts:
        field, _, direction = str(token).partition(":")
        parsed.append((field, SORT_DESC if direction == SORT_DESC else SORT_ASC))
    return parsed


def normalize_sort_option(sort: Any) -> Optional[List[str]]:
    """Accept a single token or a list of tokens; anything else means no sort."""
    if isinstance(sort, str):
        return [sort]
    if isinstance(sort, (list, tuple)):
        return list(sort)
    return None


def _sort_key(value: Any) -> Tuple[int, Any]:
    if value is None:
        return (_RANK_MISSING, 0)
    if is_number(value) or isinstance(value, bool):
        return (_RANK_NUMBER, value)
    if isinstance(value, str):
        return (_RANK_STRING, value)
    return (_RANK_OTHER, to_text(value))


def sort_rows(rows: List[Dict[str, Any]], sorts: List[str]) -> List[Dict[str, Any]]:
    """Return a new list of ``rows`` ordered by ``sorts``.

    Python's sort is stable (also with ``reverse=True``), so sorting by the
    last key first and the primary key last yields the multi-key order while
    rows with equal keys keep their original relative order.
    """
    result = list(rows)
    for field, direction in reversed(parse_sort_tokens(sorts)):
        result.sort(
            key=lambda row: _sort_key(get_path(row, field)),
            reverse=direction == SORT_DESC,
        )
    return result
