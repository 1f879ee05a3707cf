"""
Response formatter: builds the meta envelope returned by ``select_rows``.

Envelope shape::

    {
        "result": [...rows on this page...],
        "meta": {
            "totalCount": <rows matching the filter, before pagination>,
            "currentCount": <len(result)>,
            "limit": <parsed limit or None>,
            "offset": <parsed offset>,
        },
    }
"""

from typing import Any, Dict, List, Optional


def format_response(
    page: List[Dict[str, Any]],
    total_count: int,
    limit: Optional[int],
    offset: int,
) -> Dict[str, Any]:
    """Wrap a result page in the meta envelope.

    ``currentCount`` is taken from ``page`` itself, so it reflects any
    post-processing already applied to the page.
    """
    result = list(page)
    return {
        "result": result,
        "meta": {
            "totalCount": total_count,
            "currentCount": len(result),
            "limit": limit,
            "offset": offset,
        },
    }


def empty_response(limit: Optional[int], offset: int) -> Dict[str, Any]:
    return format_response([], 0, limit, offset)
