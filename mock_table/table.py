"""
In-memory table: query pipeline (filter → count → sort → paginate → meta)
and the thin mutation wrappers built on the same condition evaluator.

The table always performs a full scan.  It is meant for exclusive use by a
single consumer (one test, one mock server); it does no locking, and
``data_source`` deliberately exposes the live row list so callers can
inspect or mutate rows without going through validation.  Clone the list
before sharing a table across threads or tasks.
"""

from typing import Any, Callable, Dict, List, Optional, Union

from mock_table.condition_validator import validate_tree
from mock_table.conditions import build_condition_tree
from mock_table.errors import ConditionNotFound, DuplicateKey
from mock_table.evaluator import match
from mock_table.field_utils import deep_equal, get_path
from mock_table.logger import logger
from mock_table.pagination import paginate, resolve_limit, resolve_offset
from mock_table.response_formatter import empty_response, format_response
from mock_table.sorting import normalize_sort_option, sort_rows

Row = Dict[str, Any]
PostProcess = Callable[[List[Row]], List[Row]]
RowsResult = Union[List[Row], Dict[str, Any]]


class Table:
    def __init__(
        self,
        rows: Optional[List[Row]] = None,
        primary_key: Optional[str] = None,
        post_process: Optional[PostProcess] = None,
    ):
        # keep the caller's list: data_source is a live reference
        self._data_source: List[Row] = rows if isinstance(rows, list) else list(rows or [])
        self._primary_key = primary_key or None
        self._post_process = post_process

    # ---------------------- ACCESSORS ----------------------

    @property
    def data_source(self) -> List[Row]:
        """The live row list (no copy, no validation on writes)."""
        return self._data_source

    @property
    def primary_key(self) -> Optional[str]:
        return self._primary_key

    def __len__(self) -> int:
        return len(self._data_source)

    # ---------------------- QUERY ----------------------

    def filtered_list(self, conditions: Any) -> List[Row]:
        """Rows satisfying ``conditions`` (tree, leaf dict or flat leaf list), in table order."""
        tree = build_condition_tree(conditions)
        if tree is None:
            return list(self._data_source)
        validate_tree(tree)
        return [row for row in self._data_source if match(row, tree)]

    def sorted_list(self, rows: List[Row], sorts: List[str]) -> List[Row]:
        return sort_rows(rows, sorts)

    def get_rows(
        self,
        limit: Any = None,
        offset: Any = None,
        conditions: Any = None,
        sorts: Optional[List[str]] = None,
        meta: bool = False,
    ) -> RowsResult:
        """Run the query pipeline.

        Returns the page as a list, or with ``meta=True`` the envelope
        ``{"result": page, "meta": {...}}``.  The post-process transform
        only runs on the ``meta=True`` path; plain lists are returned as
        sliced.
        """
        n_limit = resolve_limit(limit)
        n_offset = resolve_offset(offset)

        if not self._data_source or n_limit == 0:
            logger.debug(
                "get_rows short-circuit: rows=%d limit=%s", len(self._data_source), n_limit,
            )
            if not meta:
                return []
            return empty_response(n_limit, n_offset)

        # 1. Filter
        result = self._data_source
        if conditions is not None:
            result = self.filtered_list(conditions)

        # 2. Count before pagination
        total_count = len(result)

        # 3. Sort
        if sorts:
            result = self.sorted_list(result, sorts)

        # 4. Paginate
        page = paginate(result, n_limit, n_offset)

        logger.debug(
            "get_rows: total=%d page=%d limit=%s offset=%d sorts=%s meta=%s",
            total_count, len(page), n_limit, n_offset, sorts, meta,
        )

        if not meta:
            return page

        # 5. Post-process (meta path only)
        if self._post_process is not None:
            page = self._post_process(page)

        return format_response(page, total_count, n_limit, n_offset)

    def select_rows(
        self,
        limit: Any = None,
        offset: Any = None,
        conditions: Any = None,
        sort: Any = None,
        meta: bool = False,
    ) -> RowsResult:
        """Same as ``get_rows`` but ``sort`` may be one token or a list of tokens."""
        return self.get_rows(limit, offset, conditions, normalize_sort_option(sort), meta)

    def select_row(self, conditions: Any) -> Optional[Row]:
        """First row (in table order) satisfying ``conditions``, or ``None``."""
        index = self._find_index(conditions)
        if index is None:
            return None
        return self._data_source[index]

    # ---------------------- MUTATIONS ----------------------

    def insert_row(self, item: Row) -> Row:
        """Append ``item`` (same object, not a copy) and return it."""
        if self._primary_key:
            key = self._primary_key
            value = get_path(item, key)
            for row in self._data_source:
                if deep_equal(get_path(row, key), value):
                    logger.info("insert_row rejected: duplicate %s=%r", key, value)
                    raise DuplicateKey(key, value)

        self._data_source.append(item)
        logger.info("insert_row: %d rows", len(self._data_source))
        return item

    def update_row(self, conditions: Any, new_item: Optional[Row] = None) -> bool:
        """Replace (or, without ``new_item``, remove) the first row matching ``conditions``.

        Raises ``ConditionNotFound`` when nothing matches; the table is left
        untouched on any failure.
        """
        index = self._find_index(conditions)
        if index is None:
            raise ConditionNotFound()

        if new_item is not None:
            self._data_source[index] = new_item
            logger.info("update_row: replaced row %d", index)
        else:
            del self._data_source[index]
            logger.info("delete_row: removed row %d, %d rows left", index, len(self._data_source))
        return True

    def delete_row(self, conditions: Any) -> bool:
        return self.update_row(conditions)

    # ---------------------- HELPERS ----------------------

    def _find_index(self, conditions: Any) -> Optional[int]:
        tree = build_condition_tree(conditions)
        if tree is None:
            tree = build_condition_tree([])
        validate_tree(tree)
        for index, row in enumerate(self._data_source):
            if match(row, tree):
                return index
        return None
