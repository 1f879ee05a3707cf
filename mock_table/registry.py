"""
Table registry: the named tables served by the mock server.

Tables live in a process-local dict; nothing is persisted.
``load_seed_file`` fills the registry from a JSON file at startup.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from mock_table.errors import TableAlreadyExists, TableNotFound
from mock_table.field_utils import field_names
from mock_table.logger import logger
from mock_table.table import Table

tables: Dict[str, Table] = {}


def create_table(
    name: str,
    rows: Optional[List[Dict[str, Any]]] = None,
    primary_key: Optional[str] = None,
    replace: bool = False,
) -> Table:
    if name in tables and not replace:
        raise TableAlreadyExists(name)
    table = Table(rows if rows is not None else [], primary_key=primary_key)
    tables[name] = table
    logger.info(
        "Table '%s' registered — %d rows, primary key: %s", name, len(table), primary_key,
    )
    return table


def get_table(name: str) -> Table:
    try:
        return tables[name]
    except KeyError:
        raise TableNotFound(name) from None


def drop_table(name: str) -> None:
    if tables.pop(name, None) is None:
        raise TableNotFound(name)
    logger.info("Table '%s' dropped", name)


def clear_tables() -> None:
    """Remove every registered table."""
    tables.clear()


def list_tables() -> List[Dict[str, Any]]:
    """Describe each table: name, row count, primary key and top-level fields."""
    return [
        {
            "name": name,
            "row_count": len(table),
            "primary_key": table.primary_key,
            "fields": field_names(table.data_source),
        }
        for name, table in tables.items()
    ]


def load_seed_file(
    path: Union[str, Path],
    default_table: str,
    primary_key: Optional[str] = None,
) -> List[str]:
    """Register tables from a JSON seed file and return their names.

    A top-level list seeds ``default_table``; a top-level object seeds one
    table per key.  Existing tables with the same name are replaced.
    """
    with open(path, "r", encoding="utf-8") as fh:
        data = json.load(fh)

    if isinstance(data, list):
        seeds = {default_table: data}
    elif isinstance(data, dict):
        seeds = data
    else:
        raise ValueError(
            f"Seed file {path} must contain a list of rows or an object of tables"
        )

    for name, rows in seeds.items():
        if not isinstance(rows, list):
            raise ValueError(f"Seed table '{name}' must be a list of rows")
        create_table(name, rows, primary_key=primary_key, replace=True)

    logger.info("Seed file %s loaded: %s", path, list(seeds))
    return list(seeds)
