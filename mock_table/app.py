"""
FastAPI mock server — serves in-memory tables over HTTP for tests and demos.

Features:
- Named tables kept in a process-local registry
- Optional JSON seed file loaded at startup (``MOCK_TABLE_SEED_FILE``)
- Nested AND/OR conditions with type validation and ``like`` matching
- Multi-key sorting, offset/limit pagination and an optional meta envelope
- Insert / update / delete by condition with primary-key duplicate checks

Run with ``uvicorn mock_table.app:app``.
"""

from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from mock_table.config import DEFAULT_TABLE_NAME, PRIMARY_KEY, SEED_FILE
from mock_table.errors import (
    ConditionNotFound,
    DuplicateKey,
    TableAlreadyExists,
    TableError,
    TableNotFound,
)
from mock_table.logger import logger
from mock_table.registry import (
    create_table,
    drop_table,
    get_table,
    list_tables,
    load_seed_file,
)


def seed_tables() -> None:
    """Load ``MOCK_TABLE_SEED_FILE`` into the registry, when one is configured."""
    if not SEED_FILE:
        return
    try:
        load_seed_file(SEED_FILE, DEFAULT_TABLE_NAME, primary_key=PRIMARY_KEY or None)
    except (OSError, ValueError) as e:
        logger.error("Seed file %s could not be loaded: %s", SEED_FILE, e)
        raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    seed_tables()
    yield


app = FastAPI(title="Mock Table Service", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------- REQUEST MODELS ----------------------


class CreateTableRequest(BaseModel):
    name: str = Field(min_length=1)
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    primary_key: Optional[str] = None


class SelectRowsRequest(BaseModel):
    limit: Optional[Union[int, float, str]] = None
    offset: Optional[Union[int, float, str]] = None
    conditions: Any = None
    sort: Optional[Union[str, List[str]]] = None
    meta: bool = False


class SelectRowRequest(BaseModel):
    conditions: Any = None


class InsertRowRequest(BaseModel):
    item: Dict[str, Any]


class UpdateRowRequest(BaseModel):
    conditions: Any = Field(..., description="Tree or flat list of condition items")
    item: Optional[Dict[str, Any]] = None


class DeleteRowRequest(BaseModel):
    conditions: Any = Field(..., description="Tree or flat list of condition items")


# ---------------------- ERROR MAPPING ----------------------


def _to_http_error(action: str, e: TableError) -> HTTPException:
    if isinstance(e, (TableNotFound, ConditionNotFound)):
        status_code = 404
    elif isinstance(e, (DuplicateKey, TableAlreadyExists)):
        status_code = 409
    else:
        status_code = 400
    logger.warning("%s rejected (%d): %s", action, status_code, e)
    return HTTPException(status_code=status_code, detail=str(e))


# ---------------------- ENDPOINTS ----------------------


@app.get("/tables")
def get_tables():
    tables = list_tables()
    return {"total_tables": len(tables), "tables": tables}


@app.post("/tables", status_code=201)
def post_table(request: CreateTableRequest):
    try:
        table = create_table(request.name, request.rows, primary_key=request.primary_key)
    except TableError as e:
        raise _to_http_error("create-table", e)
    return {"name": request.name, "row_count": len(table), "primary_key": table.primary_key}


@app.delete("/tables/{name}")
def delete_table(name: str):
    try:
        drop_table(name)
    except TableError as e:
        raise _to_http_error("drop-table", e)
    return {"status": "dropped", "name": name}


@app.post("/tables/{name}/select-rows")
def select_rows(name: str, request: SelectRowsRequest):
    """Filter → count → sort → paginate, optionally wrapped in the meta envelope."""
    try:
        table = get_table(name)
        result = table.select_rows(
            request.limit,
            request.offset,
            request.conditions,
            request.sort,
            request.meta,
        )
    except TableError as e:
        raise _to_http_error("select-rows", e)

    if request.meta:
        return result
    return {"result": result}


@app.post("/tables/{name}/select-row")
def select_row(name: str, request: SelectRowRequest):
    try:
        row = get_table(name).select_row(request.conditions)
    except TableError as e:
        raise _to_http_error("select-row", e)
    return {"row": row}


@app.post("/tables/{name}/insert-row", status_code=201)
def insert_row(name: str, request: InsertRowRequest):
    try:
        row = get_table(name).insert_row(request.item)
    except TableError as e:
        raise _to_http_error("insert-row", e)
    return {"row": row}


@app.post("/tables/{name}/update-row")
def update_row(name: str, request: UpdateRowRequest):
    try:
        success = get_table(name).update_row(request.conditions, request.item)
    except TableError as e:
        raise _to_http_error("update-row", e)
    return {"success": success}


@app.post("/tables/{name}/delete-row")
def delete_row(name: str, request: DeleteRowRequest):
    try:
        success = get_table(name).delete_row(request.conditions)
    except TableError as e:
        raise _to_http_error("delete-row", e)
    return {"success": success}
