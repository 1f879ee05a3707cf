import copy

import pytest
from fastapi.testclient import TestClient

from mock_table import registry
from mock_table.app import app
from mock_table.table import Table

ROLES = ["admin", "user", "guest"]

SAMPLE_ROWS = [
    {
        "id": i + 1,
        "userId": f"user{i + 1}@example.com",
        "name": f"User{i + 1}",
        "status": "active" if i % 2 == 0 else "inactive",
        "role": ROLES[i % 3],
        "createdAt": f"2023-01-{i % 28 + 1:02d}",
        "contextId": f"ctx-{i + 1}",
    }
    for i in range(100)
]


@pytest.fixture()
def sample_rows():
    return copy.deepcopy(SAMPLE_ROWS)


@pytest.fixture()
def table(sample_rows):
    return Table(sample_rows, primary_key="id")


@pytest.fixture()
def client():
    registry.clear_tables()
    registry.create_table("users", copy.deepcopy(SAMPLE_ROWS), primary_key="id")
    yield TestClient(app)
    registry.clear_tables()
