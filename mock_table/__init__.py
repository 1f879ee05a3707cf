"""In-memory tabular query engine for tests and mock servers."""

from mock_table.conditions import ConditionBranch, ConditionLeaf, build_condition_tree
from mock_table.errors import (
    ConditionNotFound,
    DuplicateKey,
    InvalidConditionShape,
    MissingRequiredField,
    TableError,
    TypeMismatch,
)
from mock_table.evaluator import evaluate
from mock_table.table import Table

__all__ = [
    "ConditionBranch",
    "ConditionLeaf",
    "ConditionNotFound",
    "DuplicateKey",
    "InvalidConditionShape",
    "MissingRequiredField",
    "Table",
    "TableError",
    "TypeMismatch",
    "build_condition_tree",
    "evaluate",
]
