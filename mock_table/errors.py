"""
Error taxonomy for the table engine.

All errors derive from ``TableError`` and also from a builtin
(``ValueError`` for bad input, ``LookupError`` for "nothing matched"),
so plain ``except ValueError`` handlers keep working.
"""

from typing import Any, Iterable, Optional


class TableError(Exception):
    """Base class for every failure raised by the engine."""


class InvalidConditionShape(TableError, ValueError):
    """A condition leaf has no identifiable field key (or more than one)."""

    def __init__(self, message: str = "invalid condition: no field key", keys: Optional[Iterable[str]] = None):
        self.keys = list(keys) if keys is not None else []
        super().__init__(message)


class MissingRequiredField(TableError, ValueError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"{key} is required")


class TypeMismatch(TableError, ValueError):
    def __init__(self, key: str, expected_type: str, actual_type: str):
        self.key = key
        self.expected_type = expected_type
        self.actual_type = actual_type
        super().__init__(
            f"{key} must be of type '{expected_type}' (got '{actual_type}')"
        )


class DuplicateKey(TableError, ValueError):
    def __init__(self, key: str, value: Any):
        self.key = key
        self.value = value
        super().__init__(f"primary key duplicate error: {key}={value!r}")


class ConditionNotFound(TableError, LookupError):
    def __init__(self, message: str = "not found condition"):
        super().__init__(message)


# ---------------------- REGISTRY ----------------------


class TableNotFound(TableError, LookupError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Table '{name}' not found")


class TableAlreadyExists(TableError, ValueError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Table '{name}' already exists")
