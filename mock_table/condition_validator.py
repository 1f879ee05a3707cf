"""
Condition validator: checks a leaf before it is evaluated.

Checks, in order:
- the leaf names a field (``InvalidConditionShape``)
- ``required`` leaves carry a value that is not ``None`` / ``""``
  (``MissingRequiredField``)
- a declared ``type`` accepts the value (``TypeMismatch``):

    number   — int / float, or a string ``float()`` can parse
    boolean  — bool, or the strings ``"true"`` / ``"false"``
    string   — str

Validation never rewrites the leaf; coercion of typed values happens in
``resolve_expected_value`` right before comparison.
"""

from typing import Any

from mock_table.conditions import ConditionLeaf, ConditionNode, iter_leaves
from mock_table.errors import InvalidConditionShape, MissingRequiredField, TypeMismatch
from mock_table.field_utils import (
    TYPE_BOOLEAN,
    TYPE_NUMBER,
    TYPE_STRING,
    describe_type,
    is_number,
    narrow_number,
    parse_number,
)

BOOLEAN_STRINGS = ("true", "false")


def is_blank(value: Any) -> bool:
    """``None`` and ``""`` both mean "no value given"."""
    return value is None or value == ""


def _accepts(expected_type: str, value: Any) -> bool:
    if expected_type == TYPE_NUMBER:
        return is_number(value) or (isinstance(value, str) and parse_number(value) is not None)
    if expected_type == TYPE_BOOLEAN:
        return isinstance(value, bool) or value in BOOLEAN_STRINGS
    if expected_type == TYPE_STRING:
        return isinstance(value, str)
    return False


def validate_leaf(leaf: ConditionLeaf) -> ConditionLeaf:
    """Validate a single leaf; returns it unchanged or raises."""
    if not leaf.field:
        raise InvalidConditionShape("invalid item key")

    if leaf.required and is_blank(leaf.value):
        raise MissingRequiredField(leaf.field)

    if leaf.type is not None and not is_blank(leaf.value):
        if not _accepts(leaf.type, leaf.value):
            raise TypeMismatch(leaf.field, leaf.type, describe_type(leaf.value))

    return leaf


def validate_tree(node: ConditionNode) -> None:
    """Validate every leaf of ``node`` without touching any row."""
    for leaf in iter_leaves(node):
        validate_leaf(leaf)


def resolve_expected_value(leaf: ConditionLeaf) -> Any:
    """Value the evaluator compares against, after declared-type coercion.

    ``{"id": "5", "type": "number"}`` compares as ``5`` and
    ``{"active": "true", "type": "boolean"}`` as ``True``.  Untyped and
    ``string`` leaves compare exactly as given.
    """
    value = leaf.value
    if is_blank(value):
        return value
    if leaf.type == TYPE_NUMBER and isinstance(value, str):
        return narrow_number(parse_number(value))
    if leaf.type == TYPE_BOOLEAN and isinstance(value, str):
        return value == "true"
    return value
