"""
Condition evaluator: decides whether a row satisfies a condition tree.

String expectations are matched case-insensitively against the row value's
text form (``like`` switches from equality to substring containment).
Any other expectation is matched by strict structural equality, so
numbers, booleans and nested objects must match exactly.
"""

from typing import Any, Dict

from mock_table.condition_validator import is_blank, resolve_expected_value, validate_tree
from mock_table.conditions import LOGIC_OR, ConditionBranch, ConditionLeaf, ConditionNode
from mock_table.field_utils import deep_equal, get_path, to_text


def _case_insensitive_eq(row_value: Any, expected: str) -> bool:
    return to_text(row_value).upper() == expected.upper()


def _case_insensitive_contains(row_value: Any, expected: str) -> bool:
    return expected.upper() in to_text(row_value).upper()


def match_leaf(row: Dict[str, Any], leaf: ConditionLeaf) -> bool:
    expected = resolve_expected_value(leaf)
    # an empty predicate never excludes a row
    if is_blank(expected):
        return True

    row_value = get_path(row, leaf.field)

    if isinstance(expected, str):
        if leaf.like:
            return _case_insensitive_contains(row_value, expected)
        return _case_insensitive_eq(row_value, expected)

    return deep_equal(row_value, expected)


def match_branch(row: Dict[str, Any], branch: ConditionBranch) -> bool:
    # all() of nothing is True, any() of nothing is False
    if branch.logic == LOGIC_OR:
        return any(match(row, child) for child in branch.conditions)
    return all(match(row, child) for child in branch.conditions)


def match(row: Dict[str, Any], node: ConditionNode) -> bool:
    """Evaluate an already validated tree against ``row``.

    ``Table`` runs ``validate_tree`` once per call and then matches every
    row through here.
    """
    if isinstance(node, ConditionLeaf):
        return match_leaf(row, node)
    if isinstance(node, ConditionBranch):
        return match_branch(row, node)
    raise TypeError(f"Unsupported condition node: {type(node).__name__}")


def evaluate(row: Dict[str, Any], node: ConditionNode) -> bool:
    """Return ``True`` when ``row`` satisfies ``node``.

    Every leaf is validated before any comparison, so an invalid tree
    raises whatever the row contains.
    """
    if not isinstance(node, (ConditionLeaf, ConditionBranch)):
        raise TypeError(f"Unsupported condition node: {type(node).__name__}")
    validate_tree(node)
    return match(row, node)
