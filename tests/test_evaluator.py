import pytest

from mock_table.conditions import ConditionBranch, ConditionLeaf, build_condition_tree
from mock_table.errors import MissingRequiredField, TypeMismatch
from mock_table.evaluator import evaluate, match

ROW = {
    "id": 5,
    "name": "User5",
    "active": True,
    "score": 2.0,
    "profile": {"city": "Seoul", "zip": None},
    "tags": ["alpha", "Beta"],
}


def matches(conditions, row=ROW):
    return evaluate(row, build_condition_tree(conditions))


def test_exact_string_match_is_case_insensitive():
    assert matches({"name": "user5"})
    assert matches({"name": "USER5"})
    assert not matches({"name": "user"})


def test_like_is_case_insensitive_substring():
    assert matches({"name": "SER", "like": True})
    assert not matches({"name": "user6", "like": True})


def test_string_compare_uses_text_form_of_row_value():
    assert matches({"id": "5"})
    assert matches({"active": "TRUE"})
    assert matches({"score": "2"})


def test_missing_row_value_compares_as_empty_string():
    assert not matches({"nickname": "x"})
    assert not matches({"nickname": "x", "like": True})


@pytest.mark.parametrize("value", [None, ""])
def test_blank_predicate_never_excludes(value):
    assert matches({"nickname": value})
    assert matches({"name": value, "like": True})


def test_non_string_values_use_strict_equality():
    assert matches({"id": 5})
    assert matches({"score": 2})
    assert matches({"active": True})
    assert not matches({"id": 6})
    # booleans never equal numbers
    assert not matches({"active": 1})
    assert not matches({"id": True}, {"id": 1})


def test_like_has_no_effect_on_non_string_values():
    assert matches({"id": 5, "like": True})
    assert not matches({"id": 55, "like": True}, {"id": 5})


def test_nested_structures_compare_deeply():
    assert matches({"profile": {"city": "Seoul", "zip": None}})
    assert not matches({"profile": {"city": "Seoul"}})
    assert matches({"tags": ["alpha", "Beta"]})


def test_dotted_paths_reach_nested_values():
    assert matches({"profile.city": "seoul"})
    assert matches({"tags.1": "beta"})
    assert not matches({"profile.country": "KR"})
    assert not matches({"tags.5": "alpha"})


def test_literal_dotted_key_wins_over_path():
    row = {"a.b": "literal", "a": {"b": "nested"}}
    assert matches({"a.b": "literal"}, row)
    assert not matches({"a.b": "nested"}, row)


def test_number_type_coerces_expected_value():
    # "5.0" only matches the numeric row value once coerced
    assert not matches({"id": "5.0"})
    assert matches({"id": "5.0", "type": "number"})
    # after coercion the comparison is numeric equality, not substring
    assert matches({"id": "5", "like": True}, {"id": 15})
    assert not matches({"id": "5", "type": "number", "like": True}, {"id": 15})


def test_boolean_type_coerces_expected_value():
    assert matches({"active": "true", "type": "boolean"})
    assert not matches({"active": "false", "type": "boolean"})
    assert not matches({"active": "true", "type": "boolean"}, {"active": "true"})


def test_validation_errors_propagate():
    with pytest.raises(TypeMismatch):
        matches({"id": "abc", "type": "number"})


def test_empty_and_is_true_and_empty_or_is_false():
    assert evaluate(ROW, ConditionBranch(logic="AND", conditions=[]))
    assert not evaluate(ROW, ConditionBranch(logic="OR", conditions=[]))


def test_branch_combinations():
    assert matches({"logic": "OR", "conditions": [{"id": 1}, {"name": "user5"}]})
    assert not matches({"logic": "AND", "conditions": [{"id": 1}, {"name": "user5"}]})
    assert matches({
        "logic": "OR",
        "conditions": [
            {"id": 1},
            {"conditions": [{"name": "user", "like": True}, {"active": True}]},
        ],
    })


def test_leaf_at_root():
    assert evaluate(ROW, ConditionLeaf(field="id", value=5))


def test_unsupported_node_type():
    with pytest.raises(TypeError):
        evaluate(ROW, {"id": 5})


def test_invalid_leaf_raises_even_when_an_earlier_child_decides():
    tree = build_condition_tree({
        "logic": "OR",
        "conditions": [{"id": 5}, {"id": "abc", "type": "number"}],
    })
    with pytest.raises(TypeMismatch):
        evaluate({"id": 5}, tree)

    tree = build_condition_tree([{"id": 6}, {"name": "", "required": True}])
    with pytest.raises(MissingRequiredField):
        evaluate({"id": 5}, tree)


def test_match_skips_validation_for_prevalidated_trees():
    leaf = ConditionLeaf(field="id", value="5", type="number")
    assert match({"id": 5}, leaf)
    # match never validates, so the caller owns validation
    assert match({"id": 5}, ConditionLeaf(field="id", value=None, required=True))
