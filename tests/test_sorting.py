import pytest

from mock_table.sorting import normalize_sort_option, parse_sort_tokens, sort_rows


def ids(rows):
    return [row["id"] for row in rows]


def test_parse_sort_tokens():
    assert parse_sort_tokens(["status:asc", "id:desc", "name", "role:DESC"]) == [
        ("status", "asc"),
        ("id", "desc"),
        ("name", "asc"),
        ("role", "asc"),
    ]


@pytest.mark.parametrize(
    "sort, expected",
    [
        ("id:desc", ["id:desc"]),
        (["status:asc", "id:desc"], ["status:asc", "id:desc"]),
        (("id",), ["id"]),
        (None, None),
        (5, None),
    ],
)
def test_normalize_sort_option(sort, expected):
    assert normalize_sort_option(sort) == expected


def test_sort_is_stable_for_equal_keys():
    rows = [
        {"id": 1, "k": "b"},
        {"id": 2, "k": "a"},
        {"id": 3, "k": "b"},
        {"id": 4, "k": "a"},
    ]
    assert ids(sort_rows(rows, ["k:asc"])) == [2, 4, 1, 3]
    assert ids(sort_rows(rows, ["k:desc"])) == [1, 3, 2, 4]


def test_sort_does_not_modify_input():
    rows = [{"id": 2}, {"id": 1}]
    sort_rows(rows, ["id:asc"])
    assert ids(rows) == [2, 1]


def test_multi_key_sort(sample_rows):
    result = sort_rows(sample_rows, ["status:asc", "id:desc"])
    assert [r["status"] for r in result[:50]] == ["active"] * 50
    assert [r["status"] for r in result[50:]] == ["inactive"] * 50
    assert ids(result[:3]) == [99, 97, 95]
    assert ids(result[50:53]) == [100, 98, 96]


def test_sort_by_date_strings_desc(sample_rows):
    result = sort_rows(sample_rows[:10], ["createdAt:desc"])
    dates = [r["createdAt"] for r in result]
    assert dates == sorted(dates, reverse=True)


def test_numbers_sort_numerically_and_strings_without_case_folding():
    rows = [{"id": 1, "v": 10}, {"id": 2, "v": 9}, {"id": 3, "v": 100}]
    assert ids(sort_rows(rows, ["v:asc"])) == [2, 1, 3]

    rows = [{"id": 1, "v": "b"}, {"id": 2, "v": "B"}, {"id": 3, "v": "a"}]
    assert ids(sort_rows(rows, ["v:asc"])) == [2, 3, 1]


def test_missing_values_sort_last_ascending_and_first_descending():
    rows = [{"id": 1, "v": 2}, {"id": 2, "v": None}, {"id": 3}, {"id": 4, "v": 1}]
    assert ids(sort_rows(rows, ["v:asc"])) == [4, 1, 2, 3]
    assert ids(sort_rows(rows, ["v:desc"])) == [2, 3, 1, 4]


def test_mixed_types_do_not_raise():
    rows = [{"id": 1, "v": "x"}, {"id": 2, "v": 3}, {"id": 3, "v": {"a": 1}}]
    assert ids(sort_rows(rows, ["v:asc"])) == [2, 1, 3]


def test_nested_sort_field():
    rows = [{"id": 1, "p": {"age": 30}}, {"id": 2, "p": {"age": 20}}]
    assert ids(sort_rows(rows, ["p.age:asc"])) == [2, 1]
