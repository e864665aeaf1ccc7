import pytest

from base_reporter.reporting.stringify import ValueKind, same_kind, stringify, value_kind


class Point:
    pass


class Vector:
    pass


def test_stringify_quotes_strings():
    assert stringify("Aaa") == '"Aaa"'


def test_stringify_sorts_mapping_keys():
    assert stringify({"b": 1, "a": [1, 2]}) == '{\n  "a": [\n    1,\n    2\n  ],\n  "b": 1\n}'


def test_stringify_is_stable_for_sets():
    assert stringify({3, 1, 2}) == stringify({2, 3, 1})


def test_stringify_falls_back_to_repr():
    point = Point()
    assert stringify(point) == stringify(repr(point))


def test_stringify_tolerates_mixed_key_types():
    assert '"1": "a"' in stringify({1: "a", "b": 2})


def test_stringify_spells_out_tuple_keys():
    assert stringify({(1, 2): "a", "z": 1}) == '{\n  "(1, 2)": "a",\n  "z": 1\n}'


def test_stringify_marks_self_referencing_mapping():
    node = {"a": 1}
    node["self"] = node
    assert stringify(node) == '{\n  "a": 1,\n  "self": "[Circular]"\n}'


def test_stringify_marks_self_referencing_list():
    items = [1]
    items.append(items)
    assert stringify(items) == '[\n  1,\n  "[Circular]"\n]'


def test_stringify_shared_value_is_not_circular():
    shared = [1]
    assert "[Circular]" not in stringify({"x": shared, "y": shared})


@pytest.mark.parametrize("value, kind", [
    (None, ValueKind.NULL),
    (True, ValueKind.BOOLEAN),
    ("x", ValueKind.STRING),
    (1, ValueKind.NUMBER),
    (1.5, ValueKind.NUMBER),
    ({}, ValueKind.MAPPING),
    ([], ValueKind.SEQUENCE),
    ((), ValueKind.SEQUENCE),
    (set(), ValueKind.SET),
    (Point(), ValueKind.OTHER),
])
def test_value_kind(value, kind):
    assert value_kind(value) is kind


@pytest.mark.parametrize("a, b, expected", [
    ("a", "b", True),
    (1, 2.5, True),
    (1, "1", False),
    (True, 1, False),
    ([1], (2,), True),
    ({"a": 1}, [1], False),
    (Point(), Point(), True),
    (Point(), Vector(), False),
])
def test_same_kind(a, b, expected):
    assert same_kind(a, b) is expected
