"""Testes da inferência de tipo das colunas."""

import pytest

from app.schemas.analysis import FieldType
from app.services.type_inference import infer_type, is_numeric


@pytest.mark.parametrize(
    "values, expected",
    [
        (["1", "2", "3.5"], FieldType.NUMBER),
        (["-4", "1e3", ".5"], FieldType.NUMBER),
        (["2024-01-01", "2024-02-01"], FieldType.DATE),
        (["2024-01-01T10:00:00Z"], FieldType.DATETIME),
        (["2024-01-01T10:00:00"], FieldType.DATETIME),
        (['["a", "b"]', "[1]"], FieldType.ARRAY),
        (["Alice", "Bob"], FieldType.STRING),
        (["1", "two"], FieldType.STRING),
        ([], FieldType.STRING),
        (["", ""], FieldType.STRING),
    ],
)
def test_infer_type(values, expected):
    assert infer_type(values) == expected


def test_empty_values_are_ignored():
    assert infer_type(["", "10", "", "20"]) == FieldType.NUMBER


def test_date_format_decided_by_first_value():
    assert infer_type(["2024-01-01", "2024-01-02T08:00:00Z"]) == FieldType.DATE
    assert infer_type(["2024-01-02T08:00:00Z", "2024-01-01"]) == FieldType.DATETIME


def test_array_decided_by_first_value():
    assert infer_type(["[1,2]", "plain"]) == FieldType.ARRAY
    assert infer_type(["plain", "[1,2]"]) == FieldType.STRING


@pytest.mark.parametrize("value", ["nan", "inf", "Infinity", "1,5", "0x10", "--1", "."])
def test_non_numeric_literals(value):
    assert not is_numeric(value)


def test_numeric_with_surrounding_spaces():
    assert is_numeric(" 42 ")
