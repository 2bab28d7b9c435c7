import math

import pytest

from gridframe.errors import (
    ErrorCollection,
    NoRowsError,
    RowError,
    b,
    bool_value_formatter,
    is_valid_float64,
)

ERR_A = ValueError("test A error")
ERR_B = ValueError("test B error")
ERR_C = ValueError("test C error")


def test_error_collection_contents():
    ec = ErrorCollection()
    ec.add_error(ERR_A)
    ec.add_error(ERR_B)

    assert ec.is_nil() is False
    assert ec.contains(ERR_A) is True
    assert ec.contains(ERR_B) is True
    assert ec.contains(ERR_C) is False


def test_empty_collection_is_nil_and_contains_none():
    ec = ErrorCollection()
    assert ec.is_nil() is True
    assert ec.contains(None) is True


def test_add_none_raises():
    ec = ErrorCollection()
    with pytest.raises(ValueError):
        ec.add_error(None)


def test_str_joins_with_newlines():
    ec = ErrorCollection([ERR_A, ERR_B])
    assert str(ec) == "test A error\ntest B error"


def test_row_error_message_and_unwrap():
    inner = ValueError("boom")
    err = RowError(3, inner)
    assert str(err) == "row: 3: boom"
    assert err.err is inner
    assert err.__cause__ is inner


def test_contains_sees_through_row_error():
    ec = ErrorCollection([RowError(1, ERR_C)])
    assert ec.contains(ERR_C) is True
    assert ec.contains(ERR_A) is False


def test_find_returns_matching_type():
    row_err = RowError(2, ERR_A)
    ec = ErrorCollection([ERR_B, row_err])
    assert ec.find(RowError) is row_err
    assert ec.find(KeyError) is None


def test_find_in_nested_collection():
    inner = ErrorCollection([RowError(5, ERR_A)])
    outer = ErrorCollection([inner])
    found = outer.find(RowError)
    assert found is not None and found.row == 5
    assert outer.contains(ERR_A) is True


def test_no_rows_message():
    assert str(NoRowsError()) == "contains no rows"


def test_b():
    assert b(True) == 1
    assert b(False) == 0


def test_is_valid_float64():
    assert is_valid_float64(1.5) is True
    assert is_valid_float64(math.nan) is False
    assert is_valid_float64(math.inf) is False
    assert is_valid_float64(-math.inf) is False


def test_bool_value_formatter():
    assert bool_value_formatter(None) == "NaN"
    assert bool_value_formatter(0) == "false"
    assert bool_value_formatter(1) == "true"
    assert bool_value_formatter("1") == "true"
    assert bool_value_formatter(True) == ""


def test_bool_value_formatter_rejects_other_values():
    with pytest.raises(TypeError):
        bool_value_formatter(2)