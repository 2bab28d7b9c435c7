import datetime

import pytest

from gridframe.dataframe import DataFrame, Series
from gridframe.forecast.interpolation.core import interpolate
from gridframe.forecast.interpolation.methods import (
    BackwardFill,
    FillDirection,
    FillRegion,
    ForwardFill,
    InterpolateOptions,
    Lagrange,
    Linear,
    Spline,
)

FWD = FillDirection.FORWARD
BKWD = FillDirection.BACKWARD


def _series(*values):
    return Series("values", values, dtype="float64")


def _expected(*values):
    return Series("expected", values, dtype="float64")


def test_forward_fill_forward_with_limit():
    data = _series(None, 50.3, None, None, 56.2, 45.34, None, 39.26, None)
    opts = InterpolateOptions(method=ForwardFill(), fill_direction=FWD, limit=1, in_place=True)
    assert interpolate(data, opts) is None
    expected = _expected(50.3, 50.3, 50.3, None, 56.2, 45.34, 45.34, 39.26, 39.26)
    assert data.is_equal(expected)


def test_forward_fill_backward():
    data = _series(None, 25.7, None, None, 36.6, 45.2, None, 39.26, None)
    opts = InterpolateOptions(method=ForwardFill(), fill_direction=BKWD, in_place=True)
    interpolate(data, opts)
    expected = _expected(25.7, 25.7, 25.7, 25.7, 36.6, 45.2, 45.2, 39.26, 39.26)
    assert data.is_equal(expected)


def test_forward_fill_both():
    data = _series(None, 50.3, None, None, 56.2, 45.34, None, 39.26, None)
    opts = InterpolateOptions(method=ForwardFill(), fill_direction=FWD | BKWD, in_place=True)
    interpolate(data, opts)
    expected = _expected(50.3, 50.3, 50.3, 50.3, 56.2, 45.34, 45.34, 39.26, 39.26)
    assert data.is_equal(expected)


def test_backward_fill_backward():
    data = _series(None, 25.7, None, None, 36.6, 45.2, None, 39.26, None)
    opts = InterpolateOptions(method=BackwardFill(), fill_direction=BKWD, in_place=True)
    interpolate(data, opts)
    expected = _expected(25.7, 25.7, 36.6, 36.6, 36.6, 45.2, 39.26, 39.26, 39.26)
    assert data.is_equal(expected)


def test_backward_fill_forward():
    data = _series(None, 50.3, None, None, 56.2, 45.34, None, 39.26, None)
    opts = InterpolateOptions(method=BackwardFill(), fill_direction=FWD, in_place=True)
    interpolate(data, opts)
    expected = _expected(50.3, 50.3, 56.2, 56.2, 56.2, 45.34, 39.26, 39.26, 39.26)
    assert data.is_equal(expected)


def test_backward_fill_both():
    data = _series(None, 50.3, None, None, 56.2, 45.34, None, 39.26, None)
    opts = InterpolateOptions(method=BackwardFill(), fill_direction=FWD | BKWD, in_place=True)
    interpolate(data, opts)
    expected = _expected(50.3, 50.3, 56.2, 56.2, 56.2, 45.34, 39.26, 39.26, 39.26)
    assert data.is_equal(expected)


LINEAR_DATA = (None, 29.33, None, None, None, 21.7, 35.14, None, None, 50.66, None)
LINEAR_EXPECTED = (31.237499999999997, 29.33, 27.4225, 25.515, 23.6075, 21.7, 35.14,
                   40.31333333333333, 45.486666666666665, 50.66, 55.83333333333333)


@pytest.mark.parametrize("direction", [FWD, BKWD])
def test_linear_fill(direction):
    data = _series(*LINEAR_DATA)
    opts = InterpolateOptions(method=Linear(), fill_direction=direction, in_place=True)
    interpolate(data, opts)
    assert data.is_equal(_expected(*LINEAR_EXPECTED))


def test_linear_fill_both_interpolation_only():
    data = _series(*LINEAR_DATA)
    opts = InterpolateOptions(method=Linear(), fill_direction=FWD | BKWD,
                              fill_region=FillRegion.INTERPOLATION, in_place=True)
    interpolate(data, opts)
    expected = _expected(None, 29.33, 27.4225, 23.6075, 25.515, 21.7, 35.14,
                         40.31333333333333, 45.486666666666665, 50.66, None)
    assert data.is_equal(expected)


def test_dataframe_forward_fill():
    s1 = Series("column 1", [None, 29.33, None, None, None, 21.7, 35.14, None, None], dtype="float64")
    s2 = Series("column 2", [None, 50.3, None, None, 56.2, 45.34, None, 39.26, None], dtype="float64")
    df = DataFrame(s1, s2)
    opts = InterpolateOptions(method=ForwardFill(), fill_direction=FWD, in_place=True)
    assert interpolate(df, opts) is None

    s3 = Series("column 3", [29.33, 29.33, 29.33, 29.33, 29.33, 21.7, 35.14, 35.14, 35.14])
    s4 = Series("column 4", [50.3, 50.3, 50.3, 50.3, 56.2, 45.34, 45.34, 39.26, 39.26])
    assert df.is_equal(DataFrame(s3, s4))


def test_not_in_place_returns_fills_and_leaves_data():
    data = _series(None, 1.0, None, 3.0, None)
    result = interpolate(data, InterpolateOptions(method=ForwardFill()))
    assert result == {2: 1.0, 0: 1.0, 4: 3.0}
    assert data.values == [None, 1.0, None, 3.0, None]


def test_extrapolation_only():
    data = _series(None, 1.0, None, 3.0, None)
    opts = InterpolateOptions(fill_region=FillRegion.EXTRAPOLATION)
    assert interpolate(data, opts) == {0: 1.0, 4: 3.0}


def test_range_limits_filled_rows():
    data = _series(None, 1.0, None, 3.0, None, 5.0, None)
    opts = InterpolateOptions(method=Linear(), start=1, end=5)
    assert interpolate(data, opts) == {2: 2.0, 4: 4.0}


def test_spline_on_straight_line():
    data = _series(0.0, None, 2.0, None, 4.0)
    opts = InterpolateOptions(method=Spline(3), in_place=True)
    interpolate(data, opts)
    assert data.values == [0.0, 1.0, 2.0, 3.0, 4.0]


def test_spline_other_order_fills_nothing():
    data = _series(0.0, None, 2.0)
    opts = InterpolateOptions(method=Spline(2), fill_region=FillRegion.INTERPOLATION)
    assert interpolate(data, opts) == {}


def test_lagrange_does_not_extrapolate():
    data = _series(None, 1.0, None, 3.0, None)
    result = interpolate(data, InterpolateOptions(method=Lagrange()))
    assert list(result) == [2]
    assert result[2] == pytest.approx(2.0)


def test_linear_with_float_axis():
    data = _series(0.0, None, 10.0)
    axis = Series("x", [0.0, 1.0, 4.0], dtype="float64")
    result = interpolate(data, InterpolateOptions(method=Linear(), horiz_axis=axis))
    assert result == {1: 2.5}


def test_linear_with_time_axis():
    base = datetime.datetime(2020, 1, 1, tzinfo=datetime.timezone.utc)
    axis = Series("t", [base, base + datetime.timedelta(seconds=1),
                        base + datetime.timedelta(seconds=4)], dtype="time")
    data = _series(0.0, None, 10.0)
    opts = InterpolateOptions(method=Linear(), horiz_axis=axis, in_place=True)
    interpolate(data, opts)
    assert data.values == [0.0, 2.5, 10.0]


def test_axis_with_missing_values_in_place_raises():
    data = _series(0.0, None, 10.0)
    axis = Series("x", [0.0, None, 4.0], dtype="float64")
    with pytest.raises(ValueError):
        interpolate(data, InterpolateOptions(method=Linear(), horiz_axis=axis, in_place=True))


def test_axis_length_mismatch_raises():
    data = _series(0.0, None, 10.0)
    with pytest.raises(ValueError):
        interpolate(data, InterpolateOptions(horiz_axis=[0.0, 1.0]))


def test_dataframe_axis_by_name_and_results_keys():
    x = Series("x", [0.0, 1.0, 4.0], dtype="float64")
    y = Series("y", [0.0, None, 10.0], dtype="float64")
    day = Series("day", [1, 2, 3], dtype="int64")
    df = DataFrame(x, y, day)
    result = interpolate(df, InterpolateOptions(method=Linear(), horiz_axis="x"))
    assert result == {1: {1: 2.5}, "y": {1: 2.5}}
    assert y.values == [0.0, None, 10.0]


def test_single_known_value_cannot_extrapolate():
    with pytest.raises(ValueError):
        interpolate(_series(None, 1.0, None), InterpolateOptions())


def test_non_float_series_rejected():
    with pytest.raises(TypeError):
        interpolate(Series("n", [1, None, 3], dtype="int64"), InterpolateOptions())


def test_unsupported_data_rejected():
    with pytest.raises(TypeError):
        interpolate([1.0, None, 3.0], InterpolateOptions())