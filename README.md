# gridframe

A small library with no dependencies for tabular data held as named columns.
It also has tools for filling gaps in numeric series and for forecasting them.

## Modules

- **`gridframe.dataframe`**
  - `Series` is a named column. Its type (`float64`, `int64`, `string`, `time` or `mixed`) is inferred from its values, and `None` marks a missing value.
  - `DataFrame` groups series of equal length and unique names. It offers `insert`, `prepend`, `append`, `update`, `update_row`, `clear_row`, `remove`, `swap`, `names`, `name_to_column`, `reorder_columns`, `add_series`, `remove_series`, `copy` and `is_equal`.
  - `values()` iterates over rows. It yields `(row, values)` pairs, keyed by column index, by column name, or both, as chosen with `SeriesReturn`.
  - `table()` renders the frame as a bordered text table. `str(df)` shows the first and last three rows of larger frames.
  - A frame or series can be locked with `with df:` or with `lock()`/`unlock()`.
- **`gridframe.ops`**
  - `apply(sdf, fn, in_place=False)` maps a function over every row of a `Series` or `DataFrame`.
  - `filter_rows(sdf, fn, in_place=False)` keeps or drops rows according to the `FilterAction` that `fn` returns.
  - Without `in_place`, both return a new object and leave the input unchanged.
- **`gridframe.exports`**
  - `export_to_csv` writes a frame, or a range of its rows, as CSV. Missing values are written as `"NaN"` unless `null_string` is given. `separator` and `use_crlf` are configurable.
  - `export_to_jsonl` writes one JSON object per row, with keys in sorted order. Missing values are written as `null`, or as `null_string` when it is given. HTML characters are escaped unless `escape_html=False`.
- **`gridframe.table`**: `render_table(headers, rows, footers)` is the table renderer behind `DataFrame.table()`.
- **`gridframe.errors`**
  - Error types: `NoRowsError`, `RowError` and `ErrorCollection`.
  - `ErrorCollection` offers `add_error`, `is_nil`, `contains` and `find`.
  - Helpers: `b`, `is_valid_float64` and `bool_value_formatter`.
- **`gridframe.forecast.interpolation.core`**
  - `interpolate(data, options)` fills missing values in a `float64` series, or in every `float64` column of a frame.
  - With `in_place` the data is modified. Otherwise a dict of `row -> filled value` is returned. For a frame, that dict is keyed by both column index and column name.
- **`gridframe.forecast.interpolation.methods`**
  - Methods: `ForwardFill`, `BackwardFill`, `Linear`, `Spline` (cubic, order 3) and `Lagrange` (never extrapolates).
  - `InterpolateOptions` takes:
    - `limit`
    - `fill_direction`, a `FillDirection` value
    - `fill_region`, a `FillRegion` value
    - `start` and `end`
    - `horiz_axis`: a series, or a sequence of numbers or datetimes. For a frame it may also be a column index or name.
  - The fitters `CubicSpline` and `LagrangePolynomial` can also be used on their own.
- **`gridframe.forecast.ses`**: `SimpleExpSmoothing` implements simple exponential smoothing and is configured with `ExponentialSmoothingConfig`.
- **`gridframe.forecast.hw`**: `HoltWinters` implements Holt-Winters forecasting. It is configured with `HoltWintersConfig`, and the seasonal method is chosen with `SeasonalMethod.ADDITIVE` or `SeasonalMethod.MULTIPLICATIVE`.
- **`gridframe.forecast.evaluation`**
  - Error measures: `mean_absolute_error`, `mean_absolute_percentage_error`, `root_mean_squared_error` and `sum_of_squared_errors`.
  - Each returns `(error, count)`.
- **`gridframe.forecast.confidence`**
  - `ConfidenceInterval` holds one prediction interval.
  - `confidence_level_to_z` converts a confidence level to a z value.
  - Interval helpers: mean, naïve, seasonal naïve and drift.
- **`gridframe.forecast.base`**
  - `ForecastingAlgorithm` is the abstract base that both forecasting algorithms implement.
  - `forecast()` is a driver that calls configure, load, predict and evaluate in turn.
  - Error types: `InsufficientDataPointsError`, `MismatchLengthError` and `IndeterminateError`, all subclasses of `ForecastError`.
  - `EvaluationOptions(skip_invalids=...)` controls how the evaluation functions treat NaN and infinite values.

## Installation

```
pip install gridframe
```

## A short tour

```python
import io

from gridframe.dataframe import DataFrame, Series
from gridframe.exports import export_to_csv
from gridframe.forecast.evaluation import root_mean_squared_error
from gridframe.forecast.interpolation.core import interpolate
from gridframe.forecast.interpolation.methods import InterpolateOptions, Linear
from gridframe.forecast.ses import ExponentialSmoothingConfig, SimpleExpSmoothing

df = DataFrame(
    Series("day", [1, 2, 3]),
    Series("sales", [50.3, 23.4, 56.2]),
)
df.append(9, 123.6)
df.append({"day": 10, "sales": None})
print(df.table())

out = io.StringIO()
export_to_csv(out, df)
print(out.getvalue())

gaps = Series("v", [1.0, None, 3.0])
print(interpolate(gaps, InterpolateOptions(method=Linear())))  # {1: 2.0}

model = SimpleExpSmoothing()
model.configure(ExponentialSmoothingConfig(alpha=0.1))
model.load([71, 70, 69, 68, 64, 65, 72, 78, 75, 75, 75, 70], end=9)
predictions, intervals = model.predict(5)
print(predictions)
print(model.evaluate(predictions, root_mean_squared_error))
```

`load(values, start, end)` trains on rows `start..end`, with both ends included. `evaluate` then compares the predictions with the loaded values that follow the training range.

## Errors

Failures are raised as exceptions. Some examples:

- Mismatched series lengths or argument counts raise `ValueError`.
- Unknown column names raise `KeyError`.
- Rows out of range raise `IndexError`.
- Empty data raises `NoRowsError`.

## What it does not do

The package does not:

- read data in: there are no CSV, JSON or database importers;
- export to formats other than CSV and JSON Lines;
- sort frames;
- fill frames with random data;
- provide a command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```