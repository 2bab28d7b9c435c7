"""Column-oriented data frames with row operations, text tables, CSV/JSON Lines export,
interpolation and time-series forecasting."""

__version__ = "0.1.0"