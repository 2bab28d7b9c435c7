"""Forecasting algorithms (simple exponential smoothing, Holt-Winters), confidence
intervals, evaluation measures and interpolation."""