"""Filling of missing values in float series and data frames."""