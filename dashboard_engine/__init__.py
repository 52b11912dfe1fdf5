"""Tabular data analysis engine for a dataset exploration dashboard."""

__version__ = "0.1.0"
