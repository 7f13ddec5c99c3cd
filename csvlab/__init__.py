"""Tools for generating, reading, filtering, validating and aggregating CSV files."""

__version__ = "0.1.0"