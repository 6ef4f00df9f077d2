"""Render search results as JSON, CSV or a text table."""

from ._csv import to_csv
from ._json import to_json
from ._table import to_table

__all__ = ["to_csv", "to_json", "to_table"]
