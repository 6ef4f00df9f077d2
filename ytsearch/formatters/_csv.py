import csv
import io
from typing import Any, Mapping, Sequence

from ._table import flatten_item


def to_csv(rows: Sequence[Mapping[str, Any]]) -> str:
    """Convert result items to CSV text, one column per flattened field."""
    if not rows:
        return ""
    flat = [flatten_item(row) for row in rows]
    fieldnames = list(dict.fromkeys(key for row in flat for key in row))
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=fieldnames)
    writer.writeheader()
    writer.writerows(flat)
    return output.getvalue()
