from typing import Any, Dict, Mapping, Sequence

from tabulate import tabulate

DEFAULT_COLUMNS = ("type", "title", "author", "duration", "views", "url")


def flatten_item(item: Mapping[str, Any]) -> Dict[str, Any]:
    """Reduce an item to scalar columns (``author`` and ``owner`` by name)."""
    flat: Dict[str, Any] = {}
    for key, value in item.items():
        if key in ("thumbnails", "best_thumbnail"):
            continue
        if isinstance(value, Mapping):
            value = value.get("name")
        flat[key] = value
    if "title" not in flat and "name" in flat:
        flat["title"] = flat["name"]
    if "author" not in flat and "owner" in flat:
        flat["author"] = flat["owner"]
    return flat


def to_table(
    rows: Sequence[Mapping[str, Any]], *, headers: Sequence[str] = DEFAULT_COLUMNS
) -> str:
    """Render result items as an ASCII table using ``tabulate``."""
    table = [[flatten_item(row).get(column, "") for column in headers] for row in rows]
    return tabulate(table, headers=list(headers), tablefmt="github")
