import json
from typing import Any


def to_json(obj: Any, *, indent: int = 2) -> str:
    """Serialize *obj* to a pretty-printed JSON string."""
    if hasattr(obj, "to_dict"):
        obj = obj.to_dict()
    return json.dumps(obj, default=str, indent=indent, ensure_ascii=False)
