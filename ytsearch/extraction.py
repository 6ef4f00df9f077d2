"""Helpers to pull JSON values and text fragments out of HTML pages.

The search page embeds its state as a JavaScript assignment inside a
``<script>`` tag, with no declared length. ``cut_after_json`` finds where that
value ends by matching brackets while skipping over string literals.
"""

from __future__ import annotations

import json
import re
from typing import Any, Optional

from ytsearch.exceptions import UnsupportedRoot, UnterminatedStructure

_BRACKETS = {"[": "]", "{": "}"}


def cut_after_json(mixed_json: str) -> str:
    """Return the balanced JSON array or object at the start of *mixed_json*.

    Leading whitespace is skipped. Brackets inside string literals, including
    escaped quotes and backslashes, are not counted.

    Parameters:
        mixed_json: Text starting with a JSON value followed by anything.

    Returns:
        The text span of the JSON value, ready for ``json.loads``.

    Raises:
        UnsupportedRoot: if the value does not start with ``[`` or ``{``.
        UnterminatedStructure: if the text ends before the value is closed.
    """
    text = mixed_json.lstrip()
    first = text[:1]
    if first not in _BRACKETS:
        raise UnsupportedRoot(first)
    open_char, close_char = first, _BRACKETS[first]

    in_string = False
    escaped = False
    depth = 0

    for index, char in enumerate(text):
        if char == '"' and not escaped:
            in_string = not in_string
            continue

        # a backslash escapes exactly the next character
        escaped = char == "\\" and not escaped

        if in_string:
            continue

        if char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1

        if depth == 0:
            return text[: index + 1]

    raise UnterminatedStructure()


def json_after(haystack: str, left: str) -> Optional[Any]:
    """Parse the JSON value that directly follows *left* in *haystack*.

    Returns:
        The decoded value, or ``None`` when *left* does not occur.

    Raises:
        ExtractionError: if no balanced value follows the anchor.
        json.JSONDecodeError: if the balanced span is not valid JSON.
    """
    pos = haystack.find(left)
    if pos == -1:
        return None
    return json.loads(cut_after_json(haystack[pos + len(left) :]))


def between(haystack: str, left: str, right: str) -> str:
    """Return the text strictly between *left* and the next *right*.

    An empty string is returned when either delimiter is missing.
    """
    start = haystack.find(left)
    if start == -1:
        return ""
    start += len(left)
    end = haystack.find(right, start)
    if end == -1:
        return ""
    return haystack[start:end]


def parse_text(txt: Any, default: Optional[str] = None) -> Optional[str]:
    """Render a ``simpleText`` or ``runs`` text node to a plain string."""
    if not isinstance(txt, dict):
        return default
    if txt.get("simpleText"):
        return txt["simpleText"]
    runs = txt.get("runs")
    if isinstance(runs, list):
        return "".join(run.get("text", "") for run in runs)
    return default


def parse_integer_from_text(txt: Any) -> int:
    """Return the digits of a text node as an integer, ``0`` if there are none."""
    digits = re.sub(r"\D+", "", parse_text(txt, "") or "")
    return int(digits) if digits else 0
