# ABOUTME: Safe traversal helpers for destructuring raw API responses
# ABOUTME: Nested optional lookup, first-value selection, and filename namespace stripping

import re
from collections.abc import Callable, Mapping, Sequence
from typing import Any

PathStep = str | int | Callable[[Any], Any]


def get_path(obj: Any, *path: PathStep) -> Any:
    """Walk ``path`` into ``obj`` and return what is there, or None if any step is absent.

    A step is a mapping key, a sequence index, or a callable applied to the
    current value (e.g. ``first_value``).

    >>> get_path({"query": {"pages": {"12": {"title": "Batman"}}}}, "query", "pages", first_value, "title")
    'Batman'
    >>> get_path({"query": {}}, "query", "pages", "12") is None
    True
    """
    current = obj
    for step in path:
        if current is None:
            return None
        if callable(step):
            current = step(current)
        elif isinstance(current, Mapping):
            current = current.get(step)
        elif isinstance(current, Sequence) and not isinstance(current, str) and isinstance(step, int):
            current = current[step] if -len(current) <= step < len(current) else None
        else:
            return None
    return current


def first_value(obj: Any) -> Any:
    """First value of a mapping (insertion order) or first element of a sequence."""
    if isinstance(obj, Mapping):
        return next(iter(obj.values()), None)
    if isinstance(obj, Sequence) and not isinstance(obj, str):
        return obj[0] if obj else None
    return None


def bare_filename(name: str | Sequence[str] | None) -> str | None:
    """Strip a leading namespace prefix: ``File:Batman.png`` -> ``Batman.png``.

    A sequence contributes its first element. Empty input yields None.
    """
    if isinstance(name, Sequence) and not isinstance(name, str):
        name = name[0] if name else None
    if not name:
        return None
    if ":" in name:
        return name.split(":", 1)[1]
    return name


def normalize_title(title: str) -> str:
    """Replace each whitespace character with an underscore, the form some wikis use in file titles."""
    return re.sub(r"\s", "_", title)
