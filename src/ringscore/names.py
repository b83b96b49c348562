from __future__ import annotations

import re
from typing import Any

_APOSTROPHES_RE = re.compile(r"[‘’‚‛′'`]")
_WHITESPACE_RE = re.compile(r"\s+")
_NON_SLUG_RE = re.compile(r"[^a-z0-9-]")
_HYPHEN_RUN_RE = re.compile(r"-{2,}")


def text(value: Any) -> str:
    """Coerce a loosely typed record field to a stripped string."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value).strip()


def normalize_name(name: Any) -> str:
    """Free-text performer label -> slug ("Je'Von Evans" -> "jevon-evans")."""
    raw = text(name)
    if not raw:
        return ""
    cleaned = _APOSTROPHES_RE.sub("", raw).lower()
    cleaned = _WHITESPACE_RE.sub("-", cleaned)
    cleaned = _NON_SLUG_RE.sub("", cleaned)
    return _HYPHEN_RUN_RE.sub("-", cleaned).strip("-")


def names_match(a: Any, b: Any) -> bool:
    """Loose identity test used across match data: display names, slugs, or one inside the other."""
    x = text(a).lower()
    y = text(b).lower()
    if not x or not y:
        return False
    if x == y or x in y or y in x:
        return True
    x_slug = normalize_name(a)
    y_slug = normalize_name(b)
    if not x_slug or not y_slug:
        return False
    return x_slug == y_slug or x_slug in y_slug or y_slug in x_slug


def slugs_equal(a: Any, b: Any) -> bool:
    x = normalize_name(a)
    return bool(x) and x == normalize_name(b)
