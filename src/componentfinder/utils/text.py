"""Small text helpers shared by the catalog, CLI and web layers."""

from __future__ import annotations

from typing import Iterable, List


def pluralize(word: str, count: int) -> str:
    return word if count == 1 else f"{word}s"


def format_size(size: int) -> str:
    """Render a byte count as kilobytes, ``Unknown`` when the size is missing."""
    if not size:
        return "Unknown"
    return f"{size / 1024:.2f} KB"


def name_suggestions(names: Iterable[str], query: str, *, limit: int = 5) -> List[str]:
    """Names containing ``query`` case-insensitively, in input order."""
    needle = query.strip().lower()
    if not needle:
        return []
    return [name for name in names if needle in name.lower()][:limit]
