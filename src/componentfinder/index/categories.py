"""Group records into category summaries."""

from __future__ import annotations

from typing import Dict, List, Sequence

from componentfinder.models import CategorySummary, ComponentRecord
from componentfinder.utils.text import pluralize


def describe_category(name: str, count: int) -> str:
    return f"{count} {name.lower()} {pluralize('component', count)}"


def aggregate(records: Sequence[ComponentRecord]) -> List[CategorySummary]:
    """One summary per category, in the order categories first appear."""
    counts: Dict[str, int] = {}
    for record in records:
        counts[record.category] = counts.get(record.category, 0) + 1

    return [
        CategorySummary(name=name, count=count, description=describe_category(name, count))
        for name, count in counts.items()
    ]
