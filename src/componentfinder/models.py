"""Core ComponentFinder data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True, slots=True)
class FileItem:
    """A source file discovered by the crawler."""

    name: str
    path: str
    size: int
    download_url: str
    html_url: str


@dataclass(frozen=True, slots=True)
class ComponentRecord:
    """Structured representation of one component source file.

    ``tags`` and ``dependencies`` are stored sorted so every listing of a
    record is deterministic.
    """

    name: str
    category: str
    description: str
    tags: Tuple[str, ...]
    dependencies: Tuple[str, ...]
    code: str
    path: str
    size: int
    source_url: str

    def summary(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "category": self.category,
            "description": self.description,
            "tags": list(self.tags),
            "sourceUrl": self.source_url,
        }


@dataclass(frozen=True, slots=True)
class CacheSnapshot:
    """Complete cache state captured by one successful refresh."""

    records: Tuple[ComponentRecord, ...] = ()
    timestamp: float | None = None

    @property
    def is_empty(self) -> bool:
        return self.timestamp is None or not self.records


@dataclass(frozen=True, slots=True)
class SearchResult:
    record: ComponentRecord
    score: int
    matched_fields: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class CategorySummary:
    name: str
    count: int
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "count": self.count, "description": self.description}
