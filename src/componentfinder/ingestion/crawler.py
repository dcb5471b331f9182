"""Recursive crawler over the remote repository tree."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Protocol, Sequence

from componentfinder.errors import TransientFetchError
from componentfinder.ingestion.github import ContentEntry
from componentfinder.models import FileItem

LOGGER = logging.getLogger(__name__)

SOURCE_EXTENSIONS = (".tsx", ".ts", ".jsx", ".js")
EXCLUDED_MARKERS = (".test.", ".spec.", ".stories.")
PRIVATE_PREFIX = "_"


class DirectoryLister(Protocol):
    async def list_directory(self, path: str) -> List[ContentEntry]: ...


def is_component_file(name: str) -> bool:
    """Return True for source files that are not tests, stories or private modules."""
    if not name.endswith(SOURCE_EXTENSIONS):
        return False
    if any(marker in name for marker in EXCLUDED_MARKERS):
        return False
    return not name.startswith(PRIVATE_PREFIX)


@dataclass(slots=True)
class CrawlResult:
    items: List[FileItem] = field(default_factory=list)
    failed_paths: List[str] = field(default_factory=list)
    listed: int = 0

    @property
    def unreachable(self) -> bool:
        """True when not a single directory could be listed."""
        return self.listed == 0 and bool(self.failed_paths)


class RepositoryCrawler:
    """Walks directories depth-first and yields component files in listing order.

    Sibling directories are listed concurrently, bounded by ``max_concurrency``.
    A failed listing contributes no items; it never aborts the crawl.
    """

    def __init__(self, lister: DirectoryLister, *, max_concurrency: int = 8) -> None:
        self.lister = lister
        self.max_concurrency = max_concurrency

    async def crawl(self, roots: Sequence[str]) -> CrawlResult:
        result = CrawlResult()
        semaphore = asyncio.Semaphore(self.max_concurrency)

        for root in roots:
            result.items.extend(await self._walk(root, semaphore, result))

        if not result.items:
            LOGGER.info("No components under %s, scanning repository root", ", ".join(roots))
            result.items.extend(await self._walk("", semaphore, result))

        result.items = list(_dedupe(result.items))
        return result

    async def _walk(
        self, path: str, semaphore: asyncio.Semaphore, result: CrawlResult
    ) -> List[FileItem]:
        try:
            async with semaphore:
                entries = await self.lister.list_directory(path)
        except TransientFetchError as exc:
            LOGGER.warning("Failed to list %s: %s", path or "/", exc)
            result.failed_paths.append(path)
            return []
        result.listed += 1

        # Subdirectories are fetched concurrently but spliced back in listing order.
        subtrees = await asyncio.gather(
            *(self._walk(entry.path, semaphore, result) for entry in entries if entry.is_dir)
        )
        pending = iter(subtrees)

        items: List[FileItem] = []
        for entry in entries:
            if entry.is_dir:
                items.extend(next(pending))
            elif entry.is_file and entry.download_url and is_component_file(entry.name):
                items.append(
                    FileItem(
                        name=entry.name,
                        path=entry.path,
                        size=entry.size,
                        download_url=entry.download_url,
                        html_url=entry.html_url,
                    )
                )
        return items


def _dedupe(items: Iterable[FileItem]) -> Iterable[FileItem]:
    seen: set[str] = set()
    for item in items:
        if item.path in seen:
            continue
        seen.add(item.path)
        yield item
