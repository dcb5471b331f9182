"""Component indexing pipeline."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Protocol, Sequence

from componentfinder.errors import RefreshFailure, TransientFetchError
from componentfinder.ingestion.crawler import RepositoryCrawler
from componentfinder.ingestion.extractor import DEFAULT_LIBRARY, extract
from componentfinder.models import ComponentRecord, FileItem

LOGGER = logging.getLogger(__name__)


class RawFetcher(Protocol):
    async def fetch_raw(self, url: str) -> str: ...


@dataclass(slots=True)
class IndexStats:
    loaded: int = 0
    skipped: int = 0
    failed: int = 0
    failed_paths: list[str] = field(default_factory=list)

    def increment(self, status: str, path: str) -> None:
        if status == "loaded":
            self.loaded += 1
        elif status == "skipped":
            self.skipped += 1
        else:
            self.failed += 1
            self.failed_paths.append(path)


class Indexer:
    """Coordinates crawling, downloading and metadata extraction."""

    def __init__(
        self,
        crawler: RepositoryCrawler,
        fetcher: RawFetcher,
        *,
        search_paths: Sequence[str],
        max_concurrency: int = 8,
        library: str = DEFAULT_LIBRARY,
    ) -> None:
        self.crawler = crawler
        self.fetcher = fetcher
        self.search_paths = tuple(search_paths)
        self.max_concurrency = max_concurrency
        self.library = library
        self.last_stats = IndexStats()

    async def build(self) -> List[ComponentRecord]:
        """Crawl the repository and return records in crawl order.

        Raises :class:`RefreshFailure` when nothing could be listed at all.
        """
        crawl = await self.crawler.crawl(self.search_paths)
        stats = IndexStats()
        stats.failed_paths.extend(crawl.failed_paths)

        if crawl.unreachable:
            self.last_stats = stats
            raise RefreshFailure(
                f"Repository unreachable: {len(crawl.failed_paths)} listing(s) failed"
            )

        semaphore = asyncio.Semaphore(self.max_concurrency)
        fetched = await asyncio.gather(*(self._load(item, semaphore) for item in crawl.items))

        records: List[ComponentRecord] = []
        seen_names: set[str] = set()
        for item, record in zip(crawl.items, fetched):
            if record is None:
                stats.increment("failed", item.path)
            elif record.name in seen_names:
                LOGGER.debug("Skipping %s, component %s already loaded", item.path, record.name)
                stats.increment("skipped", item.path)
            else:
                seen_names.add(record.name)
                records.append(record)
                stats.increment("loaded", item.path)

        self.last_stats = stats
        LOGGER.info(
            "Indexed %d components (skipped: %d, failed: %d)",
            stats.loaded,
            stats.skipped,
            stats.failed,
        )
        return records

    async def _load(self, item: FileItem, semaphore: asyncio.Semaphore) -> ComponentRecord | None:
        try:
            async with semaphore:
                code = await self.fetcher.fetch_raw(item.download_url)
        except TransientFetchError as exc:
            LOGGER.warning("Failed to load component %s: %s", item.name, exc)
            return None
        return extract(item, code, library=self.library)
