"""Tool-facing operations over the cached component catalog.

Every method reads the records through :meth:`ComponentCache.get` and
returns JSON-ready dictionaries; transports (web, CLI) only render them.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from componentfinder.config import AppConfig
from componentfinder.errors import ComponentFinderError, NotFoundError, StartupFailure
from componentfinder.index.cache import ComponentCache
from componentfinder.index.categories import aggregate
from componentfinder.index.indexer import Indexer
from componentfinder.index.search import DEFAULT_LIMIT, Searcher, normalize_query
from componentfinder.ingestion.crawler import RepositoryCrawler
from componentfinder.ingestion.github import GitHubContentsClient
from componentfinder.models import ComponentRecord
from componentfinder.utils.text import format_size, name_suggestions

LOGGER = logging.getLogger(__name__)


def _find(records: tuple[ComponentRecord, ...], name: str) -> Optional[ComponentRecord]:
    wanted = name.strip().lower()
    for record in records:
        if record.name.lower() == wanted:
            return record
    return None


def _not_found(records: tuple[ComponentRecord, ...], name: str) -> NotFoundError:
    return NotFoundError(name, name_suggestions((r.name for r in records), name))


def _metadata(record: ComponentRecord) -> Dict[str, Any]:
    return {
        **record.summary(),
        "dependencies": list(record.dependencies),
        "path": record.path,
        "size": record.size,
    }


class ComponentCatalog:
    def __init__(
        self,
        cache: ComponentCache,
        config: AppConfig | None = None,
        *,
        source: GitHubContentsClient | None = None,
    ) -> None:
        self.cache = cache
        self.config = config or AppConfig()
        self.source = source
        self.searcher = Searcher()

    async def aclose(self) -> None:
        if self.source is not None:
            await self.source.aclose()

    async def _records(self) -> tuple[ComponentRecord, ...]:
        snapshot = await self.cache.get()
        return snapshot.records

    async def warm_up(self) -> int:
        """Load the first snapshot before serving; any failure is fatal."""
        try:
            snapshot = await self.cache.get()
        except ComponentFinderError as exc:
            raise StartupFailure(f"Unable to load components: {exc}") from exc
        return len(snapshot.records)

    async def list_components(
        self, category: str | None = None, limit: int | None = None
    ) -> Dict[str, Any]:
        records = list(await self._records())
        if category:
            wanted = category.strip().lower()
            records = [r for r in records if r.category.lower() == wanted]
        if limit is not None:
            records = records[: max(limit, 0)]
        return {"total": len(records), "components": [r.summary() for r in records]}

    async def search_components(self, query: str, limit: int = DEFAULT_LIMIT) -> Dict[str, Any]:
        normalized = normalize_query(query)
        if not normalized:
            raise ValueError("Please provide a search query")

        results = self.searcher.search(await self._records(), normalized, limit=limit)
        response: Dict[str, Any] = {
            "query": normalized,
            "total": len(results),
            "results": [
                {
                    **result.record.summary(),
                    "score": result.score,
                    "matchedFields": list(result.matched_fields),
                }
                for result in results
            ],
        }
        if not results:
            response["message"] = f'No components found matching "{normalized}"'
        return response

    async def get_component_code(self, name: str, include_metadata: bool = True) -> Dict[str, Any]:
        if not name.strip():
            raise ValueError("Please provide a component name")
        records = await self._records()
        record = _find(records, name)
        if record is None:
            raise _not_found(records, name)

        response: Dict[str, Any] = {"name": record.name, "code": record.code}
        if include_metadata:
            response.update(_metadata(record))
        return response

    async def get_components_by_category(self, category: str) -> Dict[str, Any]:
        if not category.strip():
            raise ValueError("Please provide a category name")
        records = await self._records()
        wanted = category.strip().lower()
        matches = [r for r in records if r.category.lower() == wanted]
        if not matches:
            known = [summary.name for summary in aggregate(records)]
            raise NotFoundError(category.strip(), known, what="Category")
        return {
            "category": matches[0].category,
            "total": len(matches),
            "components": [r.summary() for r in matches],
        }

    async def get_component_info(self, name: str) -> Dict[str, Any]:
        if not name.strip():
            raise ValueError("Please provide a component name")
        records = await self._records()
        record = _find(records, name)
        if record is None:
            raise _not_found(records, name)
        return {
            **_metadata(record),
            "demoUrl": None,
            "sizeFormatted": format_size(record.size),
        }

    async def list_categories(self) -> Dict[str, Any]:
        summaries = aggregate(await self._records())
        return {"total": len(summaries), "categories": [s.to_dict() for s in summaries]}

    async def refresh(self) -> Dict[str, Any]:
        snapshot = await self.cache.get(force_refresh=True)
        LOGGER.info("Refreshed catalog with %d components", len(snapshot.records))
        return {"status": "ok", "count": len(snapshot.records)}


def build_catalog(config: AppConfig, client: httpx.AsyncClient | None = None) -> ComponentCatalog:
    """Wire the GitHub client, crawler, indexer and cache for ``config``."""
    contents = GitHubContentsClient(config, client=client)
    indexer = Indexer(
        RepositoryCrawler(contents, max_concurrency=config.max_concurrency),
        contents,
        search_paths=config.search_paths,
        max_concurrency=config.max_concurrency,
        library=config.library_name,
    )
    cache = ComponentCache(indexer.build, ttl=config.cache_ttl)
    return ComponentCatalog(cache, config, source=contents)

