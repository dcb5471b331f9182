"""Weighted substring search over component records."""

from __future__ import annotations

from typing import List, Sequence

from componentfinder.models import ComponentRecord, SearchResult

NAME_WEIGHT = 50
CATEGORY_WEIGHT = 30
TAG_WEIGHT = 20
DESCRIPTION_WEIGHT = 10
EXACT_NAME_BONUS = 30

DEFAULT_LIMIT = 10


def normalize_query(query: str) -> str:
    return query.strip().lower()


def score_record(record: ComponentRecord, query: str) -> SearchResult:
    """Sum every field weight that applies; ``query`` must already be normalized."""
    score = 0
    matched: List[str] = []
    name = record.name.lower()

    if query in name:
        score += NAME_WEIGHT
        matched.append("name")
    if query in record.category.lower():
        score += CATEGORY_WEIGHT
        matched.append("category")
    if any(query in tag.lower() for tag in record.tags):
        score += TAG_WEIGHT
        matched.append("tags")
    if query in record.description.lower():
        score += DESCRIPTION_WEIGHT
        matched.append("description")
    if name == query:
        score += EXACT_NAME_BONUS

    return SearchResult(record=record, score=score, matched_fields=tuple(matched))


class Searcher:
    """Ranks records against a free-text query."""

    def search(
        self, records: Sequence[ComponentRecord], query: str, *, limit: int = DEFAULT_LIMIT
    ) -> List[SearchResult]:
        normalized = normalize_query(query)
        if not normalized:
            return []

        scored = [score_record(record, normalized) for record in records]
        results = [result for result in scored if result.score > 0]
        # sorted() is stable, so equal scores keep crawl order.
        results = sorted(results, key=lambda result: result.score, reverse=True)
        return results[: max(limit, 0)]
