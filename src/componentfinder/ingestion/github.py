"""Thin async client over the GitHub contents API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List

import httpx

from componentfinder.config import AppConfig
from componentfinder.errors import TransientFetchError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ContentEntry:
    """One entry of a directory listing."""

    name: str
    path: str
    type: str
    size: int
    download_url: str | None
    html_url: str

    @property
    def is_dir(self) -> bool:
        return self.type == "dir"

    @property
    def is_file(self) -> bool:
        return self.type == "file"

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "ContentEntry":
        return cls(
            name=str(data.get("name", "")),
            path=str(data.get("path", "")),
            type=str(data.get("type", "")),
            size=int(data.get("size") or 0),
            download_url=data.get("download_url"),
            html_url=str(data.get("html_url") or ""),
        )


class GitHubContentsClient:
    """Lists repository directories and downloads raw files.

    Every failure is reported as :class:`TransientFetchError` so the crawler
    can drop the affected subtree and keep going.
    """

    def __init__(self, config: AppConfig, *, client: httpx.AsyncClient | None = None) -> None:
        self.config = config
        self._client = client or httpx.AsyncClient(
            timeout=config.request_timeout, follow_redirects=True
        )
        self._owns_client = client is None

    def _headers(self, accept: str | None = None) -> dict[str, str]:
        headers: dict[str, str] = {}
        if accept:
            headers["Accept"] = accept
        if self.config.github_token:
            headers["Authorization"] = f"token {self.config.github_token}"
        return headers

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "GitHubContentsClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def list_directory(self, path: str) -> List[ContentEntry]:
        url = f"{self.config.api_base.rstrip('/')}/repos/{self.config.repository}/contents/{path}"
        response = await self._get(url, path, accept="application/vnd.github.v3+json")
        try:
            payload = response.json()
        except ValueError as exc:
            raise TransientFetchError(path, "listing is not valid JSON") from exc
        if not isinstance(payload, list):
            raise TransientFetchError(path, "path is not a directory")
        return [ContentEntry.from_api(item) for item in payload if isinstance(item, dict)]

    async def fetch_raw(self, url: str) -> str:
        response = await self._get(url, url)
        return response.text

    async def _get(self, url: str, label: str, *, accept: str | None = None) -> httpx.Response:
        try:
            response = await self._client.get(
                url,
                headers=self._headers(accept),
                timeout=self.config.request_timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status in (403, 429):
                LOGGER.warning("GitHub rate limit hit while fetching %s", label)
            raise TransientFetchError(label, f"HTTP {status}") from exc
        except httpx.TimeoutException as exc:
            raise TransientFetchError(label, "request timed out") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransientFetchError(label, str(exc) or type(exc).__name__) from exc
        return response
