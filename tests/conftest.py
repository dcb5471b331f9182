"""Shared fixtures: an in-memory GitHub contents API served through httpx.MockTransport."""

from __future__ import annotations

from typing import Any, Dict, List

import httpx
import pytest

from componentfinder.config import AppConfig
from componentfinder.models import ComponentRecord

REPOSITORY = "owner/repo"
CONTENTS_PREFIX = f"/repos/{REPOSITORY}/contents/"
RAW_HOST = "raw.example.com"
MOVED_PREFIX = "/repos/old/repo/contents/"


class FakeRepository:
    """Directory tree + file contents answering like the GitHub contents API."""

    def __init__(self) -> None:
        self.listings: Dict[str, List[Dict[str, Any]]] = {"": []}
        self.files: Dict[str, str] = {}
        self.failing: set[str] = set()
        self.corrupt: set[str] = set()
        self.requests: List[str] = []

    def _ensure_dir(self, path: str) -> None:
        if path in self.listings:
            return
        parent, _, name = path.rpartition("/")
        self._ensure_dir(parent)
        self.listings[path] = []
        self.listings[parent].append(
            {
                "name": name,
                "path": path,
                "type": "dir",
                "size": 0,
                "download_url": None,
                "html_url": f"https://github.com/{REPOSITORY}/tree/main/{path}",
            }
        )

    def add_file(self, path: str, content: str = "", *, size: int | None = None) -> None:
        parent, _, name = path.rpartition("/")
        self._ensure_dir(parent)
        self.listings[parent].append(
            {
                "name": name,
                "path": path,
                "type": "file",
                "size": len(content.encode()) if size is None else size,
                "download_url": f"https://{RAW_HOST}/{path}",
                "html_url": f"https://github.com/{REPOSITORY}/blob/main/{path}",
            }
        )
        self.files[path] = content

    def fail(self, path: str) -> None:
        self.failing.add(path)

    def break_body(self, path: str) -> None:
        self.corrupt.add(path)

    def listing_requests(self) -> List[str]:
        return [r for r in self.requests if r.startswith(CONTENTS_PREFIX)]

    def handler(self, request: httpx.Request) -> httpx.Response:
        url_path = request.url.path
        self.requests.append(url_path)

        if url_path.startswith(MOVED_PREFIX):
            moved = request.url.copy_with(path=CONTENTS_PREFIX + url_path[len(MOVED_PREFIX):])
            return httpx.Response(301, headers={"Location": str(moved)})

        if request.url.host == RAW_HOST:
            path = url_path.lstrip("/")
            if path in self.failing or path not in self.files:
                return httpx.Response(500 if path in self.failing else 404)
            return httpx.Response(200, text=self.files[path])

        if url_path.startswith(CONTENTS_PREFIX):
            path = url_path[len(CONTENTS_PREFIX):].strip("/")
            if path in self.corrupt:
                raise httpx.DecodingError("bad gzip", request=request)
            if path in self.failing:
                return httpx.Response(403, json={"message": "API rate limit exceeded"})
            if path not in self.listings:
                return httpx.Response(404, json={"message": "Not Found"})
            return httpx.Response(200, json=self.listings[path])

        return httpx.Response(404)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=httpx.MockTransport(self.handler), follow_redirects=True
        )


@pytest.fixture
def fake_repo() -> FakeRepository:
    return FakeRepository()


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(
        repository=REPOSITORY,
        search_paths=("registry/new-york", "src/components"),
        max_concurrency=4,
        request_timeout=2.0,
    )


def make_record(name: str, **overrides: Any) -> ComponentRecord:
    values: Dict[str, Any] = {
        "name": name,
        "category": "Components",
        "description": f"{name} component from VengeanceUI",
        "tags": (),
        "dependencies": (),
        "code": f"export function {name}() {{ return null }}",
        "path": f"src/components/{name}.tsx",
        "size": 2048,
        "source_url": f"https://github.com/{REPOSITORY}/blob/main/src/components/{name}.tsx",
    }
    values.update(overrides)
    return ComponentRecord(**values)
