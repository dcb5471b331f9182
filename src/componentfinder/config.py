"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

DEFAULT_REPOSITORY = "Ashutoshx7/VengeanceUI"
DEFAULT_SEARCH_PATHS = ("registry/new-york", "src/components")


def _read_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def _read_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(slots=True)
class AppConfig:
    repository: str = DEFAULT_REPOSITORY
    library_name: str = "VengeanceUI"
    api_base: str = "https://api.github.com"
    search_paths: tuple[str, ...] = DEFAULT_SEARCH_PATHS
    github_token: str | None = None
    cache_ttl: float = 300.0
    max_concurrency: int = 8
    request_timeout: float = 15.0

    def __post_init__(self) -> None:
        if self.max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.search_paths = tuple(self.search_paths)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AppConfig":
        """Build a config from ``GITHUB_TOKEN`` and ``COMPONENTFINDER_*`` variables."""
        env = os.environ if environ is None else environ
        defaults = cls()

        paths = env.get("COMPONENTFINDER_SEARCH_PATHS")
        search_paths = (
            tuple(p.strip() for p in paths.split(",") if p.strip())
            if paths
            else defaults.search_paths
        )

        return cls(
            repository=env.get("COMPONENTFINDER_REPOSITORY") or defaults.repository,
            search_paths=search_paths,
            github_token=env.get("GITHUB_TOKEN") or None,
            cache_ttl=_read_float(env, "COMPONENTFINDER_CACHE_TTL", defaults.cache_ttl),
            max_concurrency=_read_int(
                env, "COMPONENTFINDER_MAX_CONCURRENCY", defaults.max_concurrency
            ),
            request_timeout=_read_float(env, "COMPONENTFINDER_TIMEOUT", defaults.request_timeout),
        )
