"""FastAPI application exposing the component catalog tools."""

from __future__ import annotations

import logging
from typing import Any, Awaitable

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from componentfinder.catalog import ComponentCatalog, build_catalog
from componentfinder.config import AppConfig
from componentfinder.errors import NotFoundError, RefreshFailure

LOGGER = logging.getLogger(__name__)

MAX_LIMIT = 50

app = FastAPI(title="ComponentFinder", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

_catalog: ComponentCatalog | None = None


class SearchPayload(BaseModel):
    query: str
    limit: int = 10


class CodeRequest(BaseModel):
    component_name: str
    include_metadata: bool = True


def get_catalog() -> ComponentCatalog:
    global _catalog
    if _catalog is None:
        _catalog = build_catalog(AppConfig.from_env())
    return _catalog


def _clamp(limit: int) -> int:
    return max(1, min(limit, MAX_LIMIT))


async def _call(operation: Awaitable[dict[str, Any]]) -> dict[str, Any]:
    try:
        return await operation
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except NotFoundError as exc:
        raise HTTPException(
            status_code=404,
            detail={"message": str(exc), "suggestions": exc.suggestions},
        ) from exc
    except RefreshFailure as exc:
        LOGGER.error("Catalog refresh failed: %s", exc)
        raise HTTPException(status_code=503, detail=f"Component source unavailable: {exc}") from exc


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    count = await get_catalog().warm_up()
    LOGGER.info("Serving %d components", count)


@app.on_event("shutdown")
async def shutdown_event() -> None:
    if _catalog is not None:
        await _catalog.aclose()


@app.get("/components")
async def list_components(
    category: str | None = None,
    limit: int | None = None,
    catalog: ComponentCatalog = Depends(get_catalog),
) -> dict[str, Any]:
    if limit is not None:
        limit = _clamp(limit)
    return await _call(catalog.list_components(category=category, limit=limit))


@app.post("/search")
async def search_components(
    payload: SearchPayload, catalog: ComponentCatalog = Depends(get_catalog)
) -> dict[str, Any]:
    if not payload.query.strip():
        raise HTTPException(status_code=400, detail="Empty query")
    return await _call(catalog.search_components(payload.query, limit=_clamp(payload.limit)))


@app.post("/components/code")
async def get_component_code(
    payload: CodeRequest, catalog: ComponentCatalog = Depends(get_catalog)
) -> dict[str, Any]:
    return await _call(
        catalog.get_component_code(payload.component_name, include_metadata=payload.include_metadata)
    )


@app.get("/components/{name}")
async def get_component_info(
    name: str, catalog: ComponentCatalog = Depends(get_catalog)
) -> dict[str, Any]:
    return await _call(catalog.get_component_info(name))


@app.get("/categories")
async def list_categories(catalog: ComponentCatalog = Depends(get_catalog)) -> dict[str, Any]:
    return await _call(catalog.list_categories())


@app.get("/categories/{category}")
async def get_components_by_category(
    category: str, catalog: ComponentCatalog = Depends(get_catalog)
) -> dict[str, Any]:
    return await _call(catalog.get_components_by_category(category))


@app.post("/refresh")
async def refresh_cache(catalog: ComponentCatalog = Depends(get_catalog)) -> dict[str, Any]:
    return await _call(catalog.refresh())
