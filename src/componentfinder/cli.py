"""Command line interface for ComponentFinder."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

import httpx
import typer
from rich.console import Console
from rich.table import Table

from componentfinder.catalog import ComponentCatalog, build_catalog
from componentfinder.config import AppConfig
from componentfinder.errors import ComponentFinderError, NotFoundError

console = Console()
app = typer.Typer(help="ComponentFinder - browse and search UI components from a GitHub repository")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _config(repository: Optional[str]) -> AppConfig:
    config = AppConfig.from_env()
    if repository:
        config.repository = repository
    return config


def _run(
    config: AppConfig, operation: Callable[[ComponentCatalog], Awaitable[dict[str, Any]]]
) -> dict[str, Any]:
    async def runner() -> dict[str, Any]:
        async with httpx.AsyncClient(
            timeout=config.request_timeout, follow_redirects=True
        ) as client:
            catalog = build_catalog(config, client=client)
            return await operation(catalog)

    try:
        return asyncio.run(runner())
    except NotFoundError as exc:
        console.print(f"[yellow]{exc}.[/yellow]")
        if exc.suggestions:
            console.print("Did you mean:")
            for suggestion in exc.suggestions:
                console.print(f"  - {suggestion}")
        raise typer.Exit(code=1)
    except ComponentFinderError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)


def _component_table(components: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Description")
    table.add_column("Tags")
    for component in components:
        table.add_row(
            component["name"],
            component["category"],
            component["description"][:120],
            ", ".join(component["tags"]),
        )
    return table


@app.command("list")
def list_components(
    category: Optional[str] = typer.Option(None, help="Only show this category"),
    limit: Optional[int] = typer.Option(None, help="Maximum number of components"),
    repository: Optional[str] = typer.Option(None, help="GitHub repository (owner/name)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """List available components."""
    _setup_logging(verbose)
    data = _run(
        _config(repository),
        lambda catalog: catalog.list_components(category=category, limit=limit),
    )
    if not data["components"]:
        console.print("[yellow]No components found.[/yellow]")
        return
    console.print(_component_table(data["components"]))
    console.print(f"Total: {data['total']}")


@app.command()
def search(
    query: str = typer.Argument(..., help="Search term"),
    limit: int = typer.Option(10, help="Number of results to display"),
    repository: Optional[str] = typer.Option(None, help="GitHub repository (owner/name)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search components by name, category, tags and description."""
    _setup_logging(verbose)
    if not query.strip():
        raise typer.BadParameter("Please provide a search query")

    data = _run(_config(repository), lambda catalog: catalog.search_components(query, limit=limit))
    if not data["results"]:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Score")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Matched")
    for result in data["results"]:
        table.add_row(
            str(result["score"]),
            result["name"],
            result["category"],
            ", ".join(result["matchedFields"]),
        )
    console.print(table)


@app.command()
def show(
    name: str = typer.Argument(..., help="Component name"),
    metadata: bool = typer.Option(True, "--metadata/--no-metadata", help="Include metadata"),
    repository: Optional[str] = typer.Option(None, help="GitHub repository (owner/name)"),
) -> None:
    """Print the source code of a component."""
    data = _run(
        _config(repository),
        lambda catalog: catalog.get_component_code(name, include_metadata=metadata),
    )
    console.print(f"[bold]{data['name']}[/bold]")
    if metadata:
        console.print(f"Category: {data['category']}")
        console.print(f"Description: {data['description']}")
        console.print(f"Tags: {', '.join(data['tags']) or 'None'}")
        console.print(f"Dependencies: {', '.join(data['dependencies']) or 'None'}")
        console.print(f"Source: {data['sourceUrl']}")
    console.print(data["code"], markup=False, highlight=False)


@app.command()
def info(
    name: str = typer.Argument(..., help="Component name"),
    repository: Optional[str] = typer.Option(None, help="GitHub repository (owner/name)"),
) -> None:
    """Show component metadata."""
    data = _run(_config(repository), lambda catalog: catalog.get_component_info(name))
    table = Table(show_header=False)
    for key in ("name", "category", "description", "path", "sizeFormatted", "sourceUrl"):
        table.add_row(key, str(data[key]))
    table.add_row("tags", ", ".join(data["tags"]))
    table.add_row("dependencies", ", ".join(data["dependencies"]))
    console.print(table)


@app.command()
def categories(
    repository: Optional[str] = typer.Option(None, help="GitHub repository (owner/name)"),
) -> None:
    """List component categories with counts."""
    data = _run(_config(repository), lambda catalog: catalog.list_categories())
    if not data["categories"]:
        console.print("[yellow]No categories found.[/yellow]")
        return
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Category")
    table.add_column("Count")
    table.add_column("Description")
    for category in data["categories"]:
        table.add_row(category["name"], str(category["count"]), category["description"])
    console.print(table)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
) -> None:
    """Start the HTTP tool server."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    from componentfinder.web.app import app as web_app

    console.print(f"Starting tool server on http://{host}:{port}")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )


if __name__ == "__main__":
    app()
