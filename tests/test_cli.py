"""Tests for CLI commands."""

from __future__ import annotations

import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from componentfinder.cli import _config, _setup_logging, app
from componentfinder.errors import NotFoundError, RefreshFailure

runner = CliRunner()

SUMMARY = {
    "name": "AnimatedButton",
    "category": "Buttons",
    "description": "Button that animates",
    "tags": ["animated"],
    "sourceUrl": "https://github.com/owner/repo/blob/main/AnimatedButton.tsx",
}


@pytest.fixture
def mock_catalog():
    catalog = MagicMock()
    with patch("componentfinder.cli.build_catalog", return_value=catalog):
        yield catalog


class TestSetupLogging:
    """Tests for _setup_logging helper."""

    def test_setup_logging_verbose(self) -> None:
        """Verbose mode sets DEBUG level."""
        with patch("componentfinder.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=True)
            assert mock_config.call_args[1]["level"] == logging.DEBUG

    def test_setup_logging_normal(self) -> None:
        """Normal mode sets INFO level."""
        with patch("componentfinder.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=False)
            assert mock_config.call_args[1]["level"] == logging.INFO


class TestConfig:
    """Tests for _config helper."""

    def test_repository_override(self) -> None:
        """--repository replaces the configured repository."""
        assert _config("acme/ui").repository == "acme/ui"


class TestListCommand:
    """Tests for the list command."""

    def test_list(self, mock_catalog) -> None:
        """Prints a table of components."""
        mock_catalog.list_components = AsyncMock(return_value={"total": 1, "components": [SUMMARY]})

        result = runner.invoke(app, ["list", "--category", "Buttons"])

        assert result.exit_code == 0
        assert "AnimatedButton" in result.stdout
        mock_catalog.list_components.assert_awaited_once_with(category="Buttons", limit=None)

    def test_list_empty(self, mock_catalog) -> None:
        """Shows a notice when nothing matches."""
        mock_catalog.list_components = AsyncMock(return_value={"total": 0, "components": []})
        result = runner.invoke(app, ["list"])
        assert "No components found" in result.stdout


class TestSearchCommand:
    """Tests for the search command."""

    def test_search_no_results(self, mock_catalog) -> None:
        """Shows message when no results found."""
        mock_catalog.search_components = AsyncMock(return_value={"total": 0, "results": []})
        result = runner.invoke(app, ["search", "zzz"])
        assert result.exit_code == 0
        assert "No matches found" in result.stdout

    def test_search_with_results(self, mock_catalog) -> None:
        """Displays scores in a table."""
        mock_catalog.search_components = AsyncMock(
            return_value={
                "total": 1,
                "results": [{**SUMMARY, "score": 80, "matchedFields": ["name", "tags"]}],
            }
        )
        result = runner.invoke(app, ["search", "animated", "--limit", "3"])

        assert result.exit_code == 0
        assert "80" in result.stdout
        mock_catalog.search_components.assert_awaited_once_with("animated", limit=3)

    def test_refresh_failure_exits_nonzero(self, mock_catalog) -> None:
        """Refresh failures are printed and exit with status 1."""
        mock_catalog.search_components = AsyncMock(side_effect=RefreshFailure("offline"))
        result = runner.invoke(app, ["search", "card"])
        assert result.exit_code == 1
        assert "offline" in result.stdout


class TestShowCommand:
    """Tests for the show command."""

    def test_show(self, mock_catalog) -> None:
        """Prints metadata and code."""
        mock_catalog.get_component_code = AsyncMock(
            return_value={
                **SUMMARY,
                "code": "export const AnimatedButton = () => <button />",
                "dependencies": ["react"],
                "path": "AnimatedButton.tsx",
                "size": 10,
            }
        )
        result = runner.invoke(app, ["show", "AnimatedButton"])

        assert result.exit_code == 0
        assert "export const AnimatedButton" in result.stdout
        assert "react" in result.stdout

    def test_show_not_found(self, mock_catalog) -> None:
        """Unknown components print suggestions."""
        mock_catalog.get_component_code = AsyncMock(
            side_effect=NotFoundError("Butt", ["AnimatedButton"])
        )
        result = runner.invoke(app, ["show", "Butt"])

        assert result.exit_code == 1
        assert "Did you mean" in result.stdout
        assert "AnimatedButton" in result.stdout


class TestInfoCommand:
    """Tests for the info command."""

    def test_info(self, mock_catalog) -> None:
        """Prints the formatted size."""
        mock_catalog.get_component_info = AsyncMock(
            return_value={
                **SUMMARY,
                "dependencies": [],
                "path": "AnimatedButton.tsx",
                "size": 2048,
                "sizeFormatted": "2.00 KB",
            }
        )
        result = runner.invoke(app, ["info", "AnimatedButton"])

        assert result.exit_code == 0
        assert "2.00 KB" in result.stdout


class TestCategoriesCommand:
    """Tests for the categories command."""

    def test_categories(self, mock_catalog) -> None:
        """Prints category counts."""
        mock_catalog.list_categories = AsyncMock(
            return_value={
                "total": 1,
                "categories": [{"name": "Buttons", "count": 1, "description": "1 buttons component"}],
            }
        )
        result = runner.invoke(app, ["categories"])

        assert result.exit_code == 0
        assert "Buttons" in result.stdout


class TestServeCommand:
    """Tests for the serve command."""

    def test_serve_starts_server(self) -> None:
        """Starts uvicorn server with correct parameters."""
        with patch("uvicorn.run") as mock_uvicorn_run:
            result = runner.invoke(app, ["serve", "--host", "0.0.0.0", "--port", "9000"])

        assert result.exit_code == 0
        call_kwargs = mock_uvicorn_run.call_args[1]
        assert call_kwargs["host"] == "0.0.0.0"
        assert call_kwargs["port"] == 9000
