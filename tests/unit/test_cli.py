"""Tests for the management CLI."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from library_service.cli.main import cli
from library_service.infra.stores import StoreRegistry
from tests.conftest import build_sqlite_registry
from tests.unit.test_seed import write_seed_files

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def registry_factory(tmp_path: Path) -> Iterator[Callable[[], StoreRegistry]]:
    """Point every ``StoreRegistry.from_settings()`` call at SQLite files."""

    def _factory(*args: object, **kwargs: object) -> StoreRegistry:
        return build_sqlite_registry(tmp_path)

    with patch.object(StoreRegistry, "from_settings", side_effect=_factory):
        yield _factory


def _counts(factory: Callable[[], StoreRegistry]) -> dict[str, int]:
    async def _run() -> dict[str, int]:
        registry = factory()
        try:
            return {store.name: await store.count() for store in registry}
        finally:
            await registry.dispose()

    return asyncio.run(_run())


def test_help_lists_commands(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "seed" in result.output
    assert "db" in result.output


def test_db_init_creates_tables(runner: CliRunner, registry_factory) -> None:
    result = runner.invoke(cli, ["db", "init"])

    assert result.exit_code == 0, result.output
    assert "All store schemas are in place" in result.output
    assert _counts(registry_factory) == {"authors": 0, "books": 0, "reviews": 0}


def test_seed_twice_is_stable(runner: CliRunner, registry_factory, tmp_path: Path) -> None:
    data_dir = write_seed_files(tmp_path / "seed")

    first = runner.invoke(cli, ["seed", "--data-dir", str(data_dir)])
    second = runner.invoke(cli, ["seed", "--data-dir", str(data_dir)])

    assert first.exit_code == 0, first.output
    assert second.exit_code == 0, second.output
    assert "Seeding complete" in second.output
    assert _counts(registry_factory) == {"authors": 2, "books": 2, "reviews": 2}


def test_seed_rejects_invalid_files(runner: CliRunner, registry_factory, tmp_path: Path) -> None:
    bad = [{"id": 1, "bookId": 1, "reviewername": "Bob", "rating": 0, "comment": "x"}]
    data_dir = write_seed_files(tmp_path / "seed", reviews=bad)

    result = runner.invoke(cli, ["seed", "--data-dir", str(data_dir)])

    assert result.exit_code == 1
    assert "Cannot read seed data" in result.output


def test_db_status_reports_rows(runner: CliRunner, registry_factory) -> None:
    runner.invoke(cli, ["db", "init"])

    result = runner.invoke(cli, ["db", "status"])

    assert result.exit_code == 0, result.output
    assert "authors: 0 rows (sqlite)" in result.output


def test_server_flag_starts_uvicorn() -> None:
    from library_service import main as entry

    with patch.object(entry, "serve") as serve, patch("library_service.cli.main.main") as cli_main:
        entry.main(["--server"])

    serve.assert_called_once_with()
    cli_main.assert_not_called()


def test_without_server_flag_runs_cli() -> None:
    from library_service import main as entry

    with patch.object(entry, "serve") as serve, patch("library_service.cli.main.main") as cli_main:
        entry.main(["db", "status"])

    serve.assert_not_called()
    cli_main.assert_called_once_with(["db", "status"])
