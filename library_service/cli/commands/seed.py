"""Offline seeding command."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from pydantic import ValidationError

from library_service.cli.utils import error, header, info, success, with_stores
from library_service.core.exceptions import AppException
from library_service.core.settings import get_seed_settings
from library_service.features.catalog.seed import Seeder, load_seed_data
from library_service.infra.stores import StoreRegistry


@click.command()
@click.option(
    "--data-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory with authors.json, books.json and reviews.json "
    "(default: SEED_DATA_DIR)",
)
@with_stores
async def seed(stores: StoreRegistry, data_dir: Path | None) -> None:
    """Upsert the seed files into the author, book and review stores.

    Safe to re-run: records are matched by id, so identical files leave the
    stores unchanged.
    """
    settings = get_seed_settings()
    if data_dir is not None:
        settings = settings.model_copy(update={"data_dir": data_dir})

    header(f"Seeding from {settings.data_dir}")
    try:
        data = load_seed_data(settings.data_dir)
    except (OSError, ValidationError) as e:
        error(f"Cannot read seed data: {e}")
        sys.exit(1)

    try:
        report = await Seeder(stores, settings).run(data)
    except AppException as e:
        error(f"Seeding failed: {e.detail}")
        sys.exit(1)

    for store_name, count in report.counts.items():
        info(f"{store_name}: {count} records upserted")
    success("Seeding complete")
