"""Store schema and status commands.

Example:bash
    # Create the authors, books and reviews tables where missing
    library-service db init

    # Ping each store and count its rows
    library-service db status
"""

from __future__ import annotations

import sys

import click

from library_service.cli.utils import error, header, info, store_line, success, with_stores
from library_service.core.exceptions import AppException
from library_service.infra.stores import StoreRegistry


@click.group(name="db")
def db() -> None:
    """Store management commands."""


@db.command()
@with_stores
async def init(stores: StoreRegistry) -> None:
    """Create the three store schemas if they do not exist."""
    try:
        for store in stores:
            info(f"Creating schema in the {store.name} store ({store.dialect})...")
            await store.create_schema()
    except AppException as e:
        error(f"Failed to create schemas: {e.detail}")
        sys.exit(1)
    success("All store schemas are in place")


@db.command()
@with_stores
async def status(stores: StoreRegistry) -> None:
    """Ping each store and show its row count."""
    header("Store status")
    unreachable = 0
    for store in stores:
        try:
            await store.ping()
            rows = await store.count()
        except AppException as e:
            unreachable += 1
            store_line(store.name, False, e.detail)
            continue
        store_line(store.name, True, f"{rows} rows ({store.dialect})")

    if unreachable:
        sys.exit(1)
