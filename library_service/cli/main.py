"""Management CLI for library-service."""

from __future__ import annotations

import click

from library_service import __version__
from library_service.cli.commands import database, seed
from library_service.infra.logging import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="library-service")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Manage the author, book and review stores behind the GraphQL service.

    \b
    Quick Start:
      library-service db init           # Create tables where missing
      library-service seed              # Load SEED_DATA_DIR into the stores
      library-service db status         # Ping each store, count rows
      library-service --server          # Serve GraphQL on PORT
    """
    ctx.ensure_object(dict)


cli.add_command(seed.seed)
cli.add_command(database.db)


def main(args: list[str] | None = None) -> None:
    setup_logging()
    cli.main(args=args, prog_name="library-service", obj={})


if __name__ == "__main__":
    main()
