"""Console entry point for ``library-service``.

``library-service --server`` serves GraphQL over HTTP on ``PORT``; any other
invocation is handed to the management CLI (seed, db).
"""

from __future__ import annotations

import sys

SERVER_FLAG = "--server"


def serve() -> None:
    """Run the GraphQL service under uvicorn until interrupted."""
    import uvicorn

    from library_service.core.settings import get_app_settings, get_logging_settings

    app_settings = get_app_settings()
    uvicorn.run(
        "library_service.app.main:create_app",
        factory=True,
        host=app_settings.host,
        port=app_settings.port,
        reload=app_settings.debug,
        access_log=app_settings.debug,
        log_level=get_logging_settings().level.lower(),
    )


def main(argv: list[str] | None = None) -> None:
    args = sys.argv[1:] if argv is None else list(argv)
    if SERVER_FLAG in args:
        serve()
        return

    from library_service.cli.main import main as cli_main

    cli_main(args)


if __name__ == "__main__":
    main()
