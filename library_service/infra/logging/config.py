"""Process-wide logging setup.

The root logger gets its level from ``dictConfig`` and exactly one handler,
a ``QueueHandler``. A ``QueueListener`` thread drains the queue into the real
handlers (stderr and an optional rotating file), so a slow disk or terminal
never stalls the event loop that serves GraphQL requests.
"""

from __future__ import annotations

import atexit
import logging
import logging.config
from dataclasses import dataclass
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from queue import SimpleQueue
from typing import TYPE_CHECKING, Any

from library_service.infra.logging.context import ContextInjectingFilter
from library_service.infra.logging.formatters import JSONFormatter

if TYPE_CHECKING:
    from library_service.core.settings.logs import LoggingSettings

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


@dataclass
class _Pipeline:
    queue_handler: QueueHandler
    listener: QueueListener | None

    def close(self) -> None:
        if self.listener is not None:
            self.listener.stop()
        logging.getLogger().removeHandler(self.queue_handler)


_pipeline: _Pipeline | None = None
_configured = False


def shutdown() -> None:
    """Flush queued records and detach the queue handler."""
    global _pipeline
    if _pipeline is not None:
        _pipeline.close()
        _pipeline = None


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **overrides: Any,
) -> None:
    """Configure logging from settings, once per process unless ``force``.

    Both entry points (the CLI and the app lifespan) call this; the second
    call is a no-op.
    """
    global _configured
    if _configured and not force:
        return
    if log_settings is None:
        from library_service.core.settings import get_logging_settings

        log_settings = get_logging_settings()

    configure_logging(**{**log_settings.to_logging_kwargs(), **overrides})
    _configured = True


def configure_logging(
    log_level: str = "INFO",
    *,
    service_name: str = "library-service",
    json_logs: bool = True,
    console_enabled: bool = True,
    file_path: str | Path | None = None,
    file_max_bytes: int = 10 * 1024 * 1024,
    file_backup_count: int = 5,
    include_context: bool = True,
) -> None:
    """Replace the root logger's handlers with a fresh queue pipeline.

    Args:
        log_level: Root logger level.
        service_name: Static ``service`` field on JSON records.
        json_logs: JSON Lines when true, text otherwise.
        console_enabled: Write to stderr.
        file_path: Rotating log file; ``None`` disables file output.
        file_max_bytes: Rotation threshold for the file.
        file_backup_count: Rotated files kept.
        include_context: Copy bound context fields (correlation_id) onto records.
    """
    global _pipeline
    shutdown()

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "root": {"level": log_level.upper(), "handlers": []},
        }
    )

    formatter: logging.Formatter = (
        JSONFormatter(static={"service": service_name})
        if json_logs
        else logging.Formatter(TEXT_FORMAT)
    )
    sinks: list[logging.Handler] = []
    if console_enabled:
        sinks.append(logging.StreamHandler())
    if file_path:
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        sinks.append(
            RotatingFileHandler(
                path,
                maxBytes=file_max_bytes,
                backupCount=file_backup_count,
                encoding="utf-8",
            )
        )
    for sink in sinks:
        sink.setFormatter(formatter)

    queue: SimpleQueue[logging.LogRecord] = SimpleQueue()
    queue_handler = QueueHandler(queue)
    if include_context:
        # Handler filters also see records propagated from child loggers.
        queue_handler.addFilter(ContextInjectingFilter())

    listener = None
    if sinks:
        listener = QueueListener(queue, *sinks, respect_handler_level=True)
        listener.start()

    logging.getLogger().addHandler(queue_handler)
    logging.captureWarnings(True)
    _pipeline = _Pipeline(queue_handler=queue_handler, listener=listener)


atexit.register(shutdown)
