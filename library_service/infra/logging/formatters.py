"""JSON Lines formatter for log aggregation."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from opentelemetry import trace

# Attributes every LogRecord carries; anything else came from ``extra=`` or
# from ContextInjectingFilter and is emitted as a top-level field.
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
}


def _utc_timestamp(created: float) -> str:
    moment = datetime.fromtimestamp(created, tz=UTC)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _one_line(text: str) -> str:
    return text.replace("\n", "\\n")


class JSONFormatter(logging.Formatter):
    """One JSON object per record: level, logger, message and UTC timestamp.

    Also carries the active OpenTelemetry trace and span ids, the ``static``
    fields (the service name), and every extra field on the record. A
    correlation id set once per GraphQL request therefore appears on every
    loader, store and orchestrator line of that request.

    Example output:
        {"level": "INFO", "logger": "MutationOrchestrator", "message": "Author created",
         "timestamp": "2025-01-01T00:00:00.123Z", "service": "library-service",
         "correlation_id": "9f1c...", "author_id": "1"}
    """

    def __init__(self, static: dict[str, Any] | None = None) -> None:
        super().__init__()
        self.static = dict(static or {})

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "timestamp": _utc_timestamp(record.created),
        }

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            data["trace_id"] = format(span_context.trace_id, "032x")
            data["span_id"] = format(span_context.span_id, "016x")

        if record.exc_info:
            data["exception"] = _one_line(self.formatException(record.exc_info))
        elif record.exc_text:
            data["exception"] = _one_line(record.exc_text)
        if record.stack_info:
            data["stack_trace"] = _one_line(record.stack_info)

        data.update(self.static)
        for key, value in vars(record).items():
            if key not in _STANDARD_ATTRS and key not in data:
                data[key] = value

        return json.dumps(data, ensure_ascii=False, default=str)
