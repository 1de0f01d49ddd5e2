"""Helpers that record metrics from the places that observe the events."""

from __future__ import annotations

from library_service.infra.metrics import prometheus


def track_batch(loader: str, size: int) -> None:
    """Record one loader batch of ``size`` distinct keys."""
    prometheus.dataloader_batches_total.labels(loader=loader).inc()
    prometheus.dataloader_batch_size.labels(loader=loader).observe(size)


def track_store_operation(store: str, operation: str, duration: float) -> None:
    """Record the duration of a store call."""
    prometheus.store_operation_duration_seconds.labels(
        store=store,
        operation=operation,
    ).observe(duration)


def track_store_error(store: str, operation: str) -> None:
    """Record a failed store call."""
    prometheus.store_operation_errors_total.labels(store=store, operation=operation).inc()


def track_cross_store_inconsistency() -> None:
    """Record an author deletion that left the stores divergent."""
    prometheus.cross_store_inconsistency_total.inc()


def track_retry_attempt(operation: str) -> None:
    """Record a retry attempt."""
    prometheus.retry_attempts_total.labels(operation=operation).inc()


def track_retry_exhausted(operation: str) -> None:
    """Record an operation that ran out of retries."""
    prometheus.retry_exhausted_total.labels(operation=operation).inc()
