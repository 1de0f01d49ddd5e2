"""Prometheus metrics for monitoring the loaders, stores and startup retries."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Histogram

# Custom registry so tests and the /metrics route see only this service's series
REGISTRY = CollectorRegistry()

DEFAULT_LATENCY_BUCKETS = (
    0.001,
    0.005,
    0.01,
    0.025,
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.5,
    5.0,
    10.0,
)

BATCH_SIZE_BUCKETS = (1, 2, 5, 10, 25, 50, 100, 250, 500)

# DataLoader metrics
dataloader_batches_total = Counter(
    "dataloader_batches_total",
    "Bulk fetches dispatched by request-scoped loaders",
    ["loader"],
    registry=REGISTRY,
)

dataloader_batch_size = Histogram(
    "dataloader_batch_size",
    "Distinct keys per loader batch",
    ["loader"],
    buckets=BATCH_SIZE_BUCKETS,
    registry=REGISTRY,
)

# Store metrics
store_operation_duration_seconds = Histogram(
    "store_operation_duration_seconds",
    "Store call duration in seconds",
    ["store", "operation"],
    buckets=DEFAULT_LATENCY_BUCKETS,
    registry=REGISTRY,
)

store_operation_errors_total = Counter(
    "store_operation_errors_total",
    "Store calls that raised",
    ["store", "operation"],
    registry=REGISTRY,
)

cross_store_inconsistency_total = Counter(
    "cross_store_inconsistency_total",
    "Author deletions that failed after the book store committed",
    registry=REGISTRY,
)

# Retry metrics
retry_attempts_total = Counter(
    "retry_attempts_total",
    "Retry attempts by operation",
    ["operation"],
    registry=REGISTRY,
)

retry_exhausted_total = Counter(
    "retry_exhausted_total",
    "Operations that failed after exhausting every retry",
    ["operation"],
    registry=REGISTRY,
)
