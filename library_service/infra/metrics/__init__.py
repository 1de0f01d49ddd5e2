"""Prometheus metrics for the aggregation layer."""

from library_service.infra.metrics.prometheus import REGISTRY

__all__ = ["REGISTRY"]
