"""Performance monitoring utilities using Prometheus metrics."""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator, Optional

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram

from core import get_logger
from core.constants import FailureKind
from services.notifications import SessionListener

logger = get_logger(__name__)


class PerformanceMonitor(SessionListener):
    """Collects draw metrics from session notifications.

    Each monitor owns its own registry so several sessions (or tests) can
    coexist in one process.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None) -> None:
        self.registry = registry or CollectorRegistry()
        self.operation_count = Counter(
            "randomizer_operations_total",
            "Controller operations",
            labelnames=("operation", "outcome"),
            registry=self.registry,
        )
        self.operation_duration = Histogram(
            "randomizer_operation_duration_seconds",
            "Controller operation duration",
            labelnames=("operation",),
            registry=self.registry,
        )
        self.draws_total = Counter(
            "randomizer_draws_total", "Committed draws", registry=self.registry
        )
        self.preview_ticks_total = Counter(
            "randomizer_preview_ticks_total", "Cosmetic preview ticks", registry=self.registry
        )
        self.failures_total = Counter(
            "randomizer_failures_total",
            "Refused operations",
            labelnames=("kind",),
            registry=self.registry,
        )
        self.remaining = Gauge(
            "randomizer_remaining_participants", "Participants left to draw", registry=self.registry
        )
        self.drawn = Gauge(
            "randomizer_drawn_participants", "Participants already drawn", registry=self.registry
        )

    @contextmanager
    def track_operation(self, operation: str) -> Iterator[None]:
        start = time.perf_counter()
        outcome = "error"
        try:
            yield
            outcome = "done"
        finally:
            duration = time.perf_counter() - start
            self.operation_count.labels(operation=operation, outcome=outcome).inc()
            self.operation_duration.labels(operation=operation).observe(duration)
            logger.debug(f"{operation} took {duration * 1000:.2f} ms")

    def sample(self, name: str, **labels: str) -> float:
        """Current value of a sample, 0.0 when it was never recorded."""
        value = self.registry.get_sample_value(name, labels or None)
        return value if value is not None else 0.0

    # ------------- SessionListener -------------
    def participants_changed(self, all_, remaining, history) -> None:
        self.remaining.set(len(remaining))
        self.drawn.set(len(history))

    def preview_tick(self, name: str) -> None:
        self.preview_ticks_total.inc()

    def winner_revealed(self, participant) -> None:
        self.draws_total.inc()

    def operation_failed(self, kind: FailureKind, message: str) -> None:
        self.failures_total.labels(kind=kind.value).inc()
