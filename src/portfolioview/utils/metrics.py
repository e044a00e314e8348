"""Render and load timing utilities."""

import time
from contextlib import contextmanager

import structlog

logger = structlog.get_logger(__name__)


@contextmanager
def timed_operation(operation_name: str, **context):
    """
    Context manager for timing operations.

    Args:
        operation_name: Name of the operation being timed
        **context: Extra fields added to the log event

    Example:
        with timed_operation("render", view="projects"):
            renderer.render(records)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        logger.debug(
            "Operation timing",
            operation=operation_name,
            duration_ms=round(elapsed * 1000, 3),
            **context,
        )


class RenderMetrics:
    """Counts renders per view and remembers the last rendered size."""

    def __init__(self):
        self.render_counts: dict[str, int] = {}
        self.last_sizes: dict[str, int] = {}
        self.total_durations: dict[str, float] = {}

    def record(self, view: str, size: int, duration: float) -> None:
        self.render_counts[view] = self.render_counts.get(view, 0) + 1
        self.last_sizes[view] = size
        self.total_durations[view] = self.total_durations.get(view, 0.0) + duration

    def get_summary(self) -> dict:
        """Per-view render count, last size and mean duration in milliseconds."""
        return {
            view: {
                "renders": count,
                "last_size": self.last_sizes.get(view, 0),
                "mean_ms": round(self.total_durations[view] / count * 1000, 3),
            }
            for view, count in self.render_counts.items()
        }
