"""Runtime settings and defaults for dispatch, HTTP serving and segmentation."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_SOURCE_LANG = "auto"
DEFAULT_TARGET_LANG = "en"

# Max concurrent backend calls per batch
DEFAULT_MAX_WORKERS = 3
# Batches with this many non-empty items or fewer skip the pool
DEFAULT_SEQUENTIAL_THRESHOLD = 3
HTTP_TIMEOUT_SECONDS = 30.0

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080

# Long-text segmentation (characters per chunk)
DEFAULT_SEGMENT_LENGTH = 500


@dataclass(frozen=True)
class DispatchSettings:
    """Knobs for a Dispatcher.

    Attributes:
        max_workers: Upper bound on in-flight backend calls in pooled mode.
        sequential_threshold: Non-empty item count at or below which the
            batch runs sequentially.
        timeout: Per-item deadline in seconds, or None for no deadline.
    """

    max_workers: int = DEFAULT_MAX_WORKERS
    sequential_threshold: int = DEFAULT_SEQUENTIAL_THRESHOLD
    timeout: float | None = None

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.sequential_threshold < 0:
            raise ValueError(
                f"sequential_threshold must be >= 0, got {self.sequential_threshold}"
            )
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")


def http_settings(
    max_workers: int = DEFAULT_MAX_WORKERS,
    timeout: float = HTTP_TIMEOUT_SECONDS,
) -> DispatchSettings:
    """Settings used by the HTTP transport (per-item deadline enabled)."""
    return DispatchSettings(max_workers=max_workers, timeout=timeout)
