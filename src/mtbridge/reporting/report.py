"""Dispatch report data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from mtbridge.models import ErrorKind, ResultSet


@dataclass
class DispatchReport:
    """Collects statistics about one dispatch run."""

    backend: str = ""
    source_lang: str = ""
    target_lang: str = ""
    strategy: str = ""
    max_workers: int = 0

    total_items: int = 0
    empty_items: int = 0
    translated_items: int = 0
    failed_items: int = 0
    timed_out_items: int = 0

    started_at: datetime = field(default_factory=datetime.now)
    finished_at: datetime | None = None

    errors: list[str] = field(default_factory=list)

    @property
    def duration_seconds(self) -> float:
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

    def finish(self) -> None:
        self.finished_at = datetime.now()

    @classmethod
    def from_results(
        cls,
        results: ResultSet,
        *,
        backend: str = "",
        max_workers: int = 0,
        started_at: datetime | None = None,
    ) -> DispatchReport:
        """Summarize a finished ResultSet."""
        request = results.request
        report = cls(
            backend=backend,
            source_lang=request.source_lang,
            target_lang=request.target_lang,
            strategy=results.strategy.value,
            max_workers=max_workers,
            total_items=len(results),
        )
        if started_at is not None:
            report.started_at = started_at

        for outcome in results:
            if not outcome.original:
                report.empty_items += 1
            elif outcome.ok:
                report.translated_items += 1
            else:
                report.failed_items += 1
                if outcome.error_kind == ErrorKind.timeout:
                    report.timed_out_items += 1
                report.errors.append(f"#{outcome.index} {outcome.original!r}: {outcome.error}")

        report.finish()
        return report

    def to_dict(self) -> dict:
        return {
            "backend": self.backend,
            "source_lang": self.source_lang,
            "target_lang": self.target_lang,
            "strategy": self.strategy,
            "max_workers": self.max_workers,
            "total_items": self.total_items,
            "empty_items": self.empty_items,
            "translated_items": self.translated_items,
            "failed_items": self.failed_items,
            "timed_out_items": self.timed_out_items,
            "duration_seconds": self.duration_seconds,
            "errors": self.errors,
        }
