"""Request and result data model for a single dispatch cycle."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from mtbridge.config import DEFAULT_SOURCE_LANG, DEFAULT_TARGET_LANG


class ErrorKind(str, Enum):
    """Why a single item failed."""
    backend = "backend"
    timeout = "timeout"


class Strategy(str, Enum):
    """Execution path chosen by the dispatcher."""
    sequential = "sequential"
    pooled = "pooled"


@dataclass(frozen=True)
class TranslationRequest:
    """Ordered texts plus a language pair. Immutable once built."""

    texts: tuple[str, ...]
    source_lang: str = DEFAULT_SOURCE_LANG
    target_lang: str = DEFAULT_TARGET_LANG

    @classmethod
    def of(
        cls,
        texts: Iterable[str],
        source_lang: str | None = None,
        target_lang: str | None = None,
    ) -> TranslationRequest:
        """Build a request, falling back to default languages for blank tags."""
        return cls(
            texts=tuple(texts),
            source_lang=source_lang or DEFAULT_SOURCE_LANG,
            target_lang=target_lang or DEFAULT_TARGET_LANG,
        )

    @property
    def non_empty_count(self) -> int:
        return sum(1 for text in self.texts if text)


@dataclass
class TranslationOutcome:
    """Result of translating the item at ``index``.

    On failure ``translated`` is empty and ``error`` holds the message.
    """

    index: int
    original: str
    translated: str = ""
    error: str | None = None
    error_kind: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ResultSet:
    """Outcomes aligned 1:1 with the request texts."""

    request: TranslationRequest
    outcomes: list[TranslationOutcome] = field(default_factory=list)
    strategy: Strategy = Strategy.sequential

    def __post_init__(self) -> None:
        if len(self.outcomes) != len(self.request.texts):
            raise ValueError(
                f"ResultSet has {len(self.outcomes)} outcomes "
                f"for {len(self.request.texts)} texts"
            )

    def __len__(self) -> int:
        return len(self.outcomes)

    def __iter__(self) -> Iterator[TranslationOutcome]:
        return iter(self.outcomes)

    def __getitem__(self, index: int) -> TranslationOutcome:
        return self.outcomes[index]

    @property
    def translations(self) -> list[str]:
        return [o.translated for o in self.outcomes]

    @property
    def failures(self) -> list[TranslationOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def ok(self) -> bool:
        return not self.failures
