"""Order-preserving batch dispatcher with bounded concurrency.

A batch is translated either sequentially (small batches) or through a
thread pool of at most ``max_workers`` threads created for that one call.
Each job is tagged with its input index and the result set is assembled by
index, so output order never depends on completion order.

Failures are per item: a backend error or timeout fills that item's
outcome and every other item still runs. ``dispatch`` itself does not
raise for item failures.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed

from mtbridge.backends.base import TranslationBackend
from mtbridge.config import DispatchSettings
from mtbridge.errors import TranslationTimeout
from mtbridge.models import (
    ErrorKind,
    ResultSet,
    Strategy,
    TranslationOutcome,
    TranslationRequest,
)
from mtbridge.timeout import call_with_timeout

logger = logging.getLogger(__name__)


class Dispatcher:
    """Translate ordered texts through a backend, one outcome per text."""

    def __init__(
        self,
        backend: TranslationBackend,
        settings: DispatchSettings | None = None,
    ) -> None:
        self._backend = backend
        self._settings = settings or DispatchSettings()

    @property
    def settings(self) -> DispatchSettings:
        return self._settings

    def choose_strategy(self, request: TranslationRequest) -> Strategy:
        """Small batches run inline; anything larger goes through the pool."""
        if request.non_empty_count <= self._settings.sequential_threshold:
            return Strategy.sequential
        return Strategy.pooled

    def dispatch(self, request: TranslationRequest) -> ResultSet:
        """Translate every text in ``request``.

        Returns:
            ResultSet whose i-th outcome belongs to ``request.texts[i]``.
        """
        strategy = self.choose_strategy(request)
        logger.debug(
            "Dispatching %d texts (%d non-empty) %s -> %s, strategy=%s",
            len(request.texts), request.non_empty_count,
            request.source_lang, request.target_lang, strategy.value,
        )

        if strategy == Strategy.sequential:
            outcomes = self._run_sequential(request)
        else:
            outcomes = self._run_pooled(request)

        return ResultSet(request=request, outcomes=outcomes, strategy=strategy)

    def _run_sequential(self, request: TranslationRequest) -> list[TranslationOutcome]:
        return [
            self._translate_one(i, text, request)
            for i, text in enumerate(request.texts)
        ]

    def _run_pooled(self, request: TranslationRequest) -> list[TranslationOutcome]:
        outcomes: list[TranslationOutcome | None] = [None] * len(request.texts)

        # All jobs are queued up front; only execution is bounded
        with ThreadPoolExecutor(
            max_workers=self._settings.max_workers,
            thread_name_prefix="mtbridge-worker",
        ) as pool:
            futures = {
                pool.submit(self._translate_one, i, text, request): i
                for i, text in enumerate(request.texts)
            }
            for future in as_completed(futures):
                index = futures[future]
                outcomes[index] = future.result()

        missing = [i for i, o in enumerate(outcomes) if o is None]
        if missing:
            raise RuntimeError(f"Worker pool lost results for items {missing}")
        return outcomes  # type: ignore[return-value]

    def _translate_one(
        self, index: int, text: str, request: TranslationRequest,
    ) -> TranslationOutcome:
        """Translate one item, converting any failure into its outcome."""
        if not text:
            return TranslationOutcome(index=index, original=text)

        source = None if request.source_lang == "auto" else request.source_lang
        timeout = self._settings.timeout

        try:
            if timeout is None:
                translated = self._backend.translate(text, request.target_lang, source)
            else:
                translated = call_with_timeout(
                    self._backend, text, request.target_lang, source, timeout,
                )
        except TranslationTimeout as e:
            logger.warning("Translation error for text %d: %s", index, e)
            return TranslationOutcome(
                index=index, original=text,
                error=str(e), error_kind=ErrorKind.timeout,
            )
        except Exception as e:
            logger.warning("Translation error for text %d: %s", index, e)
            return TranslationOutcome(
                index=index, original=text,
                error=str(e) or type(e).__name__, error_kind=ErrorKind.backend,
            )

        return TranslationOutcome(index=index, original=text, translated=translated or "")


def dispatch_texts(
    backend: TranslationBackend,
    texts: Iterable[str],
    source_lang: str | None = None,
    target_lang: str | None = None,
    settings: DispatchSettings | None = None,
) -> ResultSet:
    """One-shot helper: build a request and dispatch it."""
    request = TranslationRequest.of(texts, source_lang, target_lang)
    return Dispatcher(backend, settings).dispatch(request)
