"""Shared test fixtures for mtbridge tests."""

from __future__ import annotations

import threading
import time

import pytest

from mtbridge.backends.base import TranslationBackend


class RecordingBackend(TranslationBackend):
    """Fake backend: returns "<text>-><target>" and records every call.

    Tracks the peak number of simultaneous ``translate`` calls. Items in
    ``fail_on`` raise; ``delays`` maps a text to a sleep before answering.
    """

    def __init__(
        self,
        *,
        fail_on: set[str] | None = None,
        delays: dict[str, float] | None = None,
        delay: float = 0.0,
    ) -> None:
        self.fail_on = fail_on or set()
        self.delays = delays or {}
        self.delay = delay
        self.calls: list[tuple[str, str, str | None]] = []
        self.max_in_flight = 0
        self._in_flight = 0
        self._lock = threading.Lock()

    def translate(
        self,
        text: str,
        target_lang: str,
        source_lang: str | None = None,
    ) -> str:
        with self._lock:
            self.calls.append((text, target_lang, source_lang))
            self._in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self._in_flight)
        try:
            time.sleep(self.delays.get(text, self.delay))
            if text in self.fail_on:
                raise RuntimeError(f"backend rejected '{text}'")
            return f"{text}->{target_lang}"
        finally:
            with self._lock:
                self._in_flight -= 1

    def translate_batch(
        self,
        texts: list[str],
        target_lang: str,
        source_lang: str | None = None,
    ) -> list[str]:
        return [self.translate(t, target_lang, source_lang) for t in texts]

    @property
    def called_texts(self) -> list[str]:
        return [c[0] for c in self.calls]


class HangingBackend(RecordingBackend):
    """Never answers for texts in ``hang_on`` until ``release`` is set."""

    def __init__(self, hang_on: set[str], **kwargs) -> None:
        super().__init__(**kwargs)
        self.hang_on = hang_on
        self.release = threading.Event()

    def translate(
        self,
        text: str,
        target_lang: str,
        source_lang: str | None = None,
    ) -> str:
        if text in self.hang_on:
            self.release.wait()
        return super().translate(text, target_lang, source_lang)


@pytest.fixture
def recording_backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def hanging_backend():
    """Backend that hangs on "stuck"; released at teardown so threads exit."""
    backend = HangingBackend(hang_on={"stuck"})
    yield backend
    backend.release.set()
