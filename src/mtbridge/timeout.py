"""Deadline wrapper around a single backend call."""

from __future__ import annotations

import queue
from threading import Thread

from mtbridge.backends.base import TranslationBackend
from mtbridge.errors import TranslationTimeout


def call_with_timeout(
    backend: TranslationBackend,
    text: str,
    target_lang: str,
    source_lang: str | None,
    timeout: float,
) -> str:
    """Run ``backend.translate`` and give up after ``timeout`` seconds.

    The call runs in a daemon thread. If the deadline passes first the
    thread is abandoned, not cancelled: it keeps running until the backend
    returns, and its result is discarded.

    Raises:
        TranslationTimeout: The deadline elapsed before the backend answered.
        Exception: Whatever the backend raised, re-raised in the caller.
    """
    box: queue.Queue[tuple[str | None, BaseException | None]] = queue.Queue(maxsize=1)

    def _run() -> None:
        try:
            box.put((backend.translate(text, target_lang, source_lang), None))
        except Exception as e:
            box.put((None, e))

    Thread(target=_run, name="mtbridge-call", daemon=True).start()

    try:
        translated, error = box.get(timeout=timeout)
    except queue.Empty:
        raise TranslationTimeout(timeout) from None

    if error is not None:
        raise error
    return translated or ""
