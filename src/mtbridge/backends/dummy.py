"""Dummy translation backend for testing: prefixes strings with [XX] tag."""

from __future__ import annotations

from mtbridge.backends.base import TranslationBackend


class DummyBackend(TranslationBackend):
    """Offline backend that prefixes each string with the target language tag.

    Example: "Hello World" -> "[ZH-CN] Hello World"
    """

    def translate_batch(
        self,
        texts: list[str],
        target_lang: str,
        source_lang: str | None = None,
    ) -> list[str]:
        tag = f"[{target_lang.upper()}]"
        return [f"{tag} {text}" for text in texts]
