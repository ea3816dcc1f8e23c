"""Google Translate backend (free web endpoint via deep-translator)."""

from __future__ import annotations

from deep_translator import GoogleTranslator

from mtbridge.backends.base import TranslationBackend


class GoogleBackend(TranslationBackend):
    """Translation backend using Google Translate through deep-translator.

    ``GoogleTranslator`` holds the language pair as instance state, so one
    is built per call.
    """

    def __init__(self, proxies: dict[str, str] | None = None) -> None:
        self._proxies = proxies

    def translate(
        self,
        text: str,
        target_lang: str,
        source_lang: str | None = None,
    ) -> str:
        translator = GoogleTranslator(
            source=source_lang or "auto",
            target=target_lang,
            proxies=self._proxies,
        )
        result = translator.translate(text)
        return result if result is not None else ""

    def translate_batch(
        self,
        texts: list[str],
        target_lang: str,
        source_lang: str | None = None,
    ) -> list[str]:
        return [self.translate(text, target_lang, source_lang) for text in texts]
