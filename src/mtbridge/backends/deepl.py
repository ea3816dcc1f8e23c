"""DeepL API translation backend."""

from __future__ import annotations

from mtbridge.backends.base import TranslationBackend

# DeepL accepts at most 50 texts per request
MAX_BATCH_SIZE = 50

# DeepL rejects bare "EN"/"PT" as targets and uses script tags for Chinese
_TARGET_ALIASES = {
    "EN": "EN-US",
    "PT": "PT-PT",
    "ZH-CN": "ZH-HANS",
    "ZH-TW": "ZH-HANT",
}


def _deepl_target(lang: str) -> str:
    code = lang.upper()
    return _TARGET_ALIASES.get(code, code)


def _deepl_source(lang: str | None) -> str | None:
    # Source codes are base languages only ("zh-CN" -> "ZH")
    if not lang or lang.lower() == "auto":
        return None
    return lang.split("-")[0].upper()


class DeepLBackend(TranslationBackend):
    """Translation backend using the DeepL API.

    Errors (quota, network, unsupported language) propagate unchanged;
    the dispatcher records them on the failing item.
    """

    def __init__(self, api_key: str) -> None:
        try:
            import deepl
        except ImportError:
            raise ImportError(
                "DeepL backend requires the 'deepl' package. "
                "Install it with: pip install mtbridge[deepl]"
            ) from None
        self._deepl = deepl
        self._translator = deepl.Translator(api_key)

    def translate_batch(
        self,
        texts: list[str],
        target_lang: str,
        source_lang: str | None = None,
    ) -> list[str]:
        """Translate texts using DeepL in chunks of MAX_BATCH_SIZE."""
        if not texts:
            return []

        results: list[str] = []

        for i in range(0, len(texts), MAX_BATCH_SIZE):
            batch = texts[i : i + MAX_BATCH_SIZE]
            result = self._translator.translate_text(
                batch,
                target_lang=_deepl_target(target_lang),
                source_lang=_deepl_source(source_lang),
            )
            # translate_text returns a list of TextResult when given a list
            if isinstance(result, list):
                results.extend(r.text for r in result)
            else:
                results.append(result.text)

        return results
