"""Build a backend instance from a CLI/server backend name."""

from __future__ import annotations

from mtbridge.backends.base import TranslationBackend
from mtbridge.errors import BackendConfigError

BACKEND_NAMES = ("google", "deepl", "dummy")
DEFAULT_BACKEND = "google"


def create_backend(
    backend_name: str = DEFAULT_BACKEND,
    *,
    api_key: str | None = None,
) -> tuple[TranslationBackend, str]:
    """Create a translation backend instance.

    Returns:
        Tuple of (backend_instance, backend_label_for_report).

    Raises:
        BackendConfigError: Unknown backend name or missing DeepL API key.
    """
    name = backend_name.lower()

    if name == "dummy":
        from mtbridge.backends.dummy import DummyBackend
        return DummyBackend(), "dummy"
    elif name == "google":
        from mtbridge.backends.google import GoogleBackend
        return GoogleBackend(), "google"
    elif name == "deepl":
        if not api_key:
            raise BackendConfigError(
                "DeepL API key required. Use --api-key or set DEEPL_API_KEY."
            )
        from mtbridge.backends.deepl import DeepLBackend
        return DeepLBackend(api_key), "deepl"

    raise BackendConfigError(
        f"Unknown backend '{backend_name}'. Choose one of: {', '.join(BACKEND_NAMES)}."
    )
