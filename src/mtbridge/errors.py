"""Exception types raised by mtbridge."""

from __future__ import annotations


class MtBridgeError(Exception):
    """Base class for mtbridge errors."""


class TranslationTimeout(MtBridgeError, TimeoutError):
    """A backend call did not finish before its deadline."""

    def __init__(self, timeout: float) -> None:
        super().__init__(f"translation timeout after {_format_seconds(timeout)}")
        self.timeout = timeout


class BackendConfigError(MtBridgeError, ValueError):
    """A backend could not be created from the given options."""


def _format_seconds(seconds: float) -> str:
    if seconds >= 1 and float(seconds).is_integer():
        return f"{int(seconds)}s"
    if seconds >= 1:
        return f"{seconds:g}s"
    return f"{seconds * 1000:g}ms"
