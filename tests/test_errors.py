"""Tests for mtbridge exception types."""

from mtbridge.errors import BackendConfigError, MtBridgeError, TranslationTimeout


class TestErrors:
    def test_hierarchy(self):
        assert issubclass(TranslationTimeout, MtBridgeError)
        assert issubclass(BackendConfigError, MtBridgeError)
        assert issubclass(BackendConfigError, ValueError)

    def test_timeout_keeps_deadline(self):
        err = TranslationTimeout(0.25)
        assert err.timeout == 0.25
        assert str(err) == "translation timeout after 250ms"
