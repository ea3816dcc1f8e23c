"""HTTP transport for mtbridge."""

from mtbridge.api.app import create_app

__all__ = ["create_app"]
