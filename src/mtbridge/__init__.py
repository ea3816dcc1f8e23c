"""mtbridge: CLI and HTTP front-end for machine-translation backends."""

__version__ = "0.1.0"
