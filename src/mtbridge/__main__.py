"""Allow running as python -m mtbridge."""

from mtbridge.cli import app


def main() -> None:
    app(prog_name="mtbridge")


main()
