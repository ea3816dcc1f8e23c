"""CLI interface for mtbridge using Typer."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from mtbridge import __version__
from mtbridge.backends.base import TranslationBackend
from mtbridge.backends.factory import BACKEND_NAMES, DEFAULT_BACKEND, create_backend
from mtbridge.config import (
    DEFAULT_HOST,
    DEFAULT_MAX_WORKERS,
    DEFAULT_PORT,
    DEFAULT_SOURCE_LANG,
    DEFAULT_TARGET_LANG,
    HTTP_TIMEOUT_SECONDS,
    DispatchSettings,
    http_settings,
)
from mtbridge.dispatcher import Dispatcher
from mtbridge.errors import BackendConfigError
from mtbridge.models import ResultSet, TranslationRequest
from mtbridge.schemas import TranslateRequest, TranslateResponse

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="mtbridge",
    help="Translate text from the command line, stdin, JSON or HTTP.",
    add_completion=False,
)
# stdout carries translations and JSON only; everything else goes to stderr
console = Console()
err_console = Console(stderr=True, soft_wrap=True)

_verbose = False
_quiet = False

# Shown by `mtbridge languages`
COMMON_LANGUAGES = [
    ("en", "English"),
    ("zh-CN", "Chinese (Simplified)"),
    ("zh-TW", "Chinese (Traditional)"),
    ("ja", "Japanese"),
    ("ko", "Korean"),
    ("fr", "French"),
    ("de", "German"),
    ("es", "Spanish"),
    ("ru", "Russian"),
    ("ar", "Arabic"),
    ("pt", "Portuguese"),
    ("it", "Italian"),
    ("th", "Thai"),
    ("vi", "Vietnamese"),
    ("auto", "Auto-detect (source only)"),
]

_BACKEND_HELP = f"Backend: {', '.join(BACKEND_NAMES)}."


def _print(msg: str, *, verbose_only: bool = False) -> None:
    """Print a status line to stderr respecting --verbose/--quiet."""
    if _quiet:
        return
    if verbose_only and not _verbose:
        return
    err_console.print(msg)


def _print_error(msg: str) -> None:
    """Errors bypass --quiet."""
    err_console.print(f"[red]Error:[/red] {escape(msg)}")


def _echo_json(response: TranslateResponse) -> None:
    typer.echo(json.dumps(response.to_wire(), indent=2, ensure_ascii=False))


def _configure_logging(verbose: bool) -> None:
    # Commands print per-item errors themselves; library warnings need --verbose
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    logging.getLogger("mtbridge").setLevel(logging.NOTSET)


def _create_backend_or_exit(
    backend_name: str, api_key: str | None, *, as_json: bool = False,
) -> tuple[TranslationBackend, str]:
    try:
        backend, label = create_backend(backend_name, api_key=api_key)
    except (BackendConfigError, ImportError) as e:
        if as_json:
            _echo_json(TranslateResponse.failure(str(e)))
        else:
            _print_error(str(e))
        raise typer.Exit(1) from e
    _print(f"Backend: [cyan]{label}[/cyan]", verbose_only=True)
    return backend, label


def _save_report(
    report: Path | None,
    results: ResultSet,
    *,
    backend_label: str,
    max_workers: int,
    started_at: datetime,
) -> None:
    if report is None:
        return
    from mtbridge.reporting.formatters import save_report
    from mtbridge.reporting.report import DispatchReport

    rpt = DispatchReport.from_results(
        results, backend=backend_label, max_workers=max_workers, started_at=started_at,
    )
    save_report(rpt, report)
    _print(f"Report saved: [cyan]{report}[/cyan]")


def version_callback(value: bool) -> None:
    if value:
        console.print(f"mtbridge {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Show extra info (backend, strategy, per-item warnings).",
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only show errors.",
    ),
) -> None:
    """mtbridge: a CLI and HTTP front-end for machine translation."""
    global _verbose, _quiet
    _verbose = verbose
    _quiet = quiet
    _configure_logging(verbose)


@app.command()
def translate(
    text: str | None = typer.Argument(
        None, help="Text to translate. Read from stdin when omitted.",
    ),
    source_lang: str = typer.Option(
        DEFAULT_SOURCE_LANG, "--from", "-f",
        help="Source language code, or 'auto'.",
    ),
    target_lang: str = typer.Option(
        DEFAULT_TARGET_LANG, "--to", "-t",
        help="Target language code (e.g. en, zh-CN, ja).",
    ),
    batch: bool = typer.Option(
        False, "--batch",
        help="Treat TEXT as comma-separated items, one output line each.",
    ),
    split: bool = typer.Option(
        False, "--split",
        help="Split a long TEXT into sentences and translate them as a batch.",
    ),
    backend_name: str = typer.Option(
        DEFAULT_BACKEND, "--backend", "-b",
        envvar="MTBRIDGE_BACKEND", help=_BACKEND_HELP,
    ),
    api_key: str | None = typer.Option(
        None, "--api-key", "-k",
        envvar="DEEPL_API_KEY", help="DeepL API key.",
    ),
    workers: int = typer.Option(
        DEFAULT_MAX_WORKERS, "--workers", "-w",
        envvar="MTBRIDGE_WORKERS", min=1,
        help="Max concurrent backend calls for batches.",
    ),
    report: Path | None = typer.Option(
        None, "--report", "-r",
        help="Save report to file (json/md/csv).",
    ),
) -> None:
    """Translate TEXT (or stdin) and print the result."""
    if batch and split:
        _print_error("--batch and --split cannot be combined.")
        raise typer.Exit(1)

    if text is None:
        text = typer.get_text_stream("stdin").read()
    text = text.strip()

    if not text:
        _print_error("No text provided. Pass TEXT or pipe text to stdin.")
        raise typer.Exit(1)

    if batch:
        items = [t.strip() for t in text.split(",")]
    elif split:
        from mtbridge.segmenter import split_sentences
        items = split_sentences(text)
        _print(f"Split into [green]{len(items)}[/green] segments", verbose_only=True)
    else:
        items = [text]

    backend, label = _create_backend_or_exit(backend_name, api_key)
    started_at = datetime.now()
    request = TranslationRequest.of(items, source_lang, target_lang)
    results = Dispatcher(backend, DispatchSettings(max_workers=workers)).dispatch(request)
    _print(f"Strategy: [cyan]{results.strategy.value}[/cyan]", verbose_only=True)

    _save_report(
        report, results,
        backend_label=label, max_workers=workers, started_at=started_at,
    )

    if split:
        from mtbridge.segmenter import join_segments
        for outcome in results.failures:
            err_console.print(
                f"Error translating segment {outcome.index}: {escape(outcome.error or '')}",
            )
        typer.echo(join_segments(results.translations))
        return

    if not batch:
        outcome = results[0]
        if not outcome.ok:
            _print_error(f"Translation failed: {outcome.error}")
            raise typer.Exit(1)
        typer.echo(outcome.translated)
        return

    for outcome in results:
        if not outcome.ok:
            err_console.print(
                f"Error translating '{escape(outcome.original)}': {escape(outcome.error or '')}",
            )
        elif outcome.translated:
            typer.echo(outcome.translated)

    if results.failures:
        _print(
            f"[yellow]{len(results.failures)}[/yellow] of {len(results)} items failed",
            verbose_only=True,
        )


@app.command(name="json")
def json_mode(
    backend_name: str = typer.Option(
        DEFAULT_BACKEND, "--backend", "-b",
        envvar="MTBRIDGE_BACKEND", help=_BACKEND_HELP,
    ),
    api_key: str | None = typer.Option(
        None, "--api-key", "-k",
        envvar="DEEPL_API_KEY", help="DeepL API key.",
    ),
    workers: int = typer.Option(
        DEFAULT_MAX_WORKERS, "--workers", "-w",
        envvar="MTBRIDGE_WORKERS", min=1,
        help="Max concurrent backend calls for batches.",
    ),
    report: Path | None = typer.Option(
        None, "--report", "-r",
        help="Save report to file (json/md/csv).",
    ),
) -> None:
    """Read a JSON request from stdin and print a JSON response.

    Request: {"text": "...", "texts": [...], "from": "auto", "to": "en"}
    """
    raw = typer.get_text_stream("stdin").read()
    try:
        body = TranslateRequest.model_validate_json(raw)
    except ValidationError as e:
        first = e.errors()[0]["msg"] if e.errors() else str(e)
        _echo_json(TranslateResponse.failure(f"Invalid JSON input: {first}"))
        raise typer.Exit(1) from e

    body = body.with_defaults()

    if body.texts:
        items = body.texts
    elif body.text:
        items = [body.text]
    else:
        _echo_json(TranslateResponse.failure("Text field is required", body.from_, body.to))
        raise typer.Exit(1)

    backend, label = _create_backend_or_exit(backend_name, api_key, as_json=True)
    started_at = datetime.now()
    request = TranslationRequest.of(items, body.from_, body.to)
    results = Dispatcher(backend, DispatchSettings(max_workers=workers)).dispatch(request)

    _save_report(
        report, results,
        backend_label=label, max_workers=workers, started_at=started_at,
    )

    if body.texts:
        _echo_json(TranslateResponse.batch(results))
    else:
        _echo_json(TranslateResponse.single(results))


@app.command()
def serve(
    host: str = typer.Option(
        DEFAULT_HOST, "--host", help="Interface to bind.",
    ),
    port: int = typer.Option(
        DEFAULT_PORT, "--port", "-p",
        envvar="PORT", help="HTTP port.",
    ),
    timeout: float = typer.Option(
        HTTP_TIMEOUT_SECONDS, "--timeout",
        envvar="MTBRIDGE_TIMEOUT", min=0.001,
        help="Per-item backend deadline in seconds.",
    ),
    workers: int = typer.Option(
        DEFAULT_MAX_WORKERS, "--workers", "-w",
        envvar="MTBRIDGE_WORKERS", min=1,
        help="Max concurrent backend calls per batch request.",
    ),
    backend_name: str = typer.Option(
        DEFAULT_BACKEND, "--backend", "-b",
        envvar="MTBRIDGE_BACKEND", help=_BACKEND_HELP,
    ),
    api_key: str | None = typer.Option(
        None, "--api-key", "-k",
        envvar="DEEPL_API_KEY", help="DeepL API key.",
    ),
) -> None:
    """Run the HTTP translation API."""
    import uvicorn

    from mtbridge.api import create_app
    from mtbridge.api.routes import ENDPOINTS

    backend, label = _create_backend_or_exit(backend_name, api_key)
    application = create_app(backend, http_settings(max_workers=workers, timeout=timeout))

    if not _quiet:
        logging.getLogger("mtbridge").setLevel(logging.INFO)
    logger.info("Translation HTTP server running on http://%s:%d (backend: %s)", host, port, label)
    logger.info("API endpoints:")
    for endpoint in ENDPOINTS:
        logger.info("  - %s", endpoint)

    uvicorn.run(
        application,
        host=host,
        port=port,
        log_level="debug" if _verbose else "warning" if _quiet else "info",
    )


@app.command()
def languages() -> None:
    """List common language codes."""
    table = Table(title="Common language codes")
    table.add_column("Code", style="cyan")
    table.add_column("Language")
    for code, name in COMMON_LANGUAGES:
        table.add_row(code, name)
    console.print(table)


if __name__ == "__main__":
    app()
