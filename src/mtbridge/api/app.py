"""FastAPI application factory."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mtbridge import __version__
from mtbridge.api.routes import respond, router
from mtbridge.backends.base import TranslationBackend
from mtbridge.config import DispatchSettings, http_settings
from mtbridge.dispatcher import Dispatcher
from mtbridge.schemas import TranslateResponse

logger = logging.getLogger(__name__)


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "malformed request body"


async def _invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = "Invalid JSON: " + _describe_validation_error(exc)
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return respond(TranslateResponse.failure(message), 400)


def create_app(
    backend: TranslationBackend,
    settings: DispatchSettings | None = None,
) -> FastAPI:
    """Build the HTTP app around one backend.

    Args:
        backend: Translation backend shared by all requests.
        settings: Dispatch settings; defaults to 3 workers and a 30s
            per-item deadline.
    """
    app = FastAPI(
        title="mtbridge",
        description="Machine-translation bridge: single and batch translation API",
        version=__version__,
    )
    app.state.dispatcher = Dispatcher(backend, settings or http_settings())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["POST", "GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.add_exception_handler(RequestValidationError, _invalid_request)
    app.include_router(router)
    return app
