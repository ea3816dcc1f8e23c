"""HTTP routes: single, batch and long-text translation plus health."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from mtbridge.dispatcher import Dispatcher
from mtbridge.models import TranslationRequest
from mtbridge.schemas import LongTranslateResponse, TranslateRequest, TranslateResponse
from mtbridge.segmenter import join_segments, split_sentences

logger = logging.getLogger(__name__)

router = APIRouter()

ENDPOINTS = (
    "POST /api/translate",
    "POST /api/translate/batch",
    "POST /api/translate/long",
    "GET  /health",
)


def get_dispatcher(request: Request) -> Dispatcher:
    return request.app.state.dispatcher


def respond(response: TranslateResponse, status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=response.to_wire(), status_code=status_code)


def _translate_single(
    dispatcher: Dispatcher, text: str, source_lang: str, target_lang: str,
) -> JSONResponse:
    results = dispatcher.dispatch(TranslationRequest.of([text], source_lang, target_lang))
    response = TranslateResponse.single(results)
    if not response.success:
        logger.error("Translation error: %s", response.error)
    return respond(response)


@router.post("/api/translate")
def translate(
    body: TranslateRequest,
    dispatcher: Dispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """Translate ``text``."""
    body = body.with_defaults()
    if not body.text:
        return respond(
            TranslateResponse.failure("Text field is required", body.from_, body.to), 400,
        )
    return _translate_single(dispatcher, body.text, body.from_, body.to)


@router.post("/api/translate/batch")
def translate_batch(
    body: TranslateRequest,
    dispatcher: Dispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """Translate ``text`` or every entry of ``texts``.

    A single text (or a one-element list) gets the single-item response;
    longer lists get ``results[]`` in input order.
    """
    body = body.with_defaults()

    if body.text:
        texts = [body.text]
    elif body.texts:
        texts = body.texts
    else:
        return respond(
            TranslateResponse.failure("Text or Texts field is required", body.from_, body.to),
            400,
        )

    if len(texts) == 1:
        return _translate_single(dispatcher, texts[0], body.from_, body.to)

    results = dispatcher.dispatch(TranslationRequest.of(texts, body.from_, body.to))
    return respond(TranslateResponse.batch(results))


@router.post("/api/translate/long")
def translate_long(
    body: TranslateRequest,
    dispatcher: Dispatcher = Depends(get_dispatcher),
) -> JSONResponse:
    """Split a long ``text`` into sentence chunks, translate them, rejoin."""
    body = body.with_defaults()
    text = body.text.strip()
    if not text:
        return respond(
            TranslateResponse.failure("Text field is required", body.from_, body.to), 400,
        )

    segments = split_sentences(text)
    logger.info("Long text: %d chars in %d segments", len(text), len(segments))

    results = dispatcher.dispatch(TranslationRequest.of(segments, body.from_, body.to))
    response = LongTranslateResponse(
        success=True,
        original=text,
        translated=join_segments(results.translations),
        from_=body.from_,
        to=body.to,
        segment_count=len(segments),
        errors=[f"segment {o.index}: {o.error}" for o in results.failures],
    )
    return JSONResponse(content=response.to_wire())


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}
