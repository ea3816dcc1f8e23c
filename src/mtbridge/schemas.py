"""JSON request/response shapes shared by the CLI JSON mode and the HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from mtbridge.config import DEFAULT_SOURCE_LANG, DEFAULT_TARGET_LANG
from mtbridge.models import ResultSet, TranslationOutcome


class TranslateRequest(BaseModel):
    """``{text, texts[], from, to}``; exactly one of text/texts is expected."""

    model_config = ConfigDict(populate_by_name=True)

    text: str = ""
    texts: list[str] = Field(default_factory=list)
    from_: str = Field(default="", alias="from")
    to: str = ""

    def with_defaults(self) -> TranslateRequest:
        """Return a copy with blank language tags replaced by the defaults."""
        return self.model_copy(update={
            "from_": self.from_ or DEFAULT_SOURCE_LANG,
            "to": self.to or DEFAULT_TARGET_LANG,
        })


class ItemResult(BaseModel):
    original: str
    translated: str
    error: str | None = None

    @classmethod
    def from_outcome(cls, outcome: TranslationOutcome) -> ItemResult:
        return cls(
            original=outcome.original,
            translated=outcome.translated,
            error=outcome.error,
        )

    def to_wire(self) -> dict:
        data = {"original": self.original, "translated": self.translated}
        if self.error:
            data["error"] = self.error
        return data


class TranslateResponse(BaseModel):
    """``{success, original, translated, results[], from, to, error}``.

    ``success``, ``from`` and ``to`` are always emitted; the other fields
    are left out when empty.
    """

    model_config = ConfigDict(populate_by_name=True)

    success: bool = False
    original: str = ""
    translated: str = ""
    results: list[ItemResult] = Field(default_factory=list)
    from_: str = Field(default=DEFAULT_SOURCE_LANG, alias="from")
    to: str = DEFAULT_TARGET_LANG
    error: str = ""

    @classmethod
    def failure(
        cls,
        message: str,
        source_lang: str = DEFAULT_SOURCE_LANG,
        target_lang: str = DEFAULT_TARGET_LANG,
    ) -> TranslateResponse:
        return cls(success=False, error=message, from_=source_lang, to=target_lang)

    @classmethod
    def single(cls, results: ResultSet) -> TranslateResponse:
        """Response for a one-item request; a failed item fails the response."""
        outcome = results[0]
        request = results.request
        if not outcome.ok:
            return cls.failure(
                outcome.error or "translation failed",
                request.source_lang, request.target_lang,
            )
        return cls(
            success=True,
            original=outcome.original,
            translated=outcome.translated,
            from_=request.source_lang,
            to=request.target_lang,
        )

    @classmethod
    def batch(cls, results: ResultSet) -> TranslateResponse:
        """Response for a multi-item request; item failures stay per item."""
        request = results.request
        return cls(
            success=True,
            results=[ItemResult.from_outcome(o) for o in results],
            from_=request.source_lang,
            to=request.target_lang,
        )

    def to_wire(self) -> dict:
        """Dict in wire field order, empty optional fields omitted."""
        data: dict = {"success": self.success}
        if self.original:
            data["original"] = self.original
        if self.translated:
            data["translated"] = self.translated
        if self.results:
            data["results"] = [r.to_wire() for r in self.results]
        data["from"] = self.from_
        data["to"] = self.to
        if self.error:
            data["error"] = self.error
        return data


class LongTranslateResponse(BaseModel):
    """Response of the segmented long-text endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    original: str = ""
    translated: str = ""
    from_: str = Field(default=DEFAULT_SOURCE_LANG, alias="from")
    to: str = DEFAULT_TARGET_LANG
    segment_count: int = Field(default=0, alias="segmentCount")
    errors: list[str] = Field(default_factory=list)

    def to_wire(self) -> dict:
        data = self.model_dump(by_alias=True)
        if not data["errors"]:
            del data["errors"]
        return data
