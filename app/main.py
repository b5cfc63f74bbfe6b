"""
FastAPI application entry point.

Owns the keyword store, exposes keyword CRUD under ``/api/keywords``,
and the ``POST /api/keywords/mask`` and ``POST /api/keywords/mask-file``
masking endpoints. Core errors are translated into ``ErrorResponse`` bodies.
"""

from __future__ import annotations

import io
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from http import HTTPStatus

from fastapi import Depends, FastAPI, File, Request, Response, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, StreamingResponse

from app.config import ENABLE_CACHE, ERROR_CODES, LOG_LEVEL, SEED_KEYWORDS
from app.errors import (
    DuplicateError,
    KeywordMaskError,
    MaskingFailedError,
    NotFoundError,
    ValidationError,
)
from app.schemas import ErrorResponse, KeywordRequest, KeywordResponse, MaskRequest
from app.services.keyword_cache import CachedKeywordStore
from app.services.keyword_store import Keyword, KeywordStore
from app.services.masking_engine import MaskingService
from app.utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def build_store(seed: list[str] | None = None, cached: bool = ENABLE_CACHE):
    """Create the keyword store the app serves, optionally seeded."""
    store = KeywordStore()
    for word in seed or []:
        if word not in store:
            store.create(word)
    return CachedKeywordStore(store) if cached else store


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and give every app start a fresh keyword store."""
    setup_logging(LOG_LEVEL)
    app.state.keyword_store = build_store(SEED_KEYWORDS)
    logger.info("Keyword store ready with %d keyword(s)", len(app.state.keyword_store))
    yield


app = FastAPI(
    title="Keyword Masking Service",
    version="1.0.0",
    lifespan=lifespan,
)

# -- CORS (allow all origins for local / dev usage) -------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# -- Dependencies ------------------------------------------------------------

def get_keyword_store(request: Request):
    return request.app.state.keyword_store


def get_masking_service(store=Depends(get_keyword_store)) -> MaskingService:
    return MaskingService(store)


def _to_response(keyword: Keyword) -> KeywordResponse:
    return KeywordResponse(
        id=keyword.id,
        word=keyword.word,
        created_at=keyword.created_at,
        updated_at=keyword.updated_at,
    )


# -- Error handling ----------------------------------------------------------

_STATUS_BY_ERROR: list[tuple[type[KeywordMaskError], HTTPStatus]] = [
    (NotFoundError, HTTPStatus.NOT_FOUND),
    (DuplicateError, HTTPStatus.CONFLICT),
    (ValidationError, HTTPStatus.BAD_REQUEST),
    (MaskingFailedError, HTTPStatus.UNPROCESSABLE_ENTITY),
]


def _error_body(
    status: HTTPStatus,
    message: str,
    path: str,
    error_code: str | None = None,
    **extra,
) -> JSONResponse:
    body = ErrorResponse(
        status=status.value,
        error=status.phrase,
        message=message,
        path=path,
        timestamp=datetime.now(timezone.utc),
        error_code=error_code,
        **extra,
    )
    return JSONResponse(
        status_code=status.value,
        content=body.model_dump(mode="json", exclude_none=True),
    )


@app.exception_handler(KeywordMaskError)
async def keyword_mask_error_handler(request: Request, exc: KeywordMaskError):
    status = next(
        (s for kind, s in _STATUS_BY_ERROR if isinstance(exc, kind)),
        HTTPStatus.INTERNAL_SERVER_ERROR,
    )
    if isinstance(exc, MaskingFailedError):
        logger.error("Masking failed on %s: %s", request.url.path, exc.message)
        return _error_body(
            status,
            "Text masking failed",
            request.url.path,
            exc.error_code,
            debug_message=repr(exc.cause) if exc.cause else exc.message,
        )

    logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
    return _error_body(status, exc.message, request.url.path, exc.error_code)


_LOCATIONS = {"body", "path", "query", "header", "cookie"}


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    field_errors: dict[str, str] = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in _LOCATIONS:
            loc = loc[1:]
        field_errors[".".join(loc) or "body"] = err.get("msg", "Invalid value")
    logger.warning("Validation failed on %s: %s", request.url.path, field_errors)
    return _error_body(
        HTTPStatus.BAD_REQUEST,
        "Validation failed for input parameters",
        request.url.path,
        ERROR_CODES["INPUT_VALIDATION_FAILED"],
        field_errors=field_errors,
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s: %s", request.url.path, exc, exc_info=exc)
    return _error_body(
        HTTPStatus.INTERNAL_SERVER_ERROR,
        "An unexpected error occurred",
        request.url.path,
        ERROR_CODES["SERVICE_ERROR"],
        debug_message=repr(exc),
    )


# -- Routes ------------------------------------------------------------------

@app.get("/health", include_in_schema=False)
async def health():
    return {"status": "ok"}


@app.post("/api/keywords", response_model=KeywordResponse, status_code=201)
def create_keyword(payload: KeywordRequest, store=Depends(get_keyword_store)):
    """Add a keyword to the dictionary."""
    logger.info("Creating new keyword: %s", payload.word)
    return _to_response(store.create(payload.word))


@app.get("/api/keywords", response_model=list[KeywordResponse])
def list_keywords(store=Depends(get_keyword_store)):
    """List every keyword."""
    keywords = store.list_all()
    logger.debug("Found %d keywords", len(keywords))
    return [_to_response(k) for k in keywords]


@app.get("/api/keywords/{keyword_id}", response_model=KeywordResponse)
def get_keyword(keyword_id: int, store=Depends(get_keyword_store)):
    """Fetch a keyword by id."""
    return _to_response(store.get_by_id(keyword_id))


@app.put("/api/keywords/{keyword_id}", response_model=KeywordResponse)
def update_keyword(
    keyword_id: int,
    payload: KeywordRequest,
    store=Depends(get_keyword_store),
):
    """Replace the word of an existing keyword."""
    logger.info("Updating keyword with ID: %d", keyword_id)
    return _to_response(store.update(keyword_id, payload.word))


@app.delete("/api/keywords/{keyword_id}", status_code=204)
def delete_keyword(keyword_id: int, store=Depends(get_keyword_store)):
    """Remove a keyword."""
    logger.info("Deleting keyword with ID: %d", keyword_id)
    store.delete(keyword_id)
    return Response(status_code=204)


@app.post("/api/keywords/mask", response_class=PlainTextResponse)
def mask_text(
    payload: MaskRequest,
    service: MaskingService = Depends(get_masking_service),
):
    """Mask every dictionary keyword in the submitted text."""
    logger.info("Masking sensitive words in input text (length: %d)", len(payload.input))
    masked = service.mask(payload.input)
    return PlainTextResponse(masked)


@app.post("/api/keywords/mask-file")
async def mask_file(
    file: UploadFile = File(...),
    service: MaskingService = Depends(get_masking_service),
):
    """Mask the text of an uploaded document and return it as a download."""
    filename = file.filename or ""
    content = await file.read()
    masked = service.mask_document(filename, content)

    dl_filename = f"masked_{filename.rsplit('.', 1)[0] or 'output'}.txt"
    return StreamingResponse(
        io.BytesIO(masked.encode("utf-8")),
        media_type="text/plain",
        headers={"Content-Disposition": f'attachment; filename="{dl_filename}"'},
    )
