"""
Masking engine.

Replaces every whole-word, case-insensitive occurrence of a dictionary
keyword with a run of asterisks of the same length, leaving the rest
of the text untouched.
"""

from __future__ import annotations

import logging
from typing import Iterable, Protocol

from app.config import MASK_CHAR, MAX_INPUT_LENGTH
from app.errors import MaskingFailedError, ValidationError
from app.services import text_loader
from app.utils.regex_patterns import whole_word

logger = logging.getLogger(__name__)


class WordSource(Protocol):
    def list_all_words(self) -> tuple[str, ...]: ...


def validate_input(text: object) -> str:
    """Reject absent, non-string and oversize input; anything else passes."""
    if text is None:
        raise ValidationError("Input cannot be null")
    if not isinstance(text, str):
        raise ValidationError("Input must be a string")
    if len(text) > MAX_INPUT_LENGTH:
        raise ValidationError(
            f"Input exceeds maximum length of {MAX_INPUT_LENGTH} characters"
        )
    if not text.strip():
        logger.info("Empty input provided for masking")
    return text


def _asterisks(match) -> str:
    return MASK_CHAR * len(match.group())


def mask(text: str | None, keywords: Iterable[str]) -> str:
    """
    Return a copy of *text* with each keyword masked.

    Keywords are applied longest first (stable, so equal lengths keep the
    order they were given in), one full scan per keyword over the text
    produced by the previous keyword.
    """
    validate_input(text)

    try:
        ordered = sorted((k for k in keywords if k), key=len, reverse=True)
        if not ordered:
            logger.warning("No keywords available for masking")
            return text

        masked = text
        total = 0
        for keyword in ordered:
            masked, count = whole_word(keyword).subn(_asterisks, masked)
            if count:
                logger.debug("Keyword %s matched %d time(s)", keyword, count)
                total += count

        logger.debug(
            "Masked %d occurrence(s). Original length: %d, masked length: %d",
            total, len(text), len(masked),
        )
        return masked
    except Exception as exc:
        logger.error("Error during text masking: %s", exc, exc_info=True)
        raise MaskingFailedError(
            f"Failed to mask sensitive words: {exc}", cause=exc
        ) from exc


class MaskingService:
    """Masks text against the current snapshot of a keyword store."""

    def __init__(self, store: WordSource) -> None:
        self.store = store

    def mask(self, text: str | None) -> str:
        validate_input(text)
        return mask(text, self.store.list_all_words())

    def mask_document(self, filename: str, payload: bytes) -> str:
        """Extract text from an uploaded document and mask it."""
        text = text_loader.load_text(filename, payload)
        return self.mask(text)
