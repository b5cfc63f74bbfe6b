"""
Keyword store.

Authoritative, in-memory set of keyword words. Enforces case-insensitive
uniqueness by normalizing every word to upper case, and hands the masking
engine an immutable snapshot of the live words.
"""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass, replace
from datetime import datetime, timezone

from app.config import ERROR_CODES, KEYWORD_MAX_LENGTH, KEYWORD_MIN_LENGTH
from app.errors import DuplicateError, NotFoundError, ValidationError
from app.utils.regex_patterns import KEYWORD_WORD

logger = logging.getLogger(__name__)

_RESOURCE = "Keyword"


@dataclass(frozen=True)
class Keyword:
    id: int
    word: str
    created_at: datetime
    updated_at: datetime


def _now() -> datetime:
    return datetime.now(timezone.utc)


def normalize_word(word: str) -> str:
    """Return the canonical (upper-case) form used for storage and comparison."""
    return word.upper()


def validate_word(word: object) -> str:
    """
    Check *word* against the keyword constraints and return it normalized.

    Raises ``ValidationError`` for non-strings, bad lengths, and characters
    other than letters, underscores and asterisks.
    """
    code = ERROR_CODES["KEYWORD_VALIDATION_FAILED"]
    if not isinstance(word, str):
        raise ValidationError("Keyword word is required", code)
    if not KEYWORD_MIN_LENGTH <= len(word) <= KEYWORD_MAX_LENGTH:
        raise ValidationError(
            f"Keyword must be between {KEYWORD_MIN_LENGTH} and "
            f"{KEYWORD_MAX_LENGTH} characters",
            code,
        )
    if not KEYWORD_WORD.fullmatch(word):
        raise ValidationError(
            "Keyword can only contain letters, underscores, and asterisks",
            code,
        )
    return normalize_word(word)


class KeywordStore:
    """
    Thread-safe keyword dictionary.

    Two maps are kept in step under one lock: ``id -> Keyword`` and
    ``normalized word -> id``. Ids come from a counter and are never reused.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        # insertion order == id order; updates keep their slot
        self._by_id: dict[int, Keyword] = {}
        self._id_by_word: dict[str, int] = {}
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_id)

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str):
            return False
        with self._lock:
            return normalize_word(word) in self._id_by_word

    # -- mutations -----------------------------------------------------------

    def create(self, word: str) -> Keyword:
        normalized = validate_word(word)
        with self._lock:
            if normalized in self._id_by_word:
                raise DuplicateError(_RESOURCE, "word", normalized)
            now = _now()
            keyword = Keyword(
                id=next(self._ids),
                word=normalized,
                created_at=now,
                updated_at=now,
            )
            self._by_id[keyword.id] = keyword
            self._id_by_word[normalized] = keyword.id
        logger.info("Created keyword %s with id %d", normalized, keyword.id)
        return keyword

    def update(self, keyword_id: int, word: str) -> Keyword:
        with self._lock:
            current = self._by_id.get(keyword_id)
            if current is None:
                raise NotFoundError(_RESOURCE, "id", keyword_id)
            normalized = validate_word(word)
            owner = self._id_by_word.get(normalized)
            if owner is not None and owner != keyword_id:
                raise DuplicateError(_RESOURCE, "word", normalized)

            updated = replace(current, word=normalized, updated_at=_now())
            del self._id_by_word[current.word]
            self._id_by_word[normalized] = keyword_id
            self._by_id[keyword_id] = updated
        logger.info(
            "Updated keyword %d: %s -> %s", keyword_id, current.word, normalized
        )
        return updated

    def delete(self, keyword_id: int) -> None:
        with self._lock:
            keyword = self._by_id.pop(keyword_id, None)
            if keyword is None:
                raise NotFoundError(_RESOURCE, "id", keyword_id)
            del self._id_by_word[keyword.word]
        logger.info("Deleted keyword %s with id %d", keyword.word, keyword_id)

    # -- reads ---------------------------------------------------------------

    def get_by_id(self, keyword_id: int) -> Keyword:
        with self._lock:
            keyword = self._by_id.get(keyword_id)
        if keyword is None:
            raise NotFoundError(_RESOURCE, "id", keyword_id)
        return keyword

    def list_all(self) -> list[Keyword]:
        with self._lock:
            return list(self._by_id.values())

    def list_all_words(self) -> tuple[str, ...]:
        """Snapshot of the live words in id (creation) order."""
        with self._lock:
            return tuple(k.word for k in self._by_id.values())
