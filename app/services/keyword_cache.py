"""
Read-through cache in front of a keyword store.

``list_all`` and ``list_all_words`` are served from memory until the next
mutation; every create, update and delete drops both cached views.
"""

from __future__ import annotations

import logging
import threading

from app.services.keyword_store import Keyword, KeywordStore

logger = logging.getLogger(__name__)


class CachedKeywordStore:
    """Same interface as :class:`KeywordStore`, with cached list views."""

    def __init__(self, store: KeywordStore) -> None:
        self._store = store
        self._lock = threading.RLock()
        self._all: list[Keyword] | None = None
        self._words: tuple[str, ...] | None = None

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, word: object) -> bool:
        return word in self._store

    def _evict(self) -> None:
        self._all = None
        self._words = None
        logger.debug("Keyword cache evicted")

    # Mutations hold the cache lock across the store call so a concurrent
    # reader cannot repopulate the cache with a pre-mutation view.

    def create(self, word: str) -> Keyword:
        with self._lock:
            try:
                return self._store.create(word)
            finally:
                self._evict()

    def update(self, keyword_id: int, word: str) -> Keyword:
        with self._lock:
            try:
                return self._store.update(keyword_id, word)
            finally:
                self._evict()

    def delete(self, keyword_id: int) -> None:
        with self._lock:
            try:
                self._store.delete(keyword_id)
            finally:
                self._evict()

    def get_by_id(self, keyword_id: int) -> Keyword:
        return self._store.get_by_id(keyword_id)

    def list_all(self) -> list[Keyword]:
        with self._lock:
            if self._all is None:
                self._all = self._store.list_all()
            else:
                logger.debug("Keyword list served from cache")
            return list(self._all)

    def list_all_words(self) -> tuple[str, ...]:
        with self._lock:
            if self._words is None:
                self._words = self._store.list_all_words()
            else:
                logger.debug("Keyword words served from cache")
            return self._words
