"""
Compiled regex patterns for keyword validation and whole-word matching.

Keyword patterns are built on demand and cached, since the same
dictionary is applied to every masking request.
"""

import re
from functools import lru_cache

from app.config import KEYWORD_ALLOWED_PATTERN

# use with fullmatch; "$" alone would accept a trailing newline
KEYWORD_WORD: re.Pattern[str] = re.compile(KEYWORD_ALLOWED_PATTERN)


def _ascii_fold(ch: str) -> str:
    if ch.isascii() and ch.isalpha():
        return f"[{ch.lower()}{ch.upper()}]"
    return re.escape(ch)


@lru_cache(maxsize=4096)
def whole_word(keyword: str) -> re.Pattern[str]:
    """
    Return a pattern matching *keyword* only between word boundaries.

    Case folding is ASCII only: ``re.IGNORECASE`` would also let
    ``ſ`` match ``S`` and the Kelvin sign match ``K``. Boundaries stay
    Unicode-aware. Other characters are escaped, so ``*`` in a keyword
    matches a literal asterisk.
    """
    return re.compile(r"\b" + "".join(_ascii_fold(ch) for ch in keyword) + r"\b")
