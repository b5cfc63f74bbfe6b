"""
Configuration module for the Keyword Masking Service.

Centralizes keyword constraints, masking bounds, error codes,
upload settings, and logging defaults.
"""

import os

# ---------------------------------------------------------------------------
# Masking input bounds
# ---------------------------------------------------------------------------
MAX_INPUT_LENGTH: int = 10_000

MASK_CHAR: str = "*"

# ---------------------------------------------------------------------------
# Keyword word constraints (stored upper-cased)
# ---------------------------------------------------------------------------
KEYWORD_MIN_LENGTH: int = 1
KEYWORD_MAX_LENGTH: int = 255

# Letters, underscores and asterisks only
KEYWORD_ALLOWED_PATTERN: str = r"^[a-zA-Z_*]+$"

# ---------------------------------------------------------------------------
# Error kind → client-facing error code
# ---------------------------------------------------------------------------
ERROR_CODES: dict[str, str] = {
    "KEYWORD_NOT_FOUND": "KEYWORD_001",
    "KEYWORD_ALREADY_EXISTS": "KEYWORD_002",
    "KEYWORD_VALIDATION_FAILED": "KEYWORD_003",
    "INPUT_VALIDATION_FAILED": "INPUT_001",
    "MASKING_FAILED": "MASK_001",
    "INVALID_MASKING_INPUT": "MASK_002",
    "SERVICE_ERROR": "SVC_002",
}

# ---------------------------------------------------------------------------
# File masking
# ---------------------------------------------------------------------------
ALLOWED_EXTENSIONS: set[str] = {".txt", ".csv", ".pdf", ".docx"}

# ---------------------------------------------------------------------------
# Runtime switches (env overridable)
# ---------------------------------------------------------------------------
LOG_LEVEL: str = os.environ.get("KEYWORD_MASK_LOG_LEVEL", "INFO").upper()

ENABLE_CACHE: bool = os.environ.get("KEYWORD_MASK_CACHE", "1") != "0"

# Comma separated words loaded into the store at startup
SEED_KEYWORDS: list[str] = [
    w.strip()
    for w in os.environ.get("KEYWORD_MASK_SEED", "").split(",")
    if w.strip()
]
