"""
Error taxonomy shared by the keyword store and the masking engine.

Every error carries a stable ``error_code`` so the HTTP layer can
translate it without inspecting messages.
"""

from __future__ import annotations

from app.config import ERROR_CODES


class KeywordMaskError(Exception):
    """Base class for every error the core reports to its callers."""

    error_code: str = ERROR_CODES["SERVICE_ERROR"]

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(KeywordMaskError):
    error_code = ERROR_CODES["KEYWORD_NOT_FOUND"]

    def __init__(self, resource: str, field: str, value: object) -> None:
        super().__init__(f"{resource} not found with {field}: '{value}'")
        self.resource = resource
        self.field = field
        self.value = value


class DuplicateError(KeywordMaskError):
    error_code = ERROR_CODES["KEYWORD_ALREADY_EXISTS"]

    def __init__(self, resource: str, field: str, value: object) -> None:
        super().__init__(f"{resource} already exists with {field}: '{value}'")
        self.resource = resource
        self.field = field
        self.value = value


class ValidationError(KeywordMaskError):
    """Rejected input: null / oversize masking text or a malformed keyword."""

    error_code = ERROR_CODES["INVALID_MASKING_INPUT"]

    def __init__(self, message: str, error_code: str | None = None) -> None:
        super().__init__(message)
        if error_code is not None:
            self.error_code = error_code


class MaskingFailedError(KeywordMaskError):
    """Unexpected fault during the matching pass; ``cause`` keeps the original."""

    error_code = ERROR_CODES["MASKING_FAILED"]

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause
