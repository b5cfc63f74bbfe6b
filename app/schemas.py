"""
Pydantic request / response schemas for the keyword and masking endpoints.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.config import (
    KEYWORD_ALLOWED_PATTERN,
    KEYWORD_MAX_LENGTH,
    KEYWORD_MIN_LENGTH,
    MAX_INPUT_LENGTH,
)


class KeywordRequest(BaseModel):
    word: str = Field(
        ...,
        min_length=KEYWORD_MIN_LENGTH,
        max_length=KEYWORD_MAX_LENGTH,
        pattern=KEYWORD_ALLOWED_PATTERN,
        description="Keyword to redact; letters, underscores and asterisks.",
        examples=["SELECT"],
    )


class KeywordResponse(BaseModel):
    id: int
    word: str
    created_at: datetime
    updated_at: datetime


class MaskRequest(BaseModel):
    input: str = Field(
        ...,
        max_length=MAX_INPUT_LENGTH,
        description="Text whose keywords should be masked.",
        examples=["SELECT * FROM users WHERE id = 1"],
    )

    @field_validator("input")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Input text is required")
        return value


class ErrorResponse(BaseModel):
    status: int
    error: str
    message: str
    path: str
    timestamp: datetime
    error_code: str | None = None
    field_errors: dict[str, str] | None = None
    debug_message: str | None = None
