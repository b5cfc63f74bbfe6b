from __future__ import annotations

import io
import os
import zipfile
from typing import List

import pandas as pd

from app.config import ALLOWED_EXTENSIONS
from app.errors import ValidationError


def extension_of(filename: str) -> str:
    return os.path.splitext(filename or "")[1].lower()


def _read_pdf(payload: bytes) -> str:
    import pdfplumber
    from pdfplumber.utils.exceptions import PdfminerException

    pages: List[str] = []
    try:
        with pdfplumber.open(io.BytesIO(payload)) as pdf:
            for page in pdf.pages:
                text = page.extract_text()
                if text:
                    pages.append(text)
    except PdfminerException as exc:
        raise ValueError(f"not a readable PDF ({exc})") from exc
    return "\n".join(pages)


def _read_docx(payload: bytes) -> str:
    from docx import Document
    from docx.opc.exceptions import PackageNotFoundError

    try:
        doc = Document(io.BytesIO(payload))
    except (zipfile.BadZipFile, PackageNotFoundError, KeyError) as exc:
        raise ValueError(f"not a readable DOCX ({exc})") from exc
    return "\n".join(p.text for p in doc.paragraphs if p.text.strip())


def load_text(filename: str, payload: bytes) -> str:
    """Return the plain text carried by an uploaded document."""
    ext = extension_of(filename)
    if ext not in ALLOWED_EXTENSIONS:
        raise ValidationError(
            f"Unsupported file type: '{ext}'. Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
        )

    try:
        if ext == ".txt":
            return payload.decode("utf-8")

        if ext == ".csv":
            df = pd.read_csv(io.BytesIO(payload), dtype=str).fillna("")
            return " ".join(df.astype(str).values.flatten())

        if ext == ".pdf":
            return _read_pdf(payload)

        return _read_docx(payload)
    except (UnicodeDecodeError, ValueError) as exc:
        raise ValidationError(f"Could not read '{filename}': {exc}") from exc
