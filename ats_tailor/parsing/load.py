from __future__ import annotations

import hashlib
import logging
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".txt", ".pdf", ".docx")


class LoadedDocument(BaseModel):
    doc_id: str
    source_type: str
    text: str
    warnings: list[str] = Field(default_factory=list)

    @field_validator("source_type")
    @classmethod
    def _validate_source_type(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in {"pdf", "docx", "txt"}:
            raise ValueError("source_type must be one of: pdf, docx, txt")
        return normalized


def _compute_doc_id(text: str, file_path: Path) -> str:
    seed = text if text.strip() else file_path.name
    return hashlib.sha256(seed.encode("utf-8", errors="ignore")).hexdigest()[:16]


def _read_txt(file_path: Path) -> tuple[str, list[str]]:
    return file_path.read_text(encoding="utf-8", errors="replace"), []


def _read_pdf(file_path: Path) -> tuple[str, list[str]]:
    from pypdf import PdfReader

    warnings: list[str] = []
    try:
        reader = PdfReader(str(file_path))
        pages = [(page.extract_text() or "").strip() for page in reader.pages]
    except Exception as exc:
        logger.warning("pdf_read_failed path=%s error=%s", file_path, exc)
        return "", [f"PDF parsing failed: {exc}"]

    text_parts = [page for page in pages if page]
    if not text_parts:
        warnings.append("No extractable text found in PDF.")
    return "\n".join(text_parts), warnings


def _read_docx(file_path: Path) -> tuple[str, list[str]]:
    from docx import Document

    warnings: list[str] = []
    try:
        document = Document(str(file_path))
        paragraphs = [p.text.strip() for p in document.paragraphs if p.text and p.text.strip()]
    except Exception as exc:
        logger.warning("docx_read_failed path=%s error=%s", file_path, exc)
        return "", [f"DOCX parsing failed: {exc}"]

    if not paragraphs:
        warnings.append("No extractable text found in DOCX.")
    return "\n".join(paragraphs), warnings


def load_document(file_path: str | Path) -> LoadedDocument:
    """Read a .txt, .pdf or .docx file into plain text for the parsers."""
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Input document not found: '{path}'")

    extension = path.suffix.lower()
    if extension == ".txt":
        text, warnings = _read_txt(path)
    elif extension == ".pdf":
        text, warnings = _read_pdf(path)
    elif extension == ".docx":
        text, warnings = _read_docx(path)
    else:
        raise NotImplementedError(
            f"Unsupported file type '{extension}'. Supported types: {', '.join(SUPPORTED_EXTENSIONS)}"
        )

    return LoadedDocument(
        doc_id=_compute_doc_id(text=text, file_path=path),
        source_type=extension.lstrip("."),
        text=text,
        warnings=warnings,
    )
