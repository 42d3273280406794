from __future__ import annotations

import hashlib
import logging
from io import BytesIO
from pathlib import PurePath

from .models import ExtractedDocument

logger = logging.getLogger(__name__)

_TEXT_EXTENSIONS = {".txt", ".md", ".text"}


class UnsupportedDocumentError(ValueError):
    pass


def _compute_doc_id(text: str, content: bytes) -> str:
    seed = text.encode("utf-8", errors="ignore") if text.strip() else content
    return hashlib.sha256(seed).hexdigest()[:16]


def _parse_txt(content: bytes) -> tuple[str, int | None, list[str]]:
    warnings: list[str] = []
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError:
        text = content.decode("utf-8", errors="replace")
        warnings.append("Text file is not valid UTF-8; undecodable bytes were replaced.")
    if not text.strip():
        warnings.append("Text file is empty.")
    return text, None, warnings


def _parse_pdf(content: bytes) -> tuple[str, int | None, list[str]]:
    from pypdf import PdfReader

    warnings: list[str] = []
    try:
        reader = PdfReader(BytesIO(content))
        text_parts: list[str] = []
        for page in reader.pages:
            page_text = (page.extract_text() or "").strip()
            if page_text:
                text_parts.append(page_text)
        if not text_parts:
            warnings.append("No extractable text found in PDF.")
        return "\n".join(text_parts), len(reader.pages), warnings
    except Exception as exc:  # noqa: BLE001 - unreadable uploads become warnings
        logger.warning("document_pdf_parse_failed bytes=%s: %s", len(content), exc)
        warnings.append(f"PDF parsing failed: {exc}")
        return "", None, warnings


def _parse_docx(content: bytes) -> tuple[str, int | None, list[str]]:
    from docx import Document

    warnings: list[str] = []
    try:
        document = Document(BytesIO(content))
        paragraphs = [p.text.strip() for p in document.paragraphs if p.text and p.text.strip()]
        for table in document.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text and cell.text.strip()]
                if cells:
                    paragraphs.append(" | ".join(cells))
        if not paragraphs:
            warnings.append("No extractable text found in DOCX.")
        return "\n".join(paragraphs), None, warnings
    except Exception as exc:  # noqa: BLE001 - unreadable uploads become warnings
        logger.warning("document_docx_parse_failed bytes=%s: %s", len(content), exc)
        warnings.append(f"DOCX parsing failed: {exc}")
        return "", None, warnings


def source_type_for(filename: str) -> str:
    extension = PurePath(filename or "").suffix.lower()
    if extension in _TEXT_EXTENSIONS:
        return "txt"
    if extension == ".pdf":
        return "pdf"
    if extension == ".docx":
        return "docx"
    raise UnsupportedDocumentError(
        f"Unsupported file type '{extension or filename}'. Supported types: .pdf, .docx, .txt, .md"
    )


def extract_document_text(filename: str, content: bytes) -> ExtractedDocument:
    source_type = source_type_for(filename)
    if source_type == "pdf":
        text, page_count, warnings = _parse_pdf(content)
    elif source_type == "docx":
        text, page_count, warnings = _parse_docx(content)
    else:
        text, page_count, warnings = _parse_txt(content)

    return ExtractedDocument(
        doc_id=_compute_doc_id(text, content),
        filename=filename,
        source_type=source_type,
        text=text,
        page_count=page_count,
        parsing_warnings=warnings,
    )
