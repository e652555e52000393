# justyou/services/parse_utils.py
"""
Helpers to pull plain text out of uploaded resume files.
- PDF  -> pdfminer.six
- DOCX -> python-docx
- TXT  -> decode bytes
"""

import io
import logging
from pathlib import Path
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = (".pdf", ".docx", ".txt")


def _is_pdf_bytes(b: bytes) -> bool:
    return b.startswith(b"%PDF")


def _is_docx_bytes(b: bytes) -> bool:
    # docx is a zip archive
    return b.startswith(b"PK")


def parse_text_bytes(b: bytes, encoding: str = "utf-8") -> str:
    return b.decode(encoding, errors="replace")


def parse_docx_bytes(b: bytes) -> str:
    from docx import Document

    doc = Document(io.BytesIO(b))
    paras = [p.text.strip() for p in doc.paragraphs if p.text and p.text.strip()]
    return "\n".join(paras)


def parse_pdf_bytes(b: bytes) -> str:
    from pdfminer.high_level import extract_text

    return extract_text(io.BytesIO(b))


def is_allowed_filename(filename: Optional[str]) -> bool:
    return Path(filename or "").suffix.lower() in ALLOWED_EXTENSIONS


def extract_text_auto(b: bytes, filename: Optional[str] = None) -> Tuple[str, str]:
    """
    Detect the type from magic bytes (then the extension) and parse.
    Returns (text, type_str), type_str one of "pdf", "docx", "txt", "unknown",
    or "<type>_fallback" when the parser failed and the bytes were decoded.
    """
    if not b:
        return "", "unknown"

    ext = Path(filename or "").suffix.lower()
    if _is_pdf_bytes(b) or ext == ".pdf":
        try:
            return parse_pdf_bytes(b).strip(), "pdf"
        except Exception:
            logger.warning("PDF text extraction failed for %s", filename, exc_info=True)
            return parse_text_bytes(b), "pdf_fallback"
    if _is_docx_bytes(b) or ext == ".docx":
        try:
            return parse_docx_bytes(b), "docx"
        except Exception:
            logger.warning("DOCX text extraction failed for %s", filename, exc_info=True)
            return parse_text_bytes(b), "docx_fallback"

    return parse_text_bytes(b), "txt"
