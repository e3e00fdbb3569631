"""Ingestion layer - extractors for the supported document formats."""
from pathlib import Path
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from .pdf_extractor import extract_pdf
from .pptx_extractor import extract_pptx
from models import ExtractedDocument
from errors import UnsupportedFormatError


def detect_format(filename: str, data: bytes = b"") -> str:
    """
    Detect the document format from the filename suffix.

    Unknown suffixes are accepted as PDF when the bytes carry the PDF header.
    """
    ext = Path(filename).suffix.lower()

    if ext == ".pptx":
        return "pptx"
    elif ext == ".pdf":
        return "pdf"
    elif data.startswith(b"%PDF"):
        return "pdf"
    else:
        raise UnsupportedFormatError(f"Unsupported file format: {ext or filename}")


def extract_document(data: bytes, format: str) -> ExtractedDocument:
    """Route to the correct extractor based on format."""
    if format == "pptx":
        return extract_pptx(data)
    elif format == "pdf":
        return extract_pdf(data)
    else:
        raise UnsupportedFormatError(f"Unknown format: {format}")


__all__ = ["detect_format", "extract_document", "extract_pdf", "extract_pptx"]
