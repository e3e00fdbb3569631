"""PDF text extraction using pdfplumber."""
import io
import pdfplumber
from pdfminer.psparser import PSException
from pdfplumber.utils.exceptions import PdfminerException
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from models import ExtractedDocument
from errors import ExtractionError


def extract_pdf(data: bytes) -> ExtractedDocument:
    """
    Extract the text layer of a PDF as one string.

    Pages are joined with newlines; no positional segmentation is kept since the
    translated PDF is laid out from scratch.
    """
    pages = []
    try:
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            for page in pdf.pages:
                pages.append(page.extract_text() or "")
    except (PSException, PdfminerException) as e:
        raise ExtractionError(f"Could not read PDF: {e}") from e

    text = "\n".join(pages)
    if not text.strip():
        raise ExtractionError("Could not extract text from PDF.")

    return ExtractedDocument(format="pdf", source=data, text=text)
