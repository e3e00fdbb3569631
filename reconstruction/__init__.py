"""Reconstruction layer - rebuild documents with translated text."""
from .builders import rebuild_pptx, rebuild_pdf, render_pdf, default_geometry
from .layout import layout_text, page_count
from .sanitizer import sanitize

__all__ = [
    "rebuild_pptx",
    "rebuild_pdf",
    "render_pdf",
    "default_geometry",
    "layout_text",
    "page_count",
    "sanitize",
]
