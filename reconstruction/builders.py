"""Document reconstruction - rebuild files with translated text."""
import io
import itertools
import logging
import zipfile
from collections import defaultdict
from typing import Dict, List
from xml.sax.saxutils import escape
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from reportlab.lib.pagesizes import A4
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from models import ExtractedDocument, TextUnit, PageGeometry, PlacedLine
from config import Config
from ingestion.pptx_extractor import TEXT_RUN_PATTERN, open_archive, read_member
from .layout import layout_text, page_count
from .sanitizer import sanitize


logger = logging.getLogger(__name__)


def with_source_edges(source: str, translated: str) -> str:
    """Give the translation the leading/trailing whitespace of the source run."""
    core = source.strip()
    if not core:
        return source
    start = source.index(core)
    return f"{source[:start]}{translated.strip()}{source[start + len(core):]}"


def _replace_runs(xml: str, units: Dict[int, TextUnit], translations: Dict[int, str]) -> str:
    """Rewrite the runs of one slide part whose occurrence index is a unit locator."""
    occurrences = itertools.count()

    def replace(match):
        unit = units.get(next(occurrences))
        if unit is None:
            return match.group(0)
        translated = with_source_edges(unit.text, translations.get(unit.id) or unit.text)
        return f"{match.group(1)}{escape(sanitize(translated))}{match.group(3)}"

    rewritten = TEXT_RUN_PATTERN.sub(replace, xml)

    found = next(occurrences)
    stale = [unit.id for occurrence, unit in units.items() if occurrence >= found]
    if stale:
        logger.warning("Units %s point past the last text run of their part", stale)
    return rewritten


def rebuild_pptx(extracted: ExtractedDocument, translations: Dict[int, str]) -> bytes:
    """
    Rebuild the PPTX archive with translated text runs.

    Units are addressed by their locator (slide part + run occurrence). Units
    missing from ``translations`` keep their original text. Every entry that
    holds no unit is copied unchanged, in the original archive order.
    """
    units_by_part: Dict[str, Dict[int, TextUnit]] = defaultdict(dict)
    for unit in extracted.units:
        units_by_part[unit.ref.part_name][unit.ref.occurrence] = unit

    output = io.BytesIO()
    with open_archive(extracted.source) as source, zipfile.ZipFile(output, "w") as target:
        for info in source.infolist():
            units = units_by_part.get(info.filename)
            if units:
                xml = read_member(source, info.filename, decode=True)
                data = _replace_runs(xml, units, translations).encode("utf-8")
            else:
                data = read_member(source, info.filename)

            target.writestr(info, data)

    return output.getvalue()


def default_geometry(config: Config) -> PageGeometry:
    """A4 page with the configured margin and font size."""
    width, height = A4
    return PageGeometry(
        width=width,
        height=height,
        margin=config.pdf_margin,
        font_size=config.pdf_font_size,
    )


def render_pdf(lines: List[PlacedLine], geometry: PageGeometry, font_name: str = "Helvetica") -> bytes:
    """Draw positioned lines with ReportLab, one page per page index."""
    by_page: Dict[int, List[PlacedLine]] = defaultdict(list)
    for line in lines:
        by_page[line.page_index].append(line)

    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=(geometry.width, geometry.height))

    for page_index in range(page_count(lines)):
        if page_index > 0:
            c.showPage()
        # showPage() resets the graphics state, font included
        c.setFont(font_name, geometry.font_size)
        for line in by_page[page_index]:
            c.drawString(line.x, line.y, sanitize(line.text))

    c.save()
    return buffer.getvalue()


def rebuild_pdf(translated_text: str, config: Config) -> bytes:
    """
    Lay out the translated text from scratch on blank A4 pages.

    The text is sanitized once before layout so measurement and drawing see the
    same glyphs.
    """
    geometry = default_geometry(config)
    font_name = config.pdf_font_name
    font_size = geometry.font_size

    def measure(text: str) -> float:
        return pdfmetrics.stringWidth(text, font_name, font_size)

    lines = layout_text(sanitize(translated_text), measure, geometry)
    logger.info("Laid out %d lines on %d pages", len(lines), page_count(lines))
    return render_pdf(lines, geometry, font_name)
