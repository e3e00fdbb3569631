"""Greedy word-wrap and pagination for the translated PDF, independent of any renderer."""
import logging
from typing import Callable, List
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from models import PageGeometry, PlacedLine


logger = logging.getLogger(__name__)

Measure = Callable[[str], float]

# Errors a width measurement may raise for glyphs the font cannot handle
MEASURE_ERRORS = (KeyError, ValueError, UnicodeError)


def _width(measure: Measure, candidate: str, current: str) -> float:
    try:
        return measure(candidate)
    except MEASURE_ERRORS as e:
        logger.debug("Could not measure %r (%s), measuring without the last word", candidate, e)

    if not current:
        return 0.0
    try:
        return measure(current)
    except MEASURE_ERRORS:
        return 0.0


def layout_text(text: str, measure: Measure, geometry: PageGeometry) -> List[PlacedLine]:
    """
    Place text on pages top to bottom, left-aligned at the margin.

    Each newline-delimited segment is wrapped greedily: words accumulate until
    the next one would overflow ``geometry.max_line_width``, then the line is
    placed and the cursor moves down by ``line_advance``. The end of a segment
    moves the cursor by ``paragraph_advance``. A new page starts whenever the
    cursor drops below ``geometry.bottom_limit``. A word wider than a whole line
    is placed alone on its own line.

    Args:
        text: Sanitized translated text
        measure: Returns the rendered width of a string at the layout font size
        geometry: Page size, margin and font size

    Returns:
        Positioned lines in drawing order
    """
    placed: List[PlacedLine] = []
    page_index = 0
    y = geometry.top

    for segment in text.split("\n"):
        if y < geometry.bottom_limit:
            page_index += 1
            y = geometry.top

        current = ""
        for word in segment.split():
            candidate = f"{current} {word}" if current else word

            if current and _width(measure, candidate, current) > geometry.max_line_width:
                placed.append(PlacedLine(page_index, geometry.margin, y, current))
                y -= geometry.line_advance
                current = word

                if y < geometry.bottom_limit:
                    page_index += 1
                    y = geometry.top
            else:
                current = candidate

        if current:
            placed.append(PlacedLine(page_index, geometry.margin, y, current))
            y -= geometry.paragraph_advance

    return placed


def page_count(lines: List[PlacedLine]) -> int:
    """Number of pages needed for the placed lines (at least one)."""
    return max((line.page_index for line in lines), default=0) + 1
