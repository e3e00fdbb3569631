"""PPTX text extraction straight from the slide XML parts."""
import io
import re
import zipfile
import zlib
from typing import Iterator, List, Tuple
from xml.sax.saxutils import unescape
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from models import ContainerRef, TextUnit, ExtractedDocument
from errors import ExtractionError


# Slide parts live at ppt/slides/slide<N>.xml; layouts, masters and _rels are ignored
SLIDE_PART_PATTERN = re.compile(r"^ppt/slides/slide\d+\.xml$")

# A DrawingML text run: <a:t>…</a:t>, optionally with attributes on the opening tag
TEXT_RUN_PATTERN = re.compile(r"(<a:t(?:\s[^>]*)?>)([^<]*)(</a:t>)")

_XML_ENTITIES = {"&quot;": '"', "&apos;": "'"}

# Errors raised while inflating or decoding a damaged archive member
MEMBER_READ_ERRORS = (zipfile.BadZipFile, zlib.error, EOFError, UnicodeDecodeError)


def unescape_run(raw: str) -> str:
    """Decode the XML entities of a run body."""
    return unescape(raw, _XML_ENTITIES)


def is_slide_part(name: str) -> bool:
    return bool(SLIDE_PART_PATTERN.match(name))


def open_archive(data: bytes) -> zipfile.ZipFile:
    """Open PPTX bytes as a zip archive, raising ExtractionError if they aren't one."""
    try:
        return zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as e:
        raise ExtractionError(f"Not a valid PPTX container: {e}") from e


def read_member(archive: zipfile.ZipFile, name: str, decode: bool = False):
    """Read one archive member (decoded as UTF-8 when asked), raising ExtractionError if it is damaged."""
    try:
        data = archive.read(name)
        return data.decode("utf-8") if decode else data
    except MEMBER_READ_ERRORS as e:
        raise ExtractionError(f"Unreadable part {name}: {e}") from e


def iter_runs(xml: str) -> Iterator[Tuple[int, str]]:
    """Yield (occurrence, unescaped text) for every text run of a slide part, blank runs included."""
    for occurrence, match in enumerate(TEXT_RUN_PATTERN.finditer(xml)):
        yield occurrence, unescape_run(match.group(2))


def extract_pptx(data: bytes) -> ExtractedDocument:
    """
    Extract the text runs of every slide, in archive order.

    Each non-blank run becomes a TextUnit whose id is its discovery index and
    whose ref locates the run (slide part + occurrence) for reassembly.
    """
    units: List[TextUnit] = []

    with open_archive(data) as archive:
        for name in archive.namelist():
            if not is_slide_part(name):
                continue

            xml = read_member(archive, name, decode=True)
            for occurrence, text in iter_runs(xml):
                if not text.strip():
                    continue
                units.append(TextUnit(
                    id=len(units),
                    text=text,
                    ref=ContainerRef(part_name=name, occurrence=occurrence),
                ))

    if not units:
        raise ExtractionError("No text found in presentation.")

    return ExtractedDocument(format="pptx", source=data, units=units)
