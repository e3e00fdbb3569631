"""Data models for the translation pipeline."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Optional


PDF_MEDIA_TYPE = "application/pdf"
PPTX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.presentationml.presentation"


@dataclass(frozen=True)
class ContainerRef:
    """Locator of a text run inside a PPTX archive."""
    part_name: str         # Slide part, e.g. "ppt/slides/slide3.xml"
    occurrence: int        # Index among all <a:t> runs of the part, blank ones included


@dataclass(frozen=True)
class TextUnit:
    """One translatable piece of text."""
    id: int                # 0-based, dense, assigned in discovery order
    text: str              # Source text (XML-unescaped for PPTX runs)
    ref: Optional[ContainerRef] = None


@dataclass
class ExtractedDocument:
    """Document with extracted text ready for translation."""
    format: str                      # "pdf" or "pptx"
    source: bytes                    # Original document bytes
    units: List[TextUnit] = field(default_factory=list)  # PPTX text runs
    text: str = ""                   # PDF text layer


@dataclass(frozen=True)
class RejectedLine:
    """A line of a batch response that could not be used."""
    line_number: int       # 1-based line number in the oracle response
    line: str
    reason: str


@dataclass
class BatchParseResult:
    """Outcome of parsing one oracle batch response."""
    translations: Dict[int, str] = field(default_factory=dict)
    rejected: List[RejectedLine] = field(default_factory=list)


class JobStatus(str, Enum):
    STARTING = "starting"
    EXTRACTING = "extracting"
    TRANSLATING = "translating"
    GENERATING = "generating"
    COMPLETED = "completed"
    ERROR = "error"
    UNKNOWN = "unknown"    # Sentinel returned for absent jobs, never stored


@dataclass
class JobRecord:
    """Current status of one translation job."""
    job_id: str
    status: JobStatus
    message: str
    updated_at: float = 0.0

    def to_dict(self) -> Dict[str, str]:
        return {"status": self.status.value, "message": self.message}


@dataclass(frozen=True)
class PageGeometry:
    """Fixed page and font parameters used by the PDF layout."""
    width: float
    height: float
    margin: float = 50.0
    font_size: float = 12.0

    @property
    def max_line_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def top(self) -> float:
        return self.height - self.margin

    @property
    def bottom_limit(self) -> float:
        # Cursor positions below this start a new page
        return self.margin + self.font_size

    @property
    def line_advance(self) -> float:
        return self.font_size + 5

    @property
    def paragraph_advance(self) -> float:
        return self.font_size + 10


@dataclass(frozen=True)
class PlacedLine:
    """A line of text positioned on an output page (PDF coordinates, bottom-left origin)."""
    page_index: int
    x: float
    y: float
    text: str


@dataclass
class TranslatedDocument:
    """Rebuilt document returned by the pipeline."""
    content: bytes
    media_type: str
    filename: str
