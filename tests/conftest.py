"""Shared fixtures: generated PPTX/PDF documents and fake oracles."""
import io
import logging
from typing import Callable, List, Optional

import pytest
from pptx import Presentation
from pptx.util import Inches
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from config import Config
from errors import ERROR_LOGGER_NAME, OracleError


def make_pptx(slides: List[List[str]]) -> bytes:
    """Build a deck with one text box per string, using the blank layout."""
    prs = Presentation()
    layout = prs.slide_layouts[6]
    for texts in slides:
        slide = prs.slides.add_slide(layout)
        for i, text in enumerate(texts):
            box = slide.shapes.add_textbox(Inches(1), Inches(1 + i), Inches(6), Inches(0.8))
            box.text_frame.text = text
    buffer = io.BytesIO()
    prs.save(buffer)
    return buffer.getvalue()


def make_multirun_pptx(runs: List[str]) -> bytes:
    """Build a one-slide deck with a single paragraph split into the given runs."""
    prs = Presentation()
    slide = prs.slides.add_slide(prs.slide_layouts[6])
    box = slide.shapes.add_textbox(Inches(1), Inches(1), Inches(6), Inches(0.8))
    paragraph = box.text_frame.paragraphs[0]
    for text in runs:
        paragraph.add_run().text = text
    buffer = io.BytesIO()
    prs.save(buffer)
    return buffer.getvalue()


def make_pdf(lines: List[str]) -> bytes:
    """Build a one-page PDF drawing each string on its own line."""
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    c.setFont("Helvetica", 12)
    y = A4[1] - 72
    for line in lines:
        c.drawString(72, y, line)
        y -= 20
    c.save()
    return buffer.getvalue()


def slide_texts(data: bytes) -> List[str]:
    """Visible text of every text frame, read back with python-pptx."""
    prs = Presentation(io.BytesIO(data))
    return [
        shape.text_frame.text
        for slide in prs.slides
        for shape in slide.shapes
        if shape.has_text_frame
    ]


class EchoOracle:
    """Pass-through oracle: returns the user content unchanged."""

    def __init__(self):
        self.calls = []

    async def complete(self, system_instruction: str, user_content: str) -> str:
        self.calls.append((system_instruction, user_content))
        return user_content


class ScriptedOracle:
    """Oracle answering through a function of the user content."""

    def __init__(self, respond: Callable[[str], str]):
        self.respond = respond
        self.calls = []

    async def complete(self, system_instruction: str, user_content: str) -> str:
        self.calls.append((system_instruction, user_content))
        return self.respond(user_content)


class FailingOracle:
    def __init__(self, status_code: Optional[int] = 503):
        self.status_code = status_code
        self.calls = 0

    async def complete(self, system_instruction: str, user_content: str) -> str:
        self.calls += 1
        raise OracleError("Oracle returned HTTP 503", status_code=self.status_code, body='{"error": "busy"}')


class ClosableOracle(EchoOracle):
    def __init__(self):
        super().__init__()
        self.closed = False

    async def close(self):
        self.closed = True


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def config(tmp_path):
    return Config(
        upload_dir=str(tmp_path / "uploads"),
        error_log_path=str(tmp_path / "error.log"),
    )


@pytest.fixture(autouse=True)
def detach_error_log():
    yield
    logger = logging.getLogger(ERROR_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def three_slide_deck() -> bytes:
    return make_pptx([
        ["Operating Systems", "Deadlock avoidance"],
        ["Race conditions & locks"],
        ["Throughput", "Latency budget"],
    ])
