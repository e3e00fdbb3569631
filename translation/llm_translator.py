"""LLM-based translation: id-tagged batches for slides, single call for PDF text."""
import logging
import re
from typing import List, Dict, Callable, Optional, Iterable, Protocol
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from models import TextUnit, BatchParseResult, RejectedLine
from errors import TranslationError


logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 50

# Leading "[<id>]: " prefix of a translated batch line
BATCH_LINE_PATTERN = re.compile(r"^\[(\d+)\]:\s*(.*)")


# System prompt for id-tagged slide batches
BATCH_SYSTEM_PROMPT = """You are an elite academic and technical translator.
Translate the following numbered list into {language}.

GUIDELINES:
1. Use a highly formal, academic, and professional tone.
2. Maintain technical integrity. Terms like 'Deadlock', 'Race Condition', 'Throughput', 'Latency' should remain in English if they are the academic standard, or use the most accepted formal academic equivalent in {language}.
3. Do not use colloquialisms. Ensure sentences are flowy and grammatically superior.
4. Keep the original numbers in brackets (e.g., [0]: , [1]: ), one item per line.
5. Return ONLY the translated list."""

# System prompt for free-form document text
DOCUMENT_SYSTEM_PROMPT = """You are an elite academic and technical translator.
Translate the provided text into {language}.

GUIDELINES:
1. Use a highly formal, academic, and professional tone.
2. Maintain technical integrity. Keep industry-standard English terms where they are the academic norm.
3. Ensure the translation is contextually consistent and logically sound.
4. Maintain original structure and professional formatting.
5. Return ONLY the translation."""


class Oracle(Protocol):
    async def complete(self, system_instruction: str, user_content: str) -> str:
        ...


ProgressCallback = Callable[[int, int, int], None]


def chunk_units(units: List[TextUnit], batch_size: int = DEFAULT_BATCH_SIZE) -> List[List[TextUnit]]:
    """Split units into contiguous batches of at most batch_size, preserving order."""
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")
    return [units[i:i + batch_size] for i in range(0, len(units), batch_size)]


def render_batch_prompt(batch: Iterable[TextUnit]) -> str:
    """Render one "[id]: text" line per unit, in ascending id order."""
    lines = []
    for unit in sorted(batch, key=lambda u: u.id):
        # One unit per line, the response is parsed line by line
        text = " ".join(unit.text.splitlines())
        lines.append(f"[{unit.id}]: {text}")
    return "\n".join(lines)


def parse_batch_response(response: str, expected_ids: Iterable[int]) -> BatchParseResult:
    """
    Parse an id-tagged oracle response.

    Never raises. Blank lines are ignored; every other unusable line is kept in
    ``rejected`` with a reason. When an id appears more than once the first
    occurrence wins.
    """
    expected = set(expected_ids)
    result = BatchParseResult()

    for line_number, raw_line in enumerate(response.splitlines(), start=1):
        line = raw_line.strip()
        if not line:
            continue

        match = BATCH_LINE_PATTERN.match(line)
        if not match:
            result.rejected.append(RejectedLine(line_number, raw_line, "missing [id]: prefix"))
            continue

        unit_id = int(match.group(1))
        text = match.group(2).strip()

        if unit_id not in expected:
            result.rejected.append(RejectedLine(line_number, raw_line, f"id {unit_id} not in batch"))
        elif unit_id in result.translations:
            result.rejected.append(RejectedLine(line_number, raw_line, f"duplicate id {unit_id}"))
        elif not text:
            result.rejected.append(RejectedLine(line_number, raw_line, f"empty translation for id {unit_id}"))
        else:
            result.translations[unit_id] = text

    return result


def progress_percent(done: int, total: int) -> int:
    return int(round(done / total * 100)) if total > 0 else 100


class BatchTranslator:
    """Translate document content through an oracle, one batch at a time."""

    def __init__(self, oracle: Oracle, batch_size: int = DEFAULT_BATCH_SIZE):
        self.oracle = oracle
        self.batch_size = batch_size

    async def translate_units(
        self,
        units: List[TextUnit],
        target_language: str,
        progress_callback: Optional[ProgressCallback] = None
    ) -> Dict[int, str]:
        """
        Translate text units in sequential id-tagged batches.

        Args:
            units: Units in id order
            target_language: Language name given to the oracle
            progress_callback: Optional callback(batches_done, batches_total, percent),
                called after each batch

        Returns:
            Sparse mapping of unit id to translated text
        """
        batches = chunk_units(units, self.batch_size)
        total = len(batches)
        system_prompt = BATCH_SYSTEM_PROMPT.format(language=target_language)
        translations: Dict[int, str] = {}

        for done, batch in enumerate(batches, start=1):
            response = await self.oracle.complete(system_prompt, render_batch_prompt(batch))
            parsed = parse_batch_response(response, (unit.id for unit in batch))

            for rejected in parsed.rejected:
                logger.warning(
                    "Batch %d/%d: discarded line %d (%s): %r",
                    done, total, rejected.line_number, rejected.reason, rejected.line
                )
            missing = len(batch) - len(parsed.translations)
            if missing:
                logger.warning("Batch %d/%d: %d units untranslated, originals kept", done, total, missing)

            translations.update(parsed.translations)

            if progress_callback:
                progress_callback(done, total, progress_percent(done, total))

        return translations

    async def translate_text(self, text: str, target_language: str) -> str:
        """Translate free-form document text in a single oracle call."""
        system_prompt = DOCUMENT_SYSTEM_PROMPT.format(language=target_language)
        translated = await self.oracle.complete(system_prompt, text)

        if not translated or not translated.strip():
            raise TranslationError("Empty translation received from the oracle.")

        return translated
