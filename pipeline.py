"""Main translation pipeline orchestrator."""
import argparse
import asyncio
import logging
import os
import time
from pathlib import Path
from typing import Optional
import sys
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import Config
from errors import configure_error_log, log_pipeline_error
from jobs import JobStore
from models import ExtractedDocument, JobStatus, TranslatedDocument, PDF_MEDIA_TYPE, PPTX_MEDIA_TYPE
from ingestion import detect_format, extract_document
from translation import BatchTranslator, ChatCompletionOracle
from translation.llm_translator import Oracle
from reconstruction import rebuild_pptx, rebuild_pdf


logger = logging.getLogger(__name__)


def default_job_id() -> str:
    """Job id derived from the current time in milliseconds."""
    return str(int(time.time() * 1000))


def output_filename(filename: str, format: str) -> str:
    stem = Path(filename).stem or "document"
    return f"{stem}_translated.{format}"


class TranslationPipeline:
    """Orchestrates extraction, translation and reconstruction for one upload at a time."""

    def __init__(
        self,
        config: Optional[Config] = None,
        oracle: Optional[Oracle] = None,
        jobs: Optional[JobStore] = None
    ):
        self.config = config if config is not None else Config.from_env()
        self.config.ensure_directories()
        configure_error_log(self.config.error_log_path)

        self.oracle = oracle if oracle is not None else ChatCompletionOracle(self.config)
        self.translator = BatchTranslator(self.oracle, batch_size=self.config.batch_size)
        self.jobs = jobs if jobs is not None else JobStore(retention_seconds=self.config.job_retention_seconds)

    async def translate_bytes(
        self,
        data: bytes,
        filename: str,
        target_language: Optional[str] = None,
        job_id: Optional[str] = None
    ) -> TranslatedDocument:
        """
        Translate an uploaded document.

        Every failure is written to the error log and recorded on the job as
        ``error`` before being re-raised; no bytes are returned for a failed job.

        Args:
            data: Raw document bytes
            filename: Original filename, used for format detection
            target_language: Language name for the oracle (config default if not provided)
            job_id: Job id for status updates (time-derived if not provided)

        Returns:
            The rebuilt document
        """
        job_id = job_id or default_job_id()
        target_language = target_language or self.config.default_target_language
        self.jobs.set(job_id, JobStatus.STARTING, "Initializing...")

        try:
            format_type = detect_format(filename, data)
            logger.info("Job %s: translating %s (%s) into %s", job_id, filename, format_type, target_language)

            if format_type == "pptx":
                content = await self._translate_pptx(job_id, data, target_language)
                media_type = PPTX_MEDIA_TYPE
                done_message = "Slide translation ready!"
            else:
                content = await self._translate_pdf(job_id, data, target_language)
                media_type = PDF_MEDIA_TYPE
                done_message = "PDF translation ready!"

        except Exception as e:
            log_pipeline_error(e, job_id)
            logger.error("Job %s failed: %s", job_id, e)
            self.jobs.set(job_id, JobStatus.ERROR, str(e))
            raise

        self.jobs.set(job_id, JobStatus.COMPLETED, done_message)
        logger.info("Job %s completed (%d bytes)", job_id, len(content))
        return TranslatedDocument(
            content=content,
            media_type=media_type,
            filename=output_filename(filename, format_type),
        )

    async def _extract(self, data: bytes, format_type: str) -> ExtractedDocument:
        return await asyncio.to_thread(extract_document, data, format_type)

    async def _translate_pptx(self, job_id: str, data: bytes, target_language: str) -> bytes:
        self.jobs.set(job_id, JobStatus.EXTRACTING, "Extracting slides...")
        extracted = await self._extract(data, "pptx")
        logger.info("Job %s: %d text runs extracted", job_id, len(extracted.units))

        self.jobs.set(job_id, JobStatus.TRANSLATING, "Translating content... (0%)")

        def progress_callback(done: int, total: int, percent: int):
            self.jobs.set(job_id, JobStatus.TRANSLATING, f"Translating content... ({percent}%)")
            logger.info("Job %s: batch %d/%d translated", job_id, done, total)

        translations = await self.translator.translate_units(
            extracted.units,
            target_language,
            progress_callback=progress_callback
        )

        self.jobs.set(job_id, JobStatus.GENERATING, "Reconstructing the slides...")
        return await asyncio.to_thread(rebuild_pptx, extracted, translations)

    async def _translate_pdf(self, job_id: str, data: bytes, target_language: str) -> bytes:
        self.jobs.set(job_id, JobStatus.EXTRACTING, "Extracting text from PDF...")
        extracted = await self._extract(data, "pdf")

        self.jobs.set(job_id, JobStatus.TRANSLATING, "Translating document...")
        translated = await self.translator.translate_text(extracted.text, target_language)

        self.jobs.set(job_id, JobStatus.GENERATING, "Generating translated PDF...")
        return await asyncio.to_thread(rebuild_pdf, translated, self.config)

    async def translate_file(
        self,
        input_path: str,
        output_path: Optional[str] = None,
        target_language: Optional[str] = None
    ) -> str:
        """
        Translate a file on disk.

        Returns:
            Path to translated output file
        """
        with open(input_path, "rb") as f:
            data = f.read()

        result = await self.translate_bytes(data, os.path.basename(input_path), target_language)

        if output_path is None:
            output_path = os.path.join(os.path.dirname(os.path.abspath(input_path)), result.filename)
        with open(output_path, "wb") as f:
            f.write(result.content)

        return output_path

    async def close(self):
        """Clean up resources."""
        close = getattr(self.oracle, "close", None)
        if close is not None:
            await close()


# CLI entry point
async def main(argv=None):
    """CLI entry point for direct pipeline execution."""
    parser = argparse.ArgumentParser(description="Translate a PDF or PPTX document.")
    parser.add_argument("input_file")
    parser.add_argument("output_file", nargs="?")
    parser.add_argument("--language", "-l", default=None, help="Target language (default: Turkish)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    config = Config.from_env()
    pipeline = TranslationPipeline(config)

    try:
        result = await pipeline.translate_file(args.input_file, args.output_file, args.language)
        print(f"Translation complete: {result}")
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        await pipeline.close()


if __name__ == "__main__":
    asyncio.run(main())
