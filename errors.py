"""Pipeline error types and the persistent error log."""
import logging
import os
import traceback
from datetime import datetime, timezone
from typing import Optional


ERROR_LOGGER_NAME = "translation.errors"


class PipelineError(Exception):
    """Base class for every error raised by the translation pipeline."""


class ExtractionError(PipelineError):
    """No text could be found, or the document could not be read."""


class OracleError(PipelineError):
    """The remote completion call failed."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class TranslationError(PipelineError):
    """The oracle answered, but the answer is unusable."""


class UnsupportedFormatError(PipelineError):
    """The upload is neither a PDF nor a PPTX document."""


def configure_error_log(path: str) -> logging.Logger:
    """
    Attach an append-mode file handler for ``path`` to the error logger.

    Calling this twice with the same path does not duplicate the handler.
    """
    logger = logging.getLogger(ERROR_LOGGER_NAME)
    target = os.path.abspath(path)
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
            return logger

    handler = logging.FileHandler(target, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.ERROR)
    return logger


def log_pipeline_error(error: BaseException, job_id: str) -> None:
    """Append one error block (timestamp, message, stack, API details) to the error log."""
    stack = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    lines = [
        f"--- {datetime.now(timezone.utc).isoformat()} ---",
        f"Job: {job_id}",
        f"Type: {type(error).__name__}",
        f"Message: {error}",
        f"Stack: {stack.rstrip()}",
    ]
    if isinstance(error, OracleError) and error.status_code is not None:
        lines.append(f"API Status: {error.status_code}")
        lines.append(f"API Data: {error.body}")
    lines.append("--------------------------")

    logging.getLogger(ERROR_LOGGER_NAME).error("\n".join(lines))
