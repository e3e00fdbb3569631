"""Translation layer - LLM-based translation."""
from .llm_translator import (
    BatchTranslator,
    chunk_units,
    render_batch_prompt,
    parse_batch_response,
    progress_percent,
)
from .oracle import ChatCompletionOracle

__all__ = [
    "BatchTranslator",
    "ChatCompletionOracle",
    "chunk_units",
    "render_batch_prompt",
    "parse_batch_response",
    "progress_percent",
]
