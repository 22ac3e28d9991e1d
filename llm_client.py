"""
LLM client: streams an answer to a fleet question from the OpenAI Responses API.
"""

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from openai import OpenAI, OpenAIError

from config import get_settings
from prompts import build_messages

logger = logging.getLogger(__name__)

TEXT_DELTA_EVENT = "response.output_text.delta"


def _iter_text_deltas(stream: Any) -> Iterator[str]:
    for event in stream:
        if getattr(event, "type", None) == TEXT_DELTA_EVENT:
            delta = getattr(event, "delta", None)
            if isinstance(delta, str) and delta:
                yield delta


def stream_answer(
    question: str,
    context: dict[str, Any] | None,
    env_dir: str | Path | None = None,
    client: Any = None,
) -> tuple[Iterator[str] | None, str | None]:
    """
    Returns (chunks, None) on success or (None, error message). The iterator
    is exhausted when the service signals the end of the answer.
    """
    question = (question or "").strip()
    if not question:
        return None, "Question is required."

    settings = get_settings(env_dir)
    if client is None:
        if not settings.openai_api_key:
            return None, "OPENAI_API_KEY not found. Add it to .env."
        client = OpenAI(api_key=settings.openai_api_key)

    try:
        stream = client.responses.create(
            model=settings.openai_model,
            input=build_messages(question, context),
            stream=True,
        )
    except OpenAIError as e:
        logger.warning("Question request failed: %s", e)
        return None, f"API error: {str(e)}"

    return _iter_text_deltas(stream), None
