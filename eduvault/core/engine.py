"""Core request orchestration for the chat assistant.

Architectural role:
    Provides the execution pipeline used by API/CLI layers to turn one chat
    conversation into a single assistant reply string.

Control-flow model (per request, no state kept between requests):
    1. Extract the latest user message (`""` when there is none).
    2. Segment it into sub-questions (`nlp.segmenter`).
    3. Resolve segments against the override table (`nlp.overrides`).
    4. If any segment is unresolved, dispatch them as one combined prompt through
       the backend fallback chain (`llm.service`) and sanitize the reply.
    5. Compose override answers (segment order) followed by the model answer,
       joined by a blank line.

Error handling strategy:
    This module does not convert failures into user-facing text.
    `AllBackendsFailedError` and unexpected exceptions propagate so that the
    adapter can log them and answer with its fixed generic message.

Concurrency:
    The blocking dispatcher call runs in a worker thread via `asyncio.to_thread`.
    Backend attempts inside one request remain strictly sequential.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Sequence

from eduvault.core.types import ChatMessage, latest_user_content
from eduvault.llm.dispatcher import FallbackDispatcher
from eduvault.llm.sanitizer import clean_response
from eduvault.llm.service import generate_answer
from eduvault.nlp.overrides import OverrideTable, resolve_segments
from eduvault.nlp.segmenter import split_questions


logger = logging.getLogger(__name__)

REPLY_SEPARATOR = "\n\n"


@dataclass(frozen=True)
class Assistant:
    """Process-wide, read-only collaborators of the pipeline.

    Attributes:
        overrides: Canned-answer table, built once at startup.
        dispatcher: Ordered backend fallback chain.
    """

    overrides: OverrideTable
    dispatcher: FallbackDispatcher


def compose_reply(override_answers: Sequence[str], model_answer: str | None) -> str:
    """Join override answers and the optional model answer with blank lines."""
    parts = list(override_answers)
    if model_answer:
        parts.append(model_answer)
    return REPLY_SEPARATOR.join(parts).strip()


def answer(messages: Sequence[ChatMessage], assistant: Assistant) -> str:
    """Synchronously produce the assistant reply for `messages`.

    Returns:
        Composed reply; `""` when the user message is empty.

    Raises:
        AllBackendsFailedError: model answer was needed and every backend failed.
    """
    user_text = latest_user_content(list(messages))
    segments = split_questions(user_text)
    resolution = resolve_segments(segments, assistant.overrides)

    logger.debug(
        "Segments=%d overrides=%d unresolved=%d",
        len(segments),
        len(resolution.answers),
        len(resolution.unresolved),
    )

    model_answer = None
    if resolution.unresolved:
        raw = generate_answer(resolution.unresolved, assistant.dispatcher)
        model_answer = clean_response(raw)

    return compose_reply(resolution.answers, model_answer)


async def process_message(messages: Sequence[ChatMessage], assistant: Assistant) -> str:
    """Async wrapper around `answer` for the HTTP adapter."""
    return await asyncio.to_thread(answer, messages, assistant)
