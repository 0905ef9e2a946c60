"""Questions-to-messages adapter for model invocation.

Architectural role:
    Canonical entrypoint used by the orchestrator for every model call. Merges
    the unresolved sub-questions into one user turn, prepends the persona
    system message, and hands the conversation to the fallback dispatcher.

Model call flow:
    questions -> `build_messages` -> `FallbackDispatcher.dispatch` -> raw text.

Token behavior:
    No prompt budget is enforced here; `max_tokens` bounds only the output.
"""

from typing import Sequence

from eduvault.llm.dispatcher import FallbackDispatcher
from eduvault.llm.provider_config import SYSTEM_MESSAGE

QUESTION_SEPARATOR = ". "


def build_messages(questions: Sequence[str], system_message: str = SYSTEM_MESSAGE) -> list[dict]:
    """Return the system + combined-user message pair sent to every backend."""
    return [
        {"role": "system", "content": system_message},
        {"role": "user", "content": QUESTION_SEPARATOR.join(questions)},
    ]


def generate_answer(questions: Sequence[str], dispatcher: FallbackDispatcher) -> str:
    """Ask the fallback chain to answer `questions` in one combined prompt.

    Raises:
        ValueError: `questions` is empty (callers must skip the model step).
        AllBackendsFailedError: no backend produced a reply.
    """
    if not questions:
        raise ValueError("generate_answer requires at least one question")

    return dispatcher.dispatch(build_messages(questions))
