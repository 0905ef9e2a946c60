"""Chat message data contracts for `eduvault.core.engine`.

Architectural role:
    Defines the minimal message schema the HTTP/CLI adapters hand to the
    orchestrator, plus the helpers that normalize untrusted request payloads
    into that schema.

Determinism:
    Purely structural. Conversation order is the list order supplied by the
    caller and is never re-sorted.
"""

from dataclasses import dataclass
from typing import Any


ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"
ROLE_SYSTEM = "system"


@dataclass(frozen=True)
class ChatMessage:
    """One chronological conversation entry.

    Attributes:
        role: `user`, `assistant`, or `system`. Unknown roles are carried as-is
            and simply never treated as user input.
        content: Message text.
    """

    role: str
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


def parse_messages(raw: Any) -> list[ChatMessage]:
    """Convert a decoded JSON `messages` value into `ChatMessage` objects.

    Args:
        raw: Value of the request body's `messages` field.

    Returns:
        Messages in the original order.

    Raises:
        ValueError: when `raw` is not a list or an element is not an object.

    Edge cases:
        - Missing or `None` content becomes `""`.
        - Non-string content is coerced with `str()`.
    """
    if not isinstance(raw, list):
        raise ValueError("'messages' must be a list")

    messages: list[ChatMessage] = []
    for item in raw:
        if not isinstance(item, dict):
            raise ValueError("every message must be an object")
        content = item.get("content")
        messages.append(
            ChatMessage(
                role=str(item.get("role", "")),
                content="" if content is None else str(content),
            )
        )
    return messages


def latest_user_content(messages: list[ChatMessage]) -> str:
    """Return the content of the most recent user message, or `""` if none."""
    for message in reversed(messages):
        if message.role == ROLE_USER:
            return message.content
    return ""
