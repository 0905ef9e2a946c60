"""Canned-answer override table and resolver.

Purpose:
    Answer identity, small-talk, and site questions with fixed replies instead
    of forwarding them to an external model.

Matching model:
    - Rule-based only (substring containment), no model inference.
    - A segment matches a trigger when the lowercased segment CONTAINS the
      trigger text; the reverse direction is never checked.
    - Triggers are scanned in table order and the first hit wins, so at most
      one reply is produced per segment.

Table lifecycle:
    The table is built once at process start (`load_override_table`) and is
    read-only afterwards. Trigger order is part of the contract: short, broad
    triggers such as "hi" sit after the longer phrases they would otherwise
    shadow.

Bypass risk:
    Substring matching also fires inside longer words ("hi" inside "this").
    Ordering in the table is the only precedence control.
"""

import json
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from eduvault.core.errors import ConfigurationError


logger = logging.getLogger(__name__)


_CREATOR_REPLY = "I was made by Jubin Khatri for this site named as EduVault."
_UNDISCLOSED_REPLY = "That information is not disclosed yet."


DEFAULT_OVERRIDES: tuple[tuple[str, str], ...] = (

    # Creator
    ("who made you", _CREATOR_REPLY),
    ("who created you", _CREATOR_REPLY),
    ("who is your creator", _CREATOR_REPLY),
    ("who built you", _CREATOR_REPLY),
    ("who developed you", _CREATOR_REPLY),
    ("who is behind you", _CREATOR_REPLY),
    (
        "who is your owner",
        "I was made by Jubin Khatri for the website named as EduVault for the ease "
        "of students so I address Jubin Khatri as my owner.",
    ),

    # Model disclosure
    ("what model", _UNDISCLOSED_REPLY),
    ("your model", _UNDISCLOSED_REPLY),
    ("what ai model", _UNDISCLOSED_REPLY),
    ("which model do you use", _UNDISCLOSED_REPLY),
    ("can you tell your model", _UNDISCLOSED_REPLY),
    ("model you run on", _UNDISCLOSED_REPLY),
    ("backend model", _UNDISCLOSED_REPLY),
    ("tell me the model", _UNDISCLOSED_REPLY),
    ("model information", _UNDISCLOSED_REPLY),
    ("do you use chatgpt", _UNDISCLOSED_REPLY),
    ("are you gpt", _UNDISCLOSED_REPLY),
    ("are you chatgpt", _UNDISCLOSED_REPLY),
    ("are you using openai", _UNDISCLOSED_REPLY),
    ("are you based on llama", _UNDISCLOSED_REPLY),
    ("based on nvidia", _UNDISCLOSED_REPLY),

    # Identity
    ("who are you", "I'm your AI assistant created by Jubin Khatri."),
    ("what is your name", "I'm your AI assistant."),
    ("are you an ai", "Yes, I'm an AI assistant built to help with your questions."),
    ("what are you", "I'm an AI built for EduVault by Jubin Khatri."),
    ("what is your purpose", "My purpose is to assist you with your questions and tasks."),
    (
        "what can you do",
        "I can help answer questions, provide information, assist with tasks, "
        "and guide you through EduVault.",
    ),
    (
        "describe yourself",
        "I'm an AI assistant built to serve users of EduVault with helpful "
        "information and smart responses.",
    ),

    # Small talk
    ("hello", "Hello! How can I help you today?"),
    ("hi", "Hi there! What can I assist you with?"),
    ("how are you", "I'm just code, but I'm functioning well!"),
    ("thank you", "You're welcome!"),
    ("thanks", "Glad I could help!"),
    ("good job", "Thank you!"),
    ("well done", "Thanks!"),
    ("bye", "Goodbye! Let me know if you need anything else."),
    ("good night", "Good night! Rest well."),
    ("good morning", "Good morning! Ready to assist."),
    ("good evening", "Good evening! I'm here to help."),

    # Humor
    ("tell me a joke", "Why don't computers take their hats off? Because they have bad cache!"),
    ("say something funny", "I'm reading a book on anti-gravity. It's impossible to put down!"),
    ("make me laugh", "Why did the AI go to school? To improve its 'net' worth!"),

    # Site
    (
        "what is eduvault",
        "EduVault is a platform built to help students and educators preview, "
        "request, and manage academic resources securely.",
    ),
    (
        "do you work offline",
        "Some features might work offline, but I'm designed to work best with "
        "internet access.",
    ),
    ("can you do calculations", "Yes, I can help with math, code, and logic too!"),
    ("can you translate", "Yes, I can help with multilingual translation."),
)


@dataclass(frozen=True)
class OverrideTable:
    """Immutable, ordered trigger -> reply mapping.

    Attributes:
        entries: Read-only mapping; iteration order is the match order.
    """

    entries: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> "OverrideTable":
        """Build a table from `(trigger, reply)` pairs.

        Triggers are lowercased and stripped. Duplicate triggers keep the first
        reply and its position; blank triggers are rejected because they would
        match every segment.
        """
        ordered: dict[str, str] = {}
        for trigger, reply in pairs:
            key = str(trigger).strip().lower()
            if not key:
                raise ConfigurationError("Override triggers must be non-empty")
            if key in ordered:
                logger.warning("Duplicate override trigger ignored: %r", key)
                continue
            ordered[key] = str(reply)
        return cls(entries=MappingProxyType(ordered))

    def __len__(self) -> int:
        return len(self.entries)

    def lookup(self, segment: str) -> str | None:
        """Return the reply of the first trigger contained in `segment`, else `None`."""
        lowered = segment.lower()
        for trigger, reply in self.entries.items():
            if trigger in lowered:
                return reply
        return None


@dataclass
class Resolution:
    """Partition of one message's segments.

    Attributes:
        answers: Override replies, in the order of the segments that produced them.
        unresolved: Segments that still need an external model, in original order.
    """

    answers: list[str] = field(default_factory=list)
    unresolved: list[str] = field(default_factory=list)


def resolve_segments(segments: Iterable[str], table: OverrideTable) -> Resolution:
    """Partition segments into override answers and model-bound questions.

    Determinism:
        Deterministic for identical input and table. Never performs I/O.
    """
    resolution = Resolution()
    for segment in segments:
        reply = table.lookup(segment)
        if reply is not None:
            resolution.answers.append(reply)
        else:
            resolution.unresolved.append(segment)
    return resolution


def load_override_table(path: str | None = None) -> OverrideTable:
    """Load the process-wide override table.

    Resolution order:
        1. JSON object file at `path` (key order in the file is the match order).
        2. Built-in `DEFAULT_OVERRIDES`.

    Raises:
        ConfigurationError: the file cannot be read or is not a JSON object of strings.
    """
    if not path:
        return OverrideTable.from_pairs(DEFAULT_OVERRIDES)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as err:
        raise ConfigurationError(f"Cannot load override table from {path}: {err}") from err

    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        raise ConfigurationError(f"Override table {path} must be a JSON object of strings")

    table = OverrideTable.from_pairs(data.items())
    logger.info("Loaded %d override triggers from %s", len(table), path)
    return table
