"""Cleanup of raw model output into user-presentable prose.

Pipeline:
    1. Remove paired `<think>...</think>` reasoning blocks, tags included.
    2. Unwrap `*`/`_` emphasis runs of length 1-3, keeping the inner text.
    3. Drop any remaining `*`, `_`, or backtick characters.
    4. Collapse runs of two or more whitespace characters into one space.
    5. Trim.

Guarantees:
    Total and idempotent. Reasoning removal repeats until nothing changes, and
    runs again after marker stripping, because either step can splice a new
    tag pair together.
"""

import re


REASONING_BLOCK = re.compile(r"<think>.*?</think>", re.DOTALL)
EMPHASIS = re.compile(r"[*_]{1,3}([^*_]+?)[*_]{1,3}")
STRAY_MARKERS = re.compile(r"[*_`]+")
WHITESPACE_RUN = re.compile(r"\s{2,}")


def _strip_reasoning(text: str) -> str:
    while True:
        stripped = REASONING_BLOCK.sub("", text)
        if stripped == text:
            return stripped
        text = stripped


def clean_response(text: str) -> str:
    """Return `text` with reasoning blocks and markdown artifacts removed."""
    if not text:
        return ""

    cleaned = _strip_reasoning(text)
    cleaned = EMPHASIS.sub(r"\1", cleaned)
    cleaned = STRAY_MARKERS.sub("", cleaned)
    cleaned = _strip_reasoning(cleaned)
    cleaned = WHITESPACE_RUN.sub(" ", cleaned)
    return cleaned.strip()
