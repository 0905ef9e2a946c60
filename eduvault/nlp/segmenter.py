"""Query segmentation for multi-question chat messages.

Parsing rules:
- Split at every `?`, `.`, `!`, newline, or `;`.
- Trim each fragment and drop fragments that are empty after trimming.
- Keep left-to-right order.

Commas are not delimiters, so "Hello, who made you" stays one segment.

Determinism:
    Pure function of the input string.
"""

import re


SEGMENT_DELIMITERS = re.compile(r"[?.!\n;]")


def split_questions(text: str) -> list[str]:
    """Split one chat message into ordered, non-empty candidate sub-questions.

    Edge cases:
    - `""` or whitespace-only input -> `[]`.
    - No delimiters -> a single trimmed segment.
    - Consecutive delimiters never produce empty segments.
    """
    if not text:
        return []

    return [
        segment.strip()
        for segment in SEGMENT_DELIMITERS.split(text)
        if segment.strip()
    ]
