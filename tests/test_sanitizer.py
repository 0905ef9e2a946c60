"""Tests for model-output cleanup."""

import pytest

from eduvault.llm.sanitizer import clean_response


def test_reasoning_block_removed_with_tags():
    raw = "<think>\nplan the answer\n</think>\nParis is the capital."
    assert clean_response(raw) == "Paris is the capital."


def test_multiple_reasoning_blocks():
    assert clean_response("<think>a</think>One <think>b</think>two") == "One two"


def test_emphasis_unwrapped():
    assert clean_response("This is **bold**, *italic* and ***both***.") == (
        "This is bold, italic and both."
    )


def test_underscore_emphasis_and_code_markers():
    assert clean_response("Use __care__ with `x = 1`") == "Use care with x = 1"


def test_whitespace_runs_collapsed_and_trimmed():
    assert clean_response("  line one\n\n\nline   two  ") == "line one line two"


def test_single_newline_kept():
    assert clean_response("a\nb") == "a\nb"


@pytest.mark.parametrize("text", ["", None])
def test_empty_input(text):
    assert clean_response(text) == ""


@pytest.mark.parametrize(
    "text",
    [
        "<think>x</think> **Hello**   world",
        "<th*ink>hidden</think> visible",
        "<thi<think>inner</think>nk>outer</think>tail",
        "***a** b* _c_ `d`\t\t e",
        "  \n  spaced \t\n out  ",
        "<think>unterminated reasoning",
        "plain text",
    ],
)
def test_idempotent(text):
    once = clean_response(text)
    assert clean_response(once) == once
