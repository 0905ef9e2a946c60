"""Tests for the per-request orchestration pipeline."""

import asyncio

import pytest

from eduvault.core.engine import answer, compose_reply, process_message
from eduvault.core.errors import AllBackendsFailedError
from eduvault.core.types import ChatMessage, latest_user_content, parse_messages


HELLO = "Hello! How can I help you today?"
EDUVAULT = (
    "EduVault is a platform built to help students and educators preview, "
    "request, and manage academic resources securely."
)


def _user(text):
    return [ChatMessage(role="user", content=text)]


def test_override_only_reply_skips_dispatcher(make_assistant, calls):
    reply = answer(_user("Hello! What is eduvault?"), make_assistant())
    assert reply == f"{HELLO}\n\n{EDUVAULT}"
    assert calls == []


def test_mixed_reply_puts_overrides_first(make_assistant, calls):
    assistant = make_assistant(primary="**Plants** make food   from light.")
    reply = answer(_user("Explain photosynthesis. Hello!"), assistant)

    assert reply == f"{HELLO}\n\nPlants make food from light."
    assert calls == ["primary"]


def test_unresolved_segments_merged_into_one_prompt(make_assistant):
    assistant = make_assistant(primary="ok")
    answer(_user("Define osmosis? Explain entropy"), assistant)

    primary = assistant.dispatcher.providers[0]
    assert len(primary.received) == 1
    system, user = primary.received[0]
    assert system["role"] == "system"
    assert user == {"role": "user", "content": "Define osmosis. Explain entropy"}


def test_latest_user_message_is_used(make_assistant, calls):
    messages = [
        ChatMessage("user", "Explain gravity"),
        ChatMessage("assistant", "Gravity is..."),
        ChatMessage("user", "thanks"),
        ChatMessage("assistant", "Glad I could help!"),
    ]
    assert answer(messages, make_assistant()) == "Glad I could help!"
    assert calls == []


def test_no_user_message_gives_empty_reply(make_assistant, calls):
    assert answer([ChatMessage("system", "setup")], make_assistant()) == ""
    assert calls == []


def test_total_failure_propagates(make_assistant):
    with pytest.raises(AllBackendsFailedError):
        answer(_user("Explain photosynthesis"), make_assistant(tertiary=None))


def test_process_message_runs_pipeline(make_assistant):
    reply = asyncio.run(process_message(_user("Explain photosynthesis"), make_assistant()))
    assert reply == "Tertiary answer."


def test_compose_reply_without_model_answer():
    assert compose_reply(["a", "b"], None) == "a\n\nb"
    assert compose_reply([], "") == ""


def test_parse_messages_rejects_bad_shapes():
    with pytest.raises(ValueError):
        parse_messages({"role": "user"})
    with pytest.raises(ValueError):
        parse_messages(["text"])


def test_parse_messages_coerces_content():
    messages = parse_messages([{"role": "user", "content": 42}, {"role": "user"}])
    assert messages == [ChatMessage("user", "42"), ChatMessage("user", "")]
    assert latest_user_content(messages) == ""
