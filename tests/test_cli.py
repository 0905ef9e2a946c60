"""Tests for the interactive terminal loop."""

import pytest
from unittest.mock import patch

from eduvault.api import cli
from eduvault.api.http_api import GENERIC_FAILURE
from eduvault.core.errors import ConfigurationError


_PATCH_INPUT = "builtins.input"
_PATCH_BUILD = "eduvault.api.cli.build_assistant"
_PATCH_ANSWER = "eduvault.api.cli.answer"
_PATCH_LOGGING = "eduvault.api.cli.configure_logging"


def _run(inputs, make_assistant, **answer_patch):
    with patch(_PATCH_LOGGING), \
            patch(_PATCH_BUILD, return_value=make_assistant()), \
            patch(_PATCH_INPUT, side_effect=inputs):
        if answer_patch:
            with patch(_PATCH_ANSWER, **answer_patch):
                cli.main()
        else:
            cli.main()


def test_override_reply_printed(make_assistant, calls, capsys):
    _run(["thanks", "exit"], make_assistant)

    out = capsys.readouterr().out
    assert "Assistant: Glad I could help!" in out
    assert calls == []


def test_total_failure_prints_generic_message(make_assistant, capsys):
    with patch(_PATCH_LOGGING), \
            patch(_PATCH_BUILD, return_value=make_assistant(tertiary=None)), \
            patch(_PATCH_INPUT, side_effect=["Explain photosynthesis", "quit"]):
        cli.main()

    assert f"Assistant: {GENERIC_FAILURE}" in capsys.readouterr().out


def test_unexpected_error_keeps_session_alive(make_assistant, capsys):
    _run(
        ["Explain photosynthesis", "hello", "exit"],
        make_assistant,
        side_effect=[RuntimeError("internal detail"), "Hello again"],
    )

    out = capsys.readouterr().out
    assert f"Assistant: {GENERIC_FAILURE}" in out
    assert "Assistant: Hello again" in out
    assert "internal detail" not in out


def test_missing_configuration_exits(capsys):
    def missing():
        raise ConfigurationError("Missing required environment variables: PRIMARY_NVIDIA_API_KEY")

    with patch(_PATCH_LOGGING), patch(_PATCH_BUILD, side_effect=missing):
        with pytest.raises(SystemExit) as excinfo:
            cli.main()

    assert excinfo.value.code == 1
    assert "PRIMARY_NVIDIA_API_KEY" in capsys.readouterr().out


def test_eof_ends_session(make_assistant, capsys):
    _run(EOFError(), make_assistant)
    assert "Bye." in capsys.readouterr().out
