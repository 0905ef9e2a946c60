"""Tests for the single-backend transport client."""

import pytest
import requests
from unittest.mock import patch

from eduvault.core.errors import BackendError
from eduvault.llm.client import build_payload, send_request
from eduvault.llm.provider_config import MAX_TOKENS, TEMPERATURE, TOP_P

from tests.conftest import completion, http_response


_PATCH_POST = "eduvault.llm.client.requests.post"

MESSAGES = [{"role": "system", "content": "sys"}, {"role": "user", "content": "q"}]


def test_payload_carries_fixed_sampling_parameters():
    payload = build_payload("model-a", MESSAGES)
    assert payload == {
        "model": "model-a",
        "messages": MESSAGES,
        "temperature": TEMPERATURE,
        "top_p": TOP_P,
        "max_tokens": MAX_TOKENS,
    }


def test_success_returns_raw_content(backends):
    with patch(_PATCH_POST, return_value=http_response(payload=completion("**Hi**"))) as post:
        assert send_request(backends[0], MESSAGES, timeout=5) == "**Hi**"

    args, kwargs = post.call_args
    assert args[0] == "http://llm.test/v1/chat/completions"
    assert kwargs["headers"]["Authorization"] == "Bearer k1"
    assert kwargs["json"]["model"] == "model-a"
    assert kwargs["timeout"] == 5


def test_non_success_status_raises(backends):
    response = http_response(status_code=429, text="rate limited")
    with patch(_PATCH_POST, return_value=response):
        with pytest.raises(BackendError) as excinfo:
            send_request(backends[0], MESSAGES)

    assert excinfo.value.status_code == 429
    assert excinfo.value.backend == "primary"


@pytest.mark.parametrize(
    "error",
    [requests.exceptions.Timeout(), requests.exceptions.ConnectionError()],
)
def test_transport_errors_raise(backends, error):
    with patch(_PATCH_POST, side_effect=error):
        with pytest.raises(BackendError):
            send_request(backends[1], MESSAGES)


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"choices": []},
        {"choices": [{"message": {}}]},
        {"choices": [{"message": {"content": None}}]},
        {"choices": [{"message": {"content": "   "}}]},
        ["not", "an", "object"],
    ],
)
def test_missing_reply_field_raises(backends, payload):
    with patch(_PATCH_POST, return_value=http_response(payload=payload)):
        with pytest.raises(BackendError):
            send_request(backends[2], MESSAGES)


def test_invalid_json_raises(backends):
    with patch(_PATCH_POST, return_value=http_response(payload=ValueError("bad json"))):
        with pytest.raises(BackendError):
            send_request(backends[0], MESSAGES)
