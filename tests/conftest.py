"""
Shared fixtures for the assistant test suite.

Strategy:
    - Replace real backends with in-process fake providers that record calls
    - Build apps through `create_app(assistant=...)` so no credentials are needed
    - Outbound HTTP is never performed; transport tests patch `requests.post`
"""

import pytest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from eduvault.api.http_api import create_app
from eduvault.core.engine import Assistant
from eduvault.core.errors import BackendError
from eduvault.forms.relay import EmailRelay
from eduvault.llm.dispatcher import FallbackDispatcher
from eduvault.llm.provider_config import Backend
from eduvault.nlp.overrides import load_override_table


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class FakeProvider:
    """Provider returning a canned reply, or raising `BackendError` when reply is None."""

    def __init__(self, name: str, reply: str | None, calls: list):
        self.name = name
        self.reply = reply
        self.calls = calls
        self.received = []

    def generate(self, messages):
        self.calls.append(self.name)
        self.received.append(messages)
        if self.reply is None:
            raise BackendError(self.name, "simulated failure", 503)
        return self.reply


def http_response(status_code=200, payload=None, text=""):
    """Build a `requests.Response`-like mock."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.reason = "OK" if response.ok else "Error"
    response.text = text
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


def completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def calls():
    return []


@pytest.fixture
def overrides():
    return load_override_table()


@pytest.fixture
def make_assistant(calls, overrides):
    """Factory: `make_assistant(primary, secondary, tertiary)` with None meaning failure."""

    def _make(primary=None, secondary=None, tertiary="Tertiary answer."):
        providers = [
            FakeProvider("primary", primary, calls),
            FakeProvider("secondary", secondary, calls),
            FakeProvider("tertiary", tertiary, calls),
        ]
        return Assistant(overrides=overrides, dispatcher=FallbackDispatcher(providers))

    return _make


@pytest.fixture
def make_client(make_assistant, tmp_path):
    def _make(**replies):
        app = create_app(
            assistant=make_assistant(**replies),
            catalog_path=str(tmp_path / "missing.json"),
            relay=EmailRelay(None),
        )
        return TestClient(app)

    return _make


@pytest.fixture
def backends():
    return [
        Backend(name="primary", api_key="k1", model="model-a", priority=0, base_url="http://llm.test/v1"),
        Backend(name="secondary", api_key="k2", model="model-b", priority=1, base_url="http://llm.test/v1"),
        Backend(name="tertiary", api_key="k3", model="model-c", priority=2, base_url="http://llm.test/v1"),
    ]
