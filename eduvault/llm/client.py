"""OpenAI-compatible transport client for a single backend.

Architectural role:
    Executes one chat-completions HTTP request and extracts the reply text.
    Knows nothing about fallback; the dispatcher owns that policy.

Model invocation flow:
    `dispatcher.FallbackDispatcher.dispatch` -> `NvidiaProvider.generate`
    -> `send_request(backend, messages)` -> raw reply text.

Retry behavior:
    No retry loop. Each call is attempted once with a bounded timeout.

Failure handling model:
    Every failure mode (non-2xx status, transport error or timeout, invalid
    JSON, missing or blank `choices[0].message.content`) is raised as
    `BackendError`. Provider error bodies are kept in the exception for
    server-side logs only.
"""

import logging

import requests

from eduvault.core.errors import BackendError
from eduvault.llm.provider_config import (
    Backend,
    MAX_TOKENS,
    REQUEST_TIMEOUT,
    TEMPERATURE,
    TOP_P,
)


logger = logging.getLogger(__name__)

# Provider error bodies are truncated before they reach the logs.
MAX_ERROR_BODY = 300


def build_payload(model: str, messages: list[dict]) -> dict:
    """Build the chat-completions request body with the fixed sampling parameters."""
    return {
        "model": model,
        "messages": messages,
        "temperature": TEMPERATURE,
        "top_p": TOP_P,
        "max_tokens": MAX_TOKENS,
    }


def _extract_content(data) -> str | None:
    """Return `choices[0].message.content` when present and textual."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    return content if isinstance(content, str) else None


def send_request(backend: Backend, messages: list[dict], timeout: float = REQUEST_TIMEOUT) -> str:
    """Send one completion request to `backend` and return the raw reply text.

    Args:
        backend: Target endpoint, credential, and model.
        messages: Role/content dicts in conversation order.
        timeout: Seconds allowed for connect and for read.

    Raises:
        BackendError: on any failure to obtain a non-blank reply.
    """
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {backend.api_key}",
    }

    try:
        response = requests.post(
            backend.completions_url,
            headers=headers,
            json=build_payload(backend.model, messages),
            timeout=timeout,
        )
    except requests.exceptions.RequestException as err:
        raise BackendError(backend.name, f"transport error: {type(err).__name__}") from err

    if not response.ok:
        body = (response.text or "")[:MAX_ERROR_BODY]
        raise BackendError(backend.name, body or response.reason or "error", response.status_code)

    try:
        data = response.json()
    except ValueError as err:
        raise BackendError(backend.name, "response body is not valid JSON") from err

    content = _extract_content(data)
    if content is None or not content.strip():
        raise BackendError(backend.name, "response has no reply content")

    return content
