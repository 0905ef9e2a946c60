"""Ordered multi-provider fallback dispatch.

Fallback sequencing:
    Providers are attempted strictly in list order, each exactly once, and
    sequentially: the next provider is contacted only after the previous one
    has failed. The first usable reply is returned immediately.

Failure handling:
    `BackendError` from one provider is logged and swallowed so the chain can
    continue. When every provider failed, `AllBackendsFailedError` carries the
    collected errors to the caller. Any other exception type propagates
    unchanged.

Side effects:
    One outbound call per attempted provider. No caching, no shared state.
"""

import logging
from typing import Protocol, Sequence

from eduvault.core.errors import AllBackendsFailedError, BackendError
from eduvault.llm.client import send_request
from eduvault.llm.provider_config import Backend, REQUEST_TIMEOUT


logger = logging.getLogger(__name__)


class ModelProvider(Protocol):
    """Capability interface for one link in the fallback chain."""

    name: str

    def generate(self, messages: list[dict]) -> str:
        """Return raw reply text or raise `BackendError`."""
        ...


class NvidiaProvider:
    """`ModelProvider` backed by one configured OpenAI-compatible backend."""

    def __init__(self, backend: Backend, timeout: float = REQUEST_TIMEOUT):
        self.backend = backend
        self.timeout = timeout

    @property
    def name(self) -> str:
        return self.backend.name

    def generate(self, messages: list[dict]) -> str:
        return send_request(self.backend, messages, timeout=self.timeout)

    def __repr__(self) -> str:
        return f"NvidiaProvider({self.backend!r})"


class FallbackDispatcher:
    """Chain-of-responsibility over an ordered provider list."""

    def __init__(self, providers: Sequence[ModelProvider]):
        if not providers:
            raise ValueError("FallbackDispatcher needs at least one provider")
        self.providers = list(providers)

    @classmethod
    def from_backends(cls, backends: Sequence[Backend], timeout: float = REQUEST_TIMEOUT):
        ranked = sorted(backends, key=lambda b: b.priority)
        return cls([NvidiaProvider(b, timeout=timeout) for b in ranked])

    @property
    def names(self) -> list[str]:
        return [provider.name for provider in self.providers]

    def dispatch(self, messages: list[dict]) -> str:
        """Return the first successful provider reply.

        Raises:
            AllBackendsFailedError: every provider raised `BackendError`.
        """
        errors: list[BackendError] = []

        for provider in self.providers:
            try:
                reply = provider.generate(messages)
            except BackendError as err:
                logger.warning("Backend %s failed: %s", provider.name, err)
                errors.append(err)
                continue

            if errors:
                logger.info(
                    "Backend %s answered after %d failed attempt(s)",
                    provider.name,
                    len(errors),
                )
            return reply

        raise AllBackendsFailedError(errors)
