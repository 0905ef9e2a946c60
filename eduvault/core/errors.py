"""Exception hierarchy shared by the assistant layers.

Propagation model:
    - `BackendError` is raised by the transport client for one failed provider
      attempt and is recovered by the dispatcher (fallback to the next backend).
    - `AllBackendsFailedError` is terminal and escalates to the orchestrator
      caller, which converts it into a generic user-facing failure.
    - `ConfigurationError` is raised at startup when required settings are
      missing or malformed.
"""


class AssistantError(Exception):
    """Base class for all assistant-specific failures."""


class ConfigurationError(AssistantError):
    """Raised when process configuration is missing or invalid."""


class BackendError(AssistantError):
    """One provider attempt failed to produce a usable reply.

    Attributes:
        backend: Name of the backend slot that failed.
        status_code: HTTP status when the provider answered with a non-2xx code.
    """

    def __init__(self, backend: str, message: str, status_code: int | None = None):
        super().__init__(message)
        self.backend = backend
        self.status_code = status_code

    def __str__(self) -> str:
        label = str(self.backend or "provider").upper()
        if self.status_code:
            return f"{label} HTTP ERROR ({self.status_code}): {self.args[0]}"
        return f"{label} REQUEST FAILED: {self.args[0]}"


class AllBackendsFailedError(AssistantError):
    """Every backend in the fallback chain failed.

    Attributes:
        errors: Per-backend failures in attempt order (kept for server-side logs).
    """

    def __init__(self, errors: list[BackendError]):
        names = ", ".join(err.backend for err in errors) or "none"
        super().__init__(f"All model backends failed (tried: {names})")
        self.errors = list(errors)


class SubmissionError(AssistantError):
    """A form submission failed validation; the message is safe to show users."""


class RelayError(AssistantError):
    """The outbound email relay is unconfigured or rejected a message.

    Attributes:
        status_code: HTTP status when the relay answered with a non-2xx code.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
