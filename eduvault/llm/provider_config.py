"""Provider/runtime configuration for the LLM layer.

Architectural role:
    Centralizes backend selection, credentials, and sampling parameters for
    `eduvault.llm.client` and `eduvault.llm.dispatcher`.

Backend slots:
    Three ranked slots (`primary`, `secondary`, `tertiary`) all served by the
    same OpenAI-compatible base URL. Each slot has its own credential and model.

Credential policy:
    No key is embedded in code. Keys come from `<SLOT>_NVIDIA_API_KEY` or from
    `config/<slot>.key`; `load_backends` fails fast when any slot lacks one.

Determinism:
    Deterministic for a fixed process environment and key files. Values are
    resolved at import time (plus key-file reads in `load_key`).
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from eduvault.core.errors import ConfigurationError

load_dotenv()


NVIDIA_BASE_URL = os.getenv("NVIDIA_BASE_URL", "https://integrate.api.nvidia.com/v1").rstrip("/")

# Ranked slot names; list order is the fallback order.
BACKEND_SLOTS = ["primary", "secondary", "tertiary"]

DEFAULT_MODELS = {
    "primary": "opengpt-x/teuken-7b-instruct-commercial-v0.4",
    "secondary": "nvidia/llama-3.3-nemotron-super-49b-v1.5",
    "tertiary": "google/gemma-3n-e4b-it",
}

KEY_DIR = os.getenv("KEY_DIR", "config")

# Fixed sampling parameters sent with every completion request.
TEMPERATURE = 0.7
TOP_P = 0.9
MAX_TOKENS = 1024

def read_timeout(raw: str | None, default: float = 20.0) -> float:
    """Parse a positive timeout in seconds.

    Raises:
        ConfigurationError: `raw` is not a positive number.
    """
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as err:
        raise ConfigurationError(f"REQUEST_TIMEOUT must be a number, got {raw!r}") from err
    if value <= 0:
        raise ConfigurationError(f"REQUEST_TIMEOUT must be positive, got {raw!r}")
    return value


# Per-attempt deadline in seconds (connect + read).
REQUEST_TIMEOUT = read_timeout(os.getenv("REQUEST_TIMEOUT"))

# Persona instruction prepended as the system message of every model call.
SYSTEM_MESSAGE = "You are Jarvis, a helpful AI assistant."


@dataclass(frozen=True)
class Backend:
    """One external model endpoint/credential/model triple.

    Attributes:
        name: Slot label used in logs and errors.
        api_key: Bearer credential.
        model: Provider model identifier.
        priority: Rank in the fallback chain, 0 is tried first.
        base_url: OpenAI-compatible API root without trailing slash.
    """

    name: str
    api_key: str
    model: str
    priority: int
    base_url: str = NVIDIA_BASE_URL

    @property
    def completions_url(self) -> str:
        return f"{self.base_url}/chat/completions"

    def __repr__(self) -> str:
        return f"Backend(name={self.name!r}, model={self.model!r}, priority={self.priority})"


def load_key(path):
    """Load API key from environment override or key file.

    Resolution order:
        1. Environment variable inferred from file stem (for example
           `config/primary.key` -> `PRIMARY_NVIDIA_API_KEY`).
        2. Raw file contents at `path`.

    Returns:
        Key string or `None` when not available.
    """
    if not path:
        return None
    key_name = os.path.splitext(os.path.basename(path))[0].upper() + "_NVIDIA_API_KEY"
    env_value = os.getenv(key_name)
    if env_value:
        return env_value.strip()
    if not os.path.exists(path):
        return None
    with open(path, "r") as f:
        return f.read().strip() or None


def load_backends() -> list[Backend]:
    """Build the ranked backend list from the environment.

    Returns:
        Backends ordered primary -> secondary -> tertiary.

    Raises:
        ConfigurationError: naming every slot whose key is missing.
    """
    backends: list[Backend] = []
    missing: list[str] = []

    for priority, slot in enumerate(BACKEND_SLOTS):
        api_key = load_key(os.path.join(KEY_DIR, f"{slot}.key"))
        if not api_key:
            missing.append(f"{slot.upper()}_NVIDIA_API_KEY")
            continue
        model = os.getenv(f"{slot.upper()}_MODEL", DEFAULT_MODELS[slot])
        backends.append(Backend(name=slot, api_key=api_key, model=model, priority=priority))

    if missing:
        raise ConfigurationError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    return backends
