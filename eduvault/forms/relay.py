"""Outbound email delivery through the EmailJS REST API.

Architectural role:
    Turns validated form submissions into EmailJS template sends. Each form
    has its own template; template variable names match the site's templates.

Configuration (environment, read once by `load_relay_config`):
    - `EMAILJS_SERVICE_ID`, `EMAILJS_PUBLIC_KEY`: required to send anything.
    - `EMAILJS_REQUEST_TEMPLATE_ID`, `EMAILJS_CONTACT_TEMPLATE_ID`: template ids.
    - `EMAILJS_PRIVATE_KEY`: optional access token for server-side sends.
    - `EMAIL_RECIPIENT_NAME`: `to_name` template value.

Relay is optional: a missing configuration only disables the form endpoints,
it never blocks the assistant from starting.

Retry behavior:
    No retry loop. Each send is attempted once with `REQUEST_TIMEOUT`.

Failure handling:
    Unconfigured relay, transport errors, and non-2xx answers raise `RelayError`.
"""

import logging
import os
from dataclasses import dataclass

import requests
from dotenv import load_dotenv

from eduvault.core.errors import RelayError
from eduvault.forms.submissions import (
    DRIVE_LINK_PLACEHOLDER,
    ContactMessage,
    ResourceRequest,
)
from eduvault.llm.provider_config import REQUEST_TIMEOUT

load_dotenv()


logger = logging.getLogger(__name__)

EMAILJS_SEND_URL = os.getenv("EMAILJS_SEND_URL", "https://api.emailjs.com/api/v1.0/email/send")

# Relay error bodies are truncated before they reach the logs.
MAX_ERROR_BODY = 300


@dataclass(frozen=True)
class RelayConfig:
    service_id: str
    public_key: str
    request_template_id: str
    contact_template_id: str
    private_key: str | None = None
    recipient_name: str = "EduVault Admin"

    def __repr__(self) -> str:
        return f"RelayConfig(service_id={self.service_id!r})"


def load_relay_config() -> RelayConfig | None:
    """Return the relay configuration, or `None` when sending is not configured."""
    service_id = os.getenv("EMAILJS_SERVICE_ID", "").strip()
    public_key = os.getenv("EMAILJS_PUBLIC_KEY", "").strip()
    if not service_id or not public_key:
        logger.warning("EmailJS relay not configured. Form submissions will be unavailable.")
        return None

    return RelayConfig(
        service_id=service_id,
        public_key=public_key,
        request_template_id=os.getenv("EMAILJS_REQUEST_TEMPLATE_ID", "new_request"),
        contact_template_id=os.getenv("EMAILJS_CONTACT_TEMPLATE_ID", "enquiry"),
        private_key=os.getenv("EMAILJS_PRIVATE_KEY") or None,
        recipient_name=os.getenv("EMAIL_RECIPIENT_NAME", "EduVault Admin"),
    )


class EmailRelay:
    """Sends form submissions as EmailJS template emails."""

    def __init__(self, config: RelayConfig | None, timeout: float = REQUEST_TIMEOUT):
        self.config = config
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return self.config is not None

    def _require_config(self) -> RelayConfig:
        if self.config is None:
            raise RelayError("Email relay is not configured")
        return self.config

    def _send(self, config: RelayConfig, template_id: str, params: dict[str, str]) -> None:
        payload = {
            "service_id": config.service_id,
            "template_id": template_id,
            "user_id": config.public_key,
            "template_params": params,
        }
        if config.private_key:
            payload["accessToken"] = config.private_key

        try:
            response = requests.post(EMAILJS_SEND_URL, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as err:
            raise RelayError(f"transport error: {type(err).__name__}") from err

        if not response.ok:
            body = (response.text or "")[:MAX_ERROR_BODY]
            raise RelayError(body or response.reason or "error", response.status_code)

        logger.info("Relayed form submission via template %s", template_id)

    def send_resource_request(self, request: ResourceRequest) -> None:
        config = self._require_config()
        self._send(
            config,
            config.request_template_id,
            {
                "from_name": request.name,
                "from_email": request.email,
                "phone": request.phone,
                "resource_title": request.resource_title,
                "description": request.description,
                "drive_link": request.drive_link or DRIVE_LINK_PLACEHOLDER,
                "to_name": config.recipient_name,
            },
        )

    def send_contact_message(self, message: ContactMessage) -> None:
        config = self._require_config()
        self._send(
            config,
            config.contact_template_id,
            {
                "from_name": message.name,
                "from_email": message.email,
                "message": message.message,
                "to_name": config.recipient_name,
            },
        )
