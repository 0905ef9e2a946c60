"""Validation of resource-request and contact form payloads.

Validation model:
    - Required fields must be present and non-blank after trimming.
    - All missing fields are reported together, in form order, using the
      labels the site shows.
    - Email addresses must look like `local@domain.tld` (no whitespace, one `@`).

Failure handling:
    Raises `SubmissionError` with a user-presentable message. Never performs I/O.
"""

import re
from typing import Any

from pydantic import BaseModel

from eduvault.core.errors import SubmissionError


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

DRIVE_LINK_PLACEHOLDER = "Not provided"


class ResourceRequest(BaseModel):
    name: str
    phone: str
    email: str
    resource_title: str
    description: str
    drive_link: str | None = None


class ContactMessage(BaseModel):
    name: str
    email: str
    message: str


# (payload key, label shown to users, model field)
_REQUEST_FIELDS = [
    ("name", "Name", "name"),
    ("phone", "Phone", "phone"),
    ("email", "Email", "email"),
    ("resourceTitle", "Resource Title", "resource_title"),
    ("description", "Description", "description"),
]

_CONTACT_FIELDS = [
    ("name", "Name", "name"),
    ("email", "Email", "email"),
    ("message", "Message", "message"),
]


def _text(body: dict[str, Any], key: str) -> str:
    value = body.get(key)
    return "" if value is None else str(value).strip()


def _collect(body: Any, fields: list[tuple[str, str, str]]) -> dict[str, str]:
    if not isinstance(body, dict):
        raise SubmissionError("Invalid form submission")

    values = {attr: _text(body, key) for key, _, attr in fields}
    missing = [label for key, label, attr in fields if not values[attr]]
    if missing:
        raise SubmissionError(
            f"Please fill in the following required fields: {', '.join(missing)}"
        )

    if not EMAIL_PATTERN.match(values["email"]):
        raise SubmissionError("Please enter a valid email address.")

    return values


def validate_resource_request(body: Any) -> ResourceRequest:
    """Validate a resource-request form body (camelCase keys as sent by the site)."""
    values = _collect(body, _REQUEST_FIELDS)
    drive_link = _text(body, "driveLink") or None
    return ResourceRequest(drive_link=drive_link, **values)


def validate_contact_message(body: Any) -> ContactMessage:
    """Validate a contact form body."""
    return ContactMessage(**_collect(body, _CONTACT_FIELDS))
