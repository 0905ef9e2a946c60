"""
HTTP API adapter for the EduVault assistant.

Architectural role:
- Expose the assistant and catalog endpoints consumed by the site.
- Enforce adapter-level input validation.
- Delegate reply generation to `eduvault.core.engine.process_message`.
- Convert every orchestration failure into one generic, user-safe message.

Endpoint responsibilities:
- `POST /api/assistant`: validate `messages`, run the pipeline, return `{"reply"}`.
- `GET /api/ping`, `GET /health`: liveness and configured backend names.
- `GET /resources.json`: raw catalog document.
- `GET /api/resources`: filtered and sorted catalog view with facets;
  `featured=true` narrows to featured resources.
- `POST /api/requests`, `POST /api/contact`: validate a form and relay it by email.

API request lifecycle (`POST /api/assistant`):
1. Parse request JSON.
2. Validate that `messages` exists and is a list of objects (HTTP 400 otherwise,
   no backend contacted).
3. Forward the parsed conversation to the core engine.
4. Return the composed reply, or HTTP 500 with a fixed message on any failure.

Error handling strategy:
- Validation failures return structured HTTP 400 JSON responses.
- Backend exhaustion and unexpected exceptions are logged with detail and
  answered with `GENERIC_FAILURE`; provider text never reaches the client.

Startup:
- The lifespan hook builds the backend chain and override table once and fails
  fast (`ConfigurationError`) when credentials are missing. Tests inject a
  prebuilt `Assistant` through `create_app`.

Side effects:
- Reads the catalog file at app creation.
- Emits request debug logs only when `DEBUG == "true"`.
"""

from dotenv import load_dotenv

load_dotenv()

import asyncio
import json
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from eduvault import __version__
from eduvault.catalog.resources import (
    facets,
    featured,
    filter_resources,
    load_catalog,
    sort_resources,
)
from eduvault.core.engine import Assistant, process_message
from eduvault.core.errors import AllBackendsFailedError, RelayError, SubmissionError
from eduvault.core.types import parse_messages
from eduvault.forms.relay import EmailRelay, load_relay_config
from eduvault.forms.submissions import validate_contact_message, validate_resource_request
from eduvault.llm.dispatcher import FallbackDispatcher
from eduvault.llm.provider_config import load_backends
from eduvault.nlp.overrides import load_override_table


logger = logging.getLogger(__name__)

# Sensitive request/response debug logging is opt-in.
DEBUG = os.getenv("DEBUG") == "true"

INVALID_MESSAGES = "Invalid or missing 'messages'"
GENERIC_FAILURE = "Sorry, I'm having trouble. Try again later."
INVALID_FORM = "Invalid form submission"
FORM_UNAVAILABLE = "Form submissions are not available right now. Please use the chat assistant."
FORM_FAILURE = "Failed to send your message. Please try again later or use the chat assistant."


# ============================================================
# Response Schemas
# ============================================================

class AssistantReply(BaseModel):
    reply: str


class ErrorBody(BaseModel):
    error: str


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorBody(error=message).model_dump())


# ============================================================
# Startup
# ============================================================

def build_assistant() -> Assistant:
    """Build the process-wide pipeline collaborators from configuration.

    Raises:
        ConfigurationError: missing backend keys or unreadable override file.
    """
    backends = load_backends()
    overrides = load_override_table(os.getenv("OVERRIDES_PATH"))
    logger.info(
        "Assistant ready: backends=%s overrides=%d",
        [b.name for b in backends],
        len(overrides),
    )
    return Assistant(overrides=overrides, dispatcher=FallbackDispatcher.from_backends(backends))


@asynccontextmanager
async def lifespan(app: FastAPI):
    if app.state.assistant is None:
        app.state.assistant = build_assistant()
    yield


def _cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


# ============================================================
# App Factory
# ============================================================

def create_app(
    assistant: Assistant | None = None,
    catalog_path: str | None = None,
    relay: EmailRelay | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        assistant: Prebuilt pipeline; when `None` it is built at startup.
        catalog_path: Catalog JSON override; defaults to `RESOURCES_PATH`.
        relay: Form email relay; when `None` it is configured from the environment.
    """
    app = FastAPI(title="EduVault Assistant API", version=__version__, lifespan=lifespan)
    app.state.assistant = assistant
    app.state.catalog = load_catalog(catalog_path)
    app.state.relay = relay if relay is not None else EmailRelay(load_relay_config())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ------------------------------------------------------------
    # Liveness
    # ------------------------------------------------------------

    @app.get("/api/ping")
    def ping():
        return {"message": "Hello from EduVault assistant server!"}

    @app.get("/health")
    def health(request: Request):
        current = request.app.state.assistant
        return {
            "status": "ok",
            "backends": current.dispatcher.names if current else [],
        }

    # ------------------------------------------------------------
    # Assistant
    # ------------------------------------------------------------

    @app.post("/api/assistant")
    async def assistant_reply(request: Request):
        """
        Answer the latest user message of a chat conversation.

        Input validation behavior:
        - Non-JSON body -> HTTP 400.
        - Missing `messages`, non-list `messages`, or non-object entries -> HTTP 400.

        Error handling strategy:
        - Any failure after validation -> HTTP 500 with `GENERIC_FAILURE`.
        """
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return _error(400, INVALID_MESSAGES)

        if not isinstance(body, dict) or "messages" not in body:
            return _error(400, INVALID_MESSAGES)

        try:
            messages = parse_messages(body["messages"])
        except ValueError:
            return _error(400, INVALID_MESSAGES)

        if DEBUG:
            logger.info("Incoming messages: %r", messages)

        try:
            reply = await process_message(messages, request.app.state.assistant)
        except AllBackendsFailedError as err:
            for backend_error in err.errors:
                logger.error("Backend failure detail: %s", backend_error)
            logger.error("Unhandled error: %s", err)
            return _error(500, GENERIC_FAILURE)
        except Exception:
            logger.exception("Unhandled error")
            return _error(500, GENERIC_FAILURE)

        if DEBUG:
            logger.info("Final reply: %r", reply)

        return AssistantReply(reply=reply)

    # ------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------

    @app.get("/resources.json")
    def resources_document(request: Request):
        return {"resources": [r.to_dict() for r in request.app.state.catalog]}

    @app.get("/api/resources")
    def list_resources(
        request: Request,
        q: str = "",
        subject: str | None = None,
        grade: str | None = None,
        type: str | None = None,
        sort: str = "newest",
        featured_only: bool = Query(False, alias="featured"),
    ):
        """
        Filtered catalog view; facets always describe the full catalog.

        Input validation behavior:
        - Sort key outside `SORT_KEYS` -> HTTP 400.
        - `featured=true` keeps only featured resources.
        """
        catalog = request.app.state.catalog
        selected = filter_resources(catalog, query=q, subject=subject, grade=grade, type=type)
        if featured_only:
            selected = featured(selected)

        try:
            selected = sort_resources(selected, sort)
        except ValueError as err:
            return _error(400, str(err))

        return {
            "resources": [r.to_dict() for r in selected],
            "total": len(selected),
            "facets": facets(catalog),
        }

    # ------------------------------------------------------------
    # Forms
    # ------------------------------------------------------------

    async def _relay_form(request: Request, validate, send):
        """
        Shared lifecycle of the form endpoints.

        Input validation behavior:
        - Non-JSON body or failed validation -> HTTP 400 with a user-facing message.

        Error handling strategy:
        - Relay not configured -> HTTP 503.
        - Relay failure -> HTTP 502 with `FORM_FAILURE`; detail is logged only.
        """
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return _error(400, INVALID_FORM)

        try:
            submission = validate(body)
        except SubmissionError as err:
            return _error(400, str(err))

        relay = request.app.state.relay
        if not relay.configured:
            return _error(503, FORM_UNAVAILABLE)

        try:
            await asyncio.to_thread(send, relay, submission)
        except RelayError as err:
            logger.error("Form relay failed (status=%s): %s", err.status_code, err)
            return _error(502, FORM_FAILURE)

        return {"status": "sent"}

    @app.post("/api/requests")
    async def resource_request(request: Request):
        return await _relay_form(request, validate_resource_request, EmailRelay.send_resource_request)

    @app.post("/api/contact")
    async def contact_message(request: Request):
        return await _relay_form(request, validate_contact_message, EmailRelay.send_contact_message)

    return app


app = create_app()
