"""
Minimal interactive CLI entrypoint for the EduVault assistant.

Architectural role:
- Terminal-only interface over the same pipeline the HTTP API uses.
- Keeps the conversation locally for the lifetime of the process.

Request lifecycle (per user turn):
1. Read a single line from stdin.
2. Handle local control commands (`exit`/`quit`, `clear chat`).
3. Append the message and call `eduvault.core.engine.answer`.
4. Print the reply, or the generic failure text when every backend failed.

Error handling strategy:
- Missing configuration exits with a one-line message and status 1.
- Any failure while answering prints the same generic message the HTTP API
  returns; detail goes to the log only.
- EOF and keyboard interrupts end the session without traceback output.
"""

import logging
import sys

from eduvault.api.http_api import GENERIC_FAILURE, build_assistant
from eduvault.api.main import configure_logging
from eduvault.core.engine import answer
from eduvault.core.errors import AllBackendsFailedError, ConfigurationError
from eduvault.core.types import ROLE_ASSISTANT, ROLE_USER, ChatMessage


logger = logging.getLogger(__name__)


def main():
    configure_logging()

    try:
        assistant = build_assistant()
    except ConfigurationError as err:
        print(f"Configuration error: {err}")
        sys.exit(1)

    print("EduVault assistant started. (Type 'exit' to quit)\n")
    print("-" * 60)

    history: list[ChatMessage] = []

    while True:

        try:
            question = input("You: ").strip()

        except (EOFError, KeyboardInterrupt):
            print("\nBye.")
            break

        if not question:
            continue

        if question.lower() in ("exit", "quit"):
            print("Shutting down.")
            break

        if question.lower() in ("empty chat", "clear chat"):
            history.clear()
            print("Chat cleared.")
            continue

        history.append(ChatMessage(role=ROLE_USER, content=question))

        try:
            reply = answer(history, assistant)
        except AllBackendsFailedError as err:
            for backend_error in err.errors:
                logger.error("Backend failure detail: %s", backend_error)
            reply = GENERIC_FAILURE
        except Exception:
            logger.exception("Unhandled error")
            reply = GENERIC_FAILURE

        history.append(ChatMessage(role=ROLE_ASSISTANT, content=reply))
        print(f"\nAssistant: {reply}")
        print("\n" + "-" * 60 + "\n")


if __name__ == "__main__":
    main()
