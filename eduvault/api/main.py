"""
HTTP server entrypoint for EduVault.

Interface responsibilities:
- Configure process logging once (`LOG_LEVEL`, default INFO).
- Serve `eduvault.api.http_api:app` with uvicorn on `HOST`/`PORT`.

Startup failure:
- Missing backend credentials abort startup inside the app lifespan hook.
"""

import logging
import os

import uvicorn


def configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main():
    configure_logging()
    uvicorn.run(
        "eduvault.api.http_api:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8080")),
    )


if __name__ == "__main__":
    main()
