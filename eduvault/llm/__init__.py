"""LLM access package.

Architectural role:
    Provides backend configuration, request-payload construction, transport,
    ordered fallback across providers, and output cleanup used by the
    orchestration layer to obtain model-generated answers.

Module split:
    - `provider_config`: environment-driven backend and sampling configuration.
    - `client`: OpenAI-compatible HTTP transport for one backend.
    - `dispatcher`: ordered fallback chain over provider objects.
    - `service`: canonical questions-to-messages adapter.
    - `sanitizer`: reasoning-block and markdown cleanup of raw model text.
"""
