"""Core orchestration package.

Architectural role:
    Exposes the request-orchestration layer that sits between API/CLI entrypoints
    and the lower-level subsystems (segmentation, override resolution, model
    dispatch, and response sanitizing).

Composition:
    - `engine`: per-request control flow producing one assistant reply.
    - `types`: shared chat message schema.
    - `errors`: exception hierarchy used across layers.

Determinism and side effects:
    Package import itself is deterministic and side-effect free. Network side
    effects happen only inside the dispatcher invoked by `engine`.
"""
