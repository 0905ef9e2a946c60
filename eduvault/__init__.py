"""EduVault assistant backend.

Architectural role:
    Server-side companion of the EduVault study-material site. Hosts the chat
    assistant pipeline (segmentation, canned overrides, multi-provider model
    fallback, response sanitizing) and serves the static resource catalog.

Package split:
    - `api`: HTTP and CLI adapters.
    - `core`: request orchestration, shared message types, error hierarchy.
    - `nlp`: rule-based segmentation and override resolution.
    - `llm`: provider configuration, transport, fallback dispatch, sanitizing.
    - `catalog`: resource catalog loading, filtering, and sorting.
"""

__version__ = "1.0.0"
