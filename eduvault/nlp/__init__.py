"""Rule-based text utilities for the assistant pipeline.

Module scope:
- Sub-question splitting of a chat message (`segmenter`).
- Canned-answer lookup over a fixed trigger table (`overrides`).

Determinism profile:
- Fully deterministic, no model inference and no I/O at request time.
"""
