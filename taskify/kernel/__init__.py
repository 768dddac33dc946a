"""Kernel utilities shared across bounded contexts.

Rules:
- Kernel code must not import from presentation layers (e.g. FastAPI routes)
  or from the entity contexts.
- Kernel utilities should stay small and stable; avoid business logic here.
"""
