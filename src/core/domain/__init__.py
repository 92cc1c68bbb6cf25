"""Domain models and value objects.

Why:
- Plain, strict data structures (Pydantic v2 and frozen dataclasses).
- The domain knows nothing about HTTP clients or the CLI, only snippets,
  commands and configuration.
"""
