"""Core interfaces.

Why:
- Define contracts (Protocol) implemented by concrete adapters.
- Invert dependencies: the core depends on abstractions, not on httpx.
"""
