"""Observability package.

Contains lightweight middleware, in-process metrics, structured logging,
and request-scoped context.
"""

__all__ = [
    "middleware",
    "metrics",
    "logger",
    "context",
]
