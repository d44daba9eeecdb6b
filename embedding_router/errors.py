"""
Router Exceptions

Error taxonomy shared by the embedding client, index, registry and router.

Propagation rules:
- Validation errors (dimension, argument, duplicate name, empty descriptions)
  always surface to the caller
- EmbeddingError is never retried here; callers own retry policy
- NoRouteFoundError is an expected outcome, not a defect
"""

from __future__ import annotations

from typing import Any


class RouterError(Exception):
    """Base exception for embedding router errors."""
    pass


class EmbeddingError(RouterError):
    """The embedding function failed or produced an unusable vector."""
    pass


class DimensionMismatchError(RouterError):
    """A vector does not match the dimension established by the index."""
    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Dimension mismatch: expected {expected}, got {actual}")


class InvalidArgumentError(RouterError, ValueError):
    """Caller passed an invalid parameter (e.g. top_k < 1)."""
    pass


class DuplicateNameError(RouterError):
    """A destination with this name is already registered."""
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Destination already registered: {name!r}")


class EmptyDescriptionsError(RouterError):
    """A destination was registered without any usable description text."""
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Destination {name!r} has no description text")


class NoRouteFoundError(RouterError):
    """
    No destination cleared the confidence threshold and no default exists.

    Present this to users as "I don't know how to handle this request",
    not as a system fault.
    """
    def __init__(self, query: str, best: Any | None = None, message: str | None = None):
        self.query = query
        self.best = best
        super().__init__(message or f"No route found for query: {str(query)[:50]!r}")
