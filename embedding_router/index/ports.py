"""
Embedding Index Port Interfaces

Abstract base class defining the index contract used by the registry and router.

These ports follow the hexagonal architecture pattern:
- Registry and router code depend only on this interface
- Adapters (in-memory) implement it
- The index implementation is injected via dependency inversion

Concurrency: writes (add, add_many, remove, clear) must be serialized by the
caller; search is safe for concurrent readers once writes have stopped.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, NamedTuple, Sequence


@dataclass(frozen=True)
class IndexedEntry:
    """
    One embedded description owned by a destination.

    position is the global insertion sequence number and drives tie-breaking.
    """
    destination: str
    description: str
    vector: tuple[float, ...]
    position: int

    @property
    def dimension(self) -> int:
        return len(self.vector)


class SearchHit(NamedTuple):
    """A destination and its best similarity to the query."""
    destination: str
    score: float


class EmbeddingIndex(ABC):
    """
    Abstract interface for embedding index implementations.

    Scores are cosine similarities in [-1, 1], higher is more similar.
    A destination's score is the maximum over its description entries.
    """

    @property
    @abstractmethod
    def dimension(self) -> int | None:
        """Established vector dimension, or None before the first add."""
        ...

    @abstractmethod
    def add(self, destination_name: str, description: str, vector: Sequence[float]) -> None:
        """
        Store one description embedding.

        Raises:
            DimensionMismatchError: If the vector dimension differs from the index's
        """
        ...

    @abstractmethod
    def add_many(self, entries: Iterable[tuple[str, str, Sequence[float]]]) -> None:
        """
        Store a batch of (destination, description, vector) entries.

        Every vector is validated before any is stored.
        """
        ...

    @abstractmethod
    def search(self, query_vector: Sequence[float], top_k: int) -> list[SearchHit]:
        """
        Find the destinations closest to a query vector.

        Returns:
            Up to top_k hits, best first; ties keep insertion order

        Raises:
            InvalidArgumentError: If top_k < 1
            DimensionMismatchError: If the query dimension differs
        """
        ...

    @abstractmethod
    def remove(self, destination_name: str) -> int:
        """Remove all entries of a destination. Returns the number removed."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Remove every entry."""
        ...

    @abstractmethod
    def entries(self) -> list[IndexedEntry]:
        """All entries in insertion order."""
        ...

    @abstractmethod
    def __len__(self) -> int:
        ...

    def destinations(self) -> list[str]:
        """Distinct destination names in first-insertion order."""
        return list(dict.fromkeys(e.destination for e in self.entries()))
