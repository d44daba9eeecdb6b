"""
In-Memory Embedding Index

Cosine-similarity index held in process memory.
Suitable for routing tables, which are small and built once at startup.

Features:
- Max-over-descriptions scoring per destination
- Deterministic tie-break by insertion order
- Atomic batch insertion
- Lazily rebuilt numpy matrix for vectorized search
"""

import logging
from typing import Iterable, Sequence

import numpy as np

from embedding_router.errors import DimensionMismatchError, InvalidArgumentError
from embedding_router.index.ports import EmbeddingIndex, IndexedEntry, SearchHit

logger = logging.getLogger(__name__)


class InMemoryEmbeddingIndex(EmbeddingIndex):
    """
    In-memory embedding index.

    Entries are kept in insertion order. Search scores every entry at once
    against a normalized matrix, then folds entries into destinations.
    """

    def __init__(self, dimension: int | None = None):
        """
        Initialize the index.

        Args:
            dimension: Fix the vector dimension up front so misconfiguration
                fails at the first add instead of silently adopting it
        """
        if dimension is not None and (not isinstance(dimension, int) or dimension < 1):
            raise InvalidArgumentError(f"dimension must be a positive integer, got {dimension!r}")
        self._fixed_dimension = dimension
        self._dimension = dimension
        self._entries: list[IndexedEntry] = []
        self._next_position = 0

        # Normalized rows, rebuilt lazily after writes
        self._matrix: np.ndarray | None = None

    @property
    def dimension(self) -> int | None:
        return self._dimension

    def add(self, destination_name: str, description: str, vector: Sequence[float]) -> None:
        self.add_many([(destination_name, description, vector)])

    def add_many(self, entries: Iterable[tuple[str, str, Sequence[float]]]) -> None:
        staged = [(name, desc, self._as_vector(vec)) for name, desc, vec in entries]
        if not staged:
            return

        # Validate the whole batch before touching state
        dimension = self._dimension or len(staged[0][2])
        for _, _, vec in staged:
            if len(vec) != dimension:
                raise DimensionMismatchError(expected=dimension, actual=len(vec))

        self._dimension = dimension
        for name, desc, vec in staged:
            self._entries.append(
                IndexedEntry(
                    destination=name,
                    description=desc,
                    vector=tuple(vec),
                    position=self._next_position,
                )
            )
            self._next_position += 1
        self._matrix = None

        logger.debug(f"Indexed {len(staged)} entries (total: {len(self._entries)}, dim: {dimension})")

    def search(self, query_vector: Sequence[float], top_k: int) -> list[SearchHit]:
        if isinstance(top_k, bool) or not isinstance(top_k, int) or top_k < 1:
            raise InvalidArgumentError(f"top_k must be an integer >= 1, got {top_k!r}")
        if not self._entries:
            return []

        query = np.asarray(self._as_vector(query_vector), dtype=np.float64)
        if query.shape[0] != self._dimension:
            raise DimensionMismatchError(expected=self._dimension, actual=query.shape[0])

        norm = np.linalg.norm(query)
        if norm == 0:
            scores = np.zeros(len(self._entries))
        else:
            scores = self._normalized_matrix() @ (query / norm)

        # Best score per destination, first-seen order preserved
        best: dict[str, float] = {}
        for entry, score in zip(self._entries, scores):
            score = float(np.clip(score, -1.0, 1.0))
            current = best.get(entry.destination)
            if current is None or score > current:
                best[entry.destination] = score

        # Stable sort keeps insertion order among equal scores
        ranked = sorted(best.items(), key=lambda item: item[1], reverse=True)
        return [SearchHit(name, score) for name, score in ranked[:top_k]]

    def remove(self, destination_name: str) -> int:
        before = len(self._entries)
        self._entries = [e for e in self._entries if e.destination != destination_name]
        removed = before - len(self._entries)
        if removed:
            self._matrix = None
            if not self._entries:
                self._dimension = self._fixed_dimension
            logger.debug(f"Removed {removed} entries for destination {destination_name!r}")
        return removed

    def clear(self) -> None:
        self._entries = []
        self._matrix = None
        self._dimension = self._fixed_dimension

    def entries(self) -> list[IndexedEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def _normalized_matrix(self) -> np.ndarray:
        if self._matrix is None:
            matrix = np.array([e.vector for e in self._entries], dtype=np.float64)
            norms = np.linalg.norm(matrix, axis=1, keepdims=True)
            # Zero rows stay zero and score 0.0
            norms[norms == 0] = 1.0
            self._matrix = matrix / norms
        return self._matrix

    @staticmethod
    def _as_vector(vector: Sequence[float]) -> list[float]:
        array = np.asarray(vector, dtype=np.float64)
        if array.ndim != 1 or array.shape[0] == 0:
            raise InvalidArgumentError(f"vector must be a non-empty 1-D sequence, got shape {array.shape}")
        return array.tolist()
