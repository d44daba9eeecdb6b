"""Shared fixtures for embedding router tests.

Fake embedding models:
    KeywordEmbeddings: Maps words onto fixed concept axes, so texts about the
        same topic point in the same direction. Deterministic, no network.
    TableEmbeddings: Returns hand-written vectors for exact texts, for tests
        that need precise scores.
    FailingEmbeddings: Raises on every call.

Registry fixtures:
    support_destinations: billing/technical descriptions used by the scenarios.
    support_registry: Registry populated with support_destinations.
"""

import re

import pytest
from langchain_core.embeddings import Embeddings

from embedding_router import DestinationRegistry, EmbeddingRouter

CONCEPT_AXES: dict[str, set[str]] = {
    "billing": {"invoice", "payment", "refund", "charged", "charge", "bill", "billing", "paid"},
    "technical": {"bug", "error", "crash", "crashed", "crashes", "broken", "launch"},
    "greeting": {"hello", "hi", "how", "are", "you"},
}


class KeywordEmbeddings(Embeddings):
    """Counts concept words per axis; unknown words contribute nothing."""

    def __init__(self):
        self.calls: list[str] = []

    def _vector(self, text: str) -> list[float]:
        words = re.findall(r"[a-z]+", text.lower())
        return [float(sum(w in axis for w in words)) for axis in CONCEPT_AXES.values()]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.calls.extend(texts)
        return [self._vector(t) for t in texts]

    def embed_query(self, text: str) -> list[float]:
        self.calls.append(text)
        return self._vector(text)


class TableEmbeddings(Embeddings):
    """Looks up exact texts in a table of vectors."""

    def __init__(self, table: dict[str, list[float]]):
        self.table = table

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self.table[t] for t in texts]

    def embed_query(self, text: str) -> list[float]:
        return self.table[text]


class FailingEmbeddings(Embeddings):
    """Simulates an unreachable embedding service."""

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        raise ConnectionError("embedding service unavailable")

    def embed_query(self, text: str) -> list[float]:
        raise ConnectionError("embedding service unavailable")


@pytest.fixture
def keyword_embeddings() -> KeywordEmbeddings:
    return KeywordEmbeddings()


@pytest.fixture
def support_destinations() -> dict[str, list[str]]:
    return {
        "billing": ["invoice", "payment", "refund"],
        "technical": ["bug", "error", "crash"],
    }


@pytest.fixture
def support_registry(keyword_embeddings, support_destinations) -> DestinationRegistry:
    registry = DestinationRegistry(keyword_embeddings)
    registry.register_many(support_destinations)
    return registry


@pytest.fixture
def support_router(support_registry) -> EmbeddingRouter:
    return EmbeddingRouter(support_registry)


@pytest.fixture
def make_table_embeddings():
    """Factory for TableEmbeddings so tests can define their own vectors."""
    return TableEmbeddings


@pytest.fixture
def failing_embeddings() -> FailingEmbeddings:
    return FailingEmbeddings()
