"""
Embedding Client

Wraps a LangChain Embeddings object behind the router's embedding contract:
- embed(text) -> vector, deterministic for a fixed model
- failures surface as EmbeddingError, never retried here
- every returned vector is checked (1-D, non-empty, finite)

Any langchain_core.embeddings.Embeddings implementation can be injected,
including the ones built by create_embeddings().
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from langchain_core.embeddings import Embeddings

from embedding_router.errors import EmbeddingError

logger = logging.getLogger(__name__)


class EmbeddingClient:
    """
    Validating adapter around a LangChain embedding model.

    Sync and async variants share the same checks, so the router
    behaves identically on both paths.
    """

    def __init__(self, embeddings: Embeddings, model: str | None = None):
        """
        Initialize the client.

        Args:
            embeddings: LangChain embeddings implementation
            model: Optional model label used in log messages
        """
        self._embeddings = embeddings
        self._model = model or embeddings.__class__.__name__

    @property
    def embeddings(self) -> Embeddings:
        return self._embeddings

    @property
    def model(self) -> str:
        return self._model

    # -----------------------
    # Query embedding
    # -----------------------

    def embed_query(self, text: str) -> list[float]:
        """Embed a single query text."""
        self._check_text(text)
        try:
            vector = self._embeddings.embed_query(text)
        except EmbeddingError:
            raise
        except Exception as e:
            logger.error(f"Embedding failed ({self._model}): {e}")
            raise EmbeddingError(f"Failed to embed query with {self._model}: {e}") from e
        return self._check_vector(vector)

    async def aembed_query(self, text: str) -> list[float]:
        """Async counterpart of embed_query."""
        self._check_text(text)
        try:
            vector = await self._embeddings.aembed_query(text)
        except EmbeddingError:
            raise
        except Exception as e:
            logger.error(f"Embedding failed ({self._model}): {e}")
            raise EmbeddingError(f"Failed to embed query with {self._model}: {e}") from e
        return self._check_vector(vector)

    # -----------------------
    # Batch embedding
    # -----------------------

    def embed_documents(self, texts: Sequence[str]) -> list[list[float]]:
        """Embed a batch of description texts, one vector per text."""
        texts = list(texts)
        for text in texts:
            self._check_text(text)
        if not texts:
            return []
        try:
            vectors = self._embeddings.embed_documents(texts)
        except EmbeddingError:
            raise
        except Exception as e:
            logger.error(f"Batch embedding failed ({self._model}): {e}")
            raise EmbeddingError(f"Failed to embed {len(texts)} texts with {self._model}: {e}") from e
        return self._check_batch(texts, vectors)

    async def aembed_documents(self, texts: Sequence[str]) -> list[list[float]]:
        """Async counterpart of embed_documents."""
        texts = list(texts)
        for text in texts:
            self._check_text(text)
        if not texts:
            return []
        try:
            vectors = await self._embeddings.aembed_documents(texts)
        except EmbeddingError:
            raise
        except Exception as e:
            logger.error(f"Batch embedding failed ({self._model}): {e}")
            raise EmbeddingError(f"Failed to embed {len(texts)} texts with {self._model}: {e}") from e
        return self._check_batch(texts, vectors)

    # -----------------------
    # Validation
    # -----------------------

    @staticmethod
    def _check_text(text: str) -> None:
        if not isinstance(text, str):
            raise EmbeddingError(f"Cannot embed non-string input of type {type(text).__name__}")
        if not text.strip():
            raise EmbeddingError("Cannot embed empty text")

    def _check_batch(
        self, texts: list[str], vectors: Sequence[Sequence[float]]
    ) -> list[list[float]]:
        vectors = list(vectors)
        if len(vectors) != len(texts):
            raise EmbeddingError(
                f"{self._model} returned {len(vectors)} vectors for {len(texts)} texts"
            )
        return [self._check_vector(v) for v in vectors]

    def _check_vector(self, vector: Sequence[float]) -> list[float]:
        try:
            values = [float(x) for x in vector]
        except (TypeError, ValueError) as e:
            raise EmbeddingError(f"{self._model} returned a malformed vector: {e}") from e
        if not values:
            raise EmbeddingError(f"{self._model} returned an empty vector")
        if not all(math.isfinite(x) for x in values):
            raise EmbeddingError(f"{self._model} returned a vector with non-finite values")
        return values


def as_client(embeddings: "Embeddings | EmbeddingClient") -> EmbeddingClient:
    """Accept either a raw LangChain Embeddings or an existing client."""
    if isinstance(embeddings, EmbeddingClient):
        return embeddings
    return EmbeddingClient(embeddings)
