"""
Destination Registry

Authoritative set of destinations. Registering a destination embeds its
descriptions and populates the embedding index.

Registration is atomic: validation, embedding and index insertion either all
succeed or leave both the registry and the index untouched.

Concurrency: register/unregister mutate the index and must be serialized by
the caller, and must finish before concurrent routing starts.
"""

import logging
from typing import Any, Mapping, Sequence

from langchain_core.embeddings import Embeddings

from embedding_router.embeddings import EmbeddingClient, as_client
from embedding_router.errors import (
    DuplicateNameError,
    EmptyDescriptionsError,
    InvalidArgumentError,
)
from embedding_router.index import EmbeddingIndex, InMemoryEmbeddingIndex
from embedding_router.registry.destination import Destination

logger = logging.getLogger(__name__)


class DestinationRegistry:
    """
    Manages destination registration and index population.
    """

    def __init__(
        self,
        embeddings: Embeddings | EmbeddingClient,
        index: EmbeddingIndex | None = None,
        default_destination: str | None = None,
    ):
        """
        Initialize the registry.

        Args:
            embeddings: Embedding function (LangChain Embeddings or EmbeddingClient)
            index: Index to populate (defaults to a fresh in-memory index)
            default_destination: Fallback destination name, or None to fail closed
        """
        self._embedder = as_client(embeddings)
        self._index = index if index is not None else InMemoryEmbeddingIndex()
        self._default = default_destination

        # name -> Destination, in registration order
        self._destinations: dict[str, Destination] = {}

    @property
    def index(self) -> EmbeddingIndex:
        return self._index

    @property
    def embedder(self) -> EmbeddingClient:
        return self._embedder

    # -----------------------
    # Registration
    # -----------------------

    def register(
        self,
        name: str,
        descriptions: Sequence[str],
        metadata: dict[str, Any] | None = None,
    ) -> Destination:
        """
        Register a destination and index its descriptions.

        Args:
            name: Unique destination name
            descriptions: Non-empty sequence of example texts
            metadata: Optional caller metadata stored on the Destination

        Returns:
            The registered Destination

        Raises:
            DuplicateNameError: If name is already registered
            EmptyDescriptionsError: If descriptions is empty or contains blank text
            InvalidArgumentError: If name is empty or descriptions is a bare string
            EmbeddingError: If embedding the descriptions fails
            DimensionMismatchError: If the vectors don't fit the index
        """
        texts = self._validate(name, descriptions)
        vectors = self._embedder.embed_documents(texts)
        return self._commit(name, texts, vectors, metadata)

    async def aregister(
        self,
        name: str,
        descriptions: Sequence[str],
        metadata: dict[str, Any] | None = None,
    ) -> Destination:
        """Async counterpart of register; embeds via aembed_documents."""
        texts = self._validate(name, descriptions)
        vectors = await self._embedder.aembed_documents(texts)
        return self._commit(name, texts, vectors, metadata)

    def register_many(self, destinations: Mapping[str, Sequence[str]]) -> list[Destination]:
        """
        Register several destinations in mapping order.

        Each registration is atomic on its own; a failure stops the loop and
        leaves earlier destinations registered.
        """
        return [self.register(name, descriptions) for name, descriptions in destinations.items()]

    def unregister(self, name: str) -> Destination:
        """
        Remove a destination and its index entries.

        Raises:
            KeyError: If name is not registered
        """
        destination = self._destinations.pop(name)
        removed = self._index.remove(name)
        logger.info(f"Destination unregistered: {name} ({removed} entries removed)")
        return destination

    def _validate(self, name: str, descriptions: Sequence[str]) -> list[str]:
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgumentError(f"Destination name must be a non-empty string, got {name!r}")
        if isinstance(descriptions, str):
            raise InvalidArgumentError(
                f"Descriptions for {name!r} must be a sequence of strings, not a single string"
            )
        if name in self._destinations:
            raise DuplicateNameError(name)

        texts = list(descriptions or [])
        if not texts or any(not isinstance(t, str) or not t.strip() for t in texts):
            raise EmptyDescriptionsError(name)
        return texts

    def _commit(
        self,
        name: str,
        texts: list[str],
        vectors: list[list[float]],
        metadata: dict[str, Any] | None,
    ) -> Destination:
        # Re-check: an async registration may have raced for the same name
        if name in self._destinations:
            raise DuplicateNameError(name)

        destination = Destination(name=name, descriptions=tuple(texts), metadata=metadata or {})
        self._index.add_many((name, text, vector) for text, vector in zip(texts, vectors))
        self._destinations[name] = destination

        logger.info(
            f"Destination registered: {name} "
            f"({len(texts)} descriptions, dim: {self._index.dimension})"
        )
        return destination

    # -----------------------
    # Default destination
    # -----------------------

    def get_default(self) -> str | None:
        """Fallback destination name, or None when routing must fail closed."""
        return self._default

    def set_default(self, name: str | None) -> None:
        """Configure (or clear with None) the fallback destination."""
        if name is not None and (not isinstance(name, str) or not name.strip()):
            raise InvalidArgumentError(f"Default destination must be a non-empty string, got {name!r}")
        self._default = name
        logger.info(f"Default destination set to: {name}")

    # -----------------------
    # Lookups
    # -----------------------

    def get(self, name: str) -> Destination | None:
        """Get a destination by name."""
        return self._destinations.get(name)

    def list_destinations(self) -> list[Destination]:
        """All destinations in registration order."""
        return list(self._destinations.values())

    def names(self) -> list[str]:
        return list(self._destinations)

    def __contains__(self, name: object) -> bool:
        return name in self._destinations

    def __len__(self) -> int:
        return len(self._destinations)
