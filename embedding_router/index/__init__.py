# Embedding Index
# Stores description embeddings and answers nearest-destination queries

from embedding_router.index.ports import EmbeddingIndex, IndexedEntry, SearchHit
from embedding_router.index.memory import InMemoryEmbeddingIndex

__all__ = ["EmbeddingIndex", "IndexedEntry", "SearchHit", "InMemoryEmbeddingIndex"]
