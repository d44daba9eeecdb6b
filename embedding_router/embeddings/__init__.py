"""
Embedding function for the router.

EmbeddingClient validates any LangChain Embeddings implementation;
create_embeddings builds one for a supported provider.
"""

from .client import EmbeddingClient, as_client
from .factory import EmbeddingConfig, create_embeddings, create_embeddings_from_env

__all__ = [
    "EmbeddingClient",
    "as_client",
    "EmbeddingConfig",
    "create_embeddings",
    "create_embeddings_from_env",
]
