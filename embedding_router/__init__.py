# Embedding Router - semantic routing of queries to named destinations
# Destinations are matched by embedding similarity of their example descriptions

__version__ = "0.1.0"

# Re-export commonly used components for convenience
from embedding_router.errors import (
    RouterError,
    EmbeddingError,
    DimensionMismatchError,
    InvalidArgumentError,
    DuplicateNameError,
    EmptyDescriptionsError,
    NoRouteFoundError,
)
from embedding_router.config import RouterConfig, load_destinations
from embedding_router.embeddings import (
    EmbeddingClient,
    create_embeddings,
    create_embeddings_from_env,
)
from embedding_router.index import (
    EmbeddingIndex,
    IndexedEntry,
    InMemoryEmbeddingIndex,
    SearchHit,
)
from embedding_router.registry import Destination, DestinationRegistry
from embedding_router.routing import (
    EmbeddingRouter,
    RouteCandidate,
    RouteDispatcher,
    RouteOutcome,
    RoutingDecision,
    create_router,
    create_router_from_env,
)

__all__ = [
    "__version__",
    # Errors
    "RouterError",
    "EmbeddingError",
    "DimensionMismatchError",
    "InvalidArgumentError",
    "DuplicateNameError",
    "EmptyDescriptionsError",
    "NoRouteFoundError",
    # Config
    "RouterConfig",
    "load_destinations",
    # Embeddings
    "EmbeddingClient",
    "create_embeddings",
    "create_embeddings_from_env",
    # Index
    "EmbeddingIndex",
    "IndexedEntry",
    "InMemoryEmbeddingIndex",
    "SearchHit",
    # Registry
    "Destination",
    "DestinationRegistry",
    # Routing
    "EmbeddingRouter",
    "RouteCandidate",
    "RouteDispatcher",
    "RouteOutcome",
    "RoutingDecision",
    "create_router",
    "create_router_from_env",
]
