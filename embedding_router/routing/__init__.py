# Semantic Routing
# Embedding-similarity routing of queries to named destinations
#
# Features:
# - Max-over-descriptions matching with deterministic tie-break
# - Inclusive confidence threshold with default fallback
# - Sync and async routing
# - LangChain Runnable adapter and handler dispatch

from embedding_router.routing.decision import (
    RouteCandidate,
    RouteOutcome,
    RoutingDecision,
)
from embedding_router.routing.router import EmbeddingRouter
from embedding_router.routing.dispatch import RouteDispatcher
from embedding_router.routing.factory import create_router, create_router_from_env

__all__ = [
    # Decisions
    "RouteCandidate",
    "RouteOutcome",
    "RoutingDecision",
    # Core router
    "EmbeddingRouter",
    # Dispatch
    "RouteDispatcher",
    # Factory
    "create_router",
    "create_router_from_env",
]
