"""
Embedding Router

Routes a query to the destination whose descriptions are most similar to it.

Routing flow:
1. Validate arguments (query type, top_k, confidence threshold)
2. Short-circuit an empty index to the default (score None) or fail
3. Embed the query
4. Search the index for the top_k nearest destinations
5. Best score >= threshold -> matched; else default -> fell back; else NoRouteFoundError

With no threshold set (the default) the best match is always taken, however
weak. An explicit 0.0 still rejects negative similarities.

The router holds no per-query state. Concurrent route/aroute calls are safe
as long as nobody registers destinations at the same time.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Sequence

from langchain_core.embeddings import Embeddings
from langchain_core.runnables import RunnableLambda

from embedding_router.embeddings import EmbeddingClient
from embedding_router.errors import EmbeddingError, InvalidArgumentError, NoRouteFoundError
from embedding_router.index import EmbeddingIndex
from embedding_router.registry import DestinationRegistry
from embedding_router.routing.decision import RouteCandidate, RouteOutcome, RoutingDecision

logger = logging.getLogger(__name__)


class EmbeddingRouter:
    """
    Routes queries to registered destinations by embedding similarity.
    """

    def __init__(
        self,
        registry: DestinationRegistry,
        confidence_threshold: float | None = None,
        top_k: int = 1,
    ):
        """
        Initialize the router.

        Args:
            registry: Destination registry (owns the index and embedder)
            confidence_threshold: Minimum score to accept a match (inclusive).
                None always accepts the best match
            top_k: Number of ranked candidates to report
        """
        self._registry = registry
        self._threshold = (
            None if confidence_threshold is None else self._check_threshold(confidence_threshold)
        )
        self._top_k = self._check_top_k(top_k)

    @classmethod
    def from_names_and_descriptions(
        cls,
        destinations: Mapping[str, Sequence[str]] | Sequence[tuple[str, Sequence[str]]],
        embeddings: Embeddings | EmbeddingClient,
        default_destination: str | None = None,
        index: EmbeddingIndex | None = None,
        **kwargs: Any,
    ) -> "EmbeddingRouter":
        """
        Build registry, index and router in one call.

        Args:
            destinations: name -> descriptions mapping, or (name, descriptions) pairs
            embeddings: Embedding function
            default_destination: Fallback destination name
            index: Custom index (defaults to in-memory)
            **kwargs: Passed to the router constructor (confidence_threshold, top_k)
        """
        registry = DestinationRegistry(
            embeddings=embeddings,
            index=index,
            default_destination=default_destination,
        )
        items = destinations.items() if isinstance(destinations, Mapping) else destinations
        for name, descriptions in items:
            registry.register(name, descriptions)
        return cls(registry, **kwargs)

    @property
    def registry(self) -> DestinationRegistry:
        return self._registry

    @property
    def confidence_threshold(self) -> float | None:
        return self._threshold

    @property
    def top_k(self) -> int:
        return self._top_k

    # -----------------------
    # Routing
    # -----------------------

    def route(
        self,
        query: str,
        confidence_threshold: float | None = None,
        top_k: int | None = None,
    ) -> RoutingDecision:
        """
        Route a query to a destination.

        Args:
            query: Natural-language query
            confidence_threshold: Override the router's threshold for this call
            top_k: Override the number of ranked candidates for this call

        Returns:
            RoutingDecision for the matched or default destination

        Raises:
            NoRouteFoundError: If nothing clears the threshold and no default is set
            EmbeddingError: If the query cannot be embedded
            InvalidArgumentError: If top_k or confidence_threshold is invalid
        """
        _check_query(query)
        threshold, k = self._resolve(confidence_threshold, top_k)

        if len(self._registry.index) == 0:
            return self._route_empty(query)

        logger.debug(f"Routing: embedding query '{query[:50]}'")
        vector = self._registry.embedder.embed_query(query)
        return self._decide(query, vector, threshold, k)

    async def aroute(
        self,
        query: str,
        confidence_threshold: float | None = None,
        top_k: int | None = None,
    ) -> RoutingDecision:
        """Async counterpart of route; suspends on the embedding call."""
        _check_query(query)
        threshold, k = self._resolve(confidence_threshold, top_k)

        if len(self._registry.index) == 0:
            return self._route_empty(query)

        logger.debug(f"Routing: embedding query '{query[:50]}'")
        vector = await self._registry.embedder.aembed_query(query)
        return self._decide(query, vector, threshold, k)

    def _decide(
        self,
        query: str,
        vector: list[float],
        threshold: float | None,
        top_k: int,
    ) -> RoutingDecision:
        hits = self._registry.index.search(vector, top_k)
        candidates = [RouteCandidate(destination=h.destination, score=h.score) for h in hits]
        best = hits[0]

        if threshold is None or best.score >= threshold:
            logger.debug(
                f"Routing: '{query[:50]}' -> {best.destination} "
                f"(score: {best.score:.3f}, threshold: {threshold})"
            )
            return RoutingDecision(
                destination=best.destination,
                score=best.score,
                outcome=RouteOutcome.MATCHED,
                candidates=candidates,
                query=query,
            )

        default = self._registry.get_default()
        if default is not None:
            logger.warning(
                f"Routing: '{query[:50]}' -> default {default} "
                f"(best {best.destination} scored {best.score:.3f} < {threshold:.3f})"
            )
            return RoutingDecision(
                destination=default,
                score=best.score,
                outcome=RouteOutcome.FELL_BACK,
                candidates=candidates,
                query=query,
            )

        logger.warning(
            f"Routing: '{query[:50]}' -> no route "
            f"(best {best.destination} scored {best.score:.3f} < {threshold:.3f}, no default)"
        )
        raise NoRouteFoundError(query, best=best)

    def _route_empty(self, query: str) -> RoutingDecision:
        default = self._registry.get_default()
        if default is None:
            logger.warning(f"Routing: '{query[:50]}' -> no destinations registered and no default")
            raise NoRouteFoundError(query, message="No destinations registered and no default configured")

        logger.debug(f"Routing: no destinations registered, using default {default}")
        return RoutingDecision(
            destination=default,
            score=None,
            outcome=RouteOutcome.FELL_BACK,
            query=query,
        )

    # -----------------------
    # LangChain integration
    # -----------------------

    def as_runnable(self) -> RunnableLambda:
        """
        Expose the router as a LangChain Runnable.

        Accepts a query string or a mapping with a "query" (or "input") key
        and returns a RoutingDecision.
        """
        return RunnableLambda(
            lambda inputs: self.route(_extract_query(inputs)),
            afunc=self._aroute_inputs,
            name="EmbeddingRouter",
        )

    async def _aroute_inputs(self, inputs: Any) -> RoutingDecision:
        return await self.aroute(_extract_query(inputs))

    # -----------------------
    # Validation
    # -----------------------

    def _resolve(self, confidence_threshold: float | None, top_k: int | None) -> tuple[float | None, int]:
        threshold = self._threshold if confidence_threshold is None else self._check_threshold(confidence_threshold)
        k = self._top_k if top_k is None else self._check_top_k(top_k)
        return threshold, k

    @staticmethod
    def _check_threshold(value: float) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise InvalidArgumentError(f"confidence_threshold must be a finite number, got {value!r}")
        if not -1.0 <= value <= 1.0:
            raise InvalidArgumentError(f"confidence_threshold must be within [-1, 1], got {value}")
        return float(value)

    @staticmethod
    def _check_top_k(value: int) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise InvalidArgumentError(f"top_k must be an integer >= 1, got {value!r}")
        return value


def _check_query(query: Any) -> None:
    if not isinstance(query, str):
        raise EmbeddingError(f"Query must be a string, got {type(query).__name__}")


def _extract_query(inputs: Any) -> str:
    if isinstance(inputs, str):
        return inputs
    if isinstance(inputs, Mapping):
        for key in ("query", "input"):
            if key in inputs:
                return inputs[key]
    raise InvalidArgumentError(
        f"Router input must be a string or a mapping with a 'query' or 'input' key, got {type(inputs).__name__}"
    )
