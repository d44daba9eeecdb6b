"""
Route Dispatcher

Invokes a caller-owned handler for the destination a query routes to.

The router only names destinations; this module binds those names to
LangChain Runnables (or plain callables) supplied by the caller. Whatever the
handlers compute is their own business.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from langchain_core.runnables import Runnable
from langchain_core.runnables.base import coerce_to_runnable

from embedding_router.errors import NoRouteFoundError
from embedding_router.routing.decision import RoutingDecision
from embedding_router.routing.router import EmbeddingRouter

logger = logging.getLogger(__name__)


class RouteDispatcher:
    """
    Routes a query and invokes the handler bound to the chosen destination.
    """

    def __init__(
        self,
        router: EmbeddingRouter,
        handlers: Mapping[str, Runnable | Callable[[Any], Any]],
    ):
        """
        Initialize the dispatcher.

        Args:
            router: Router deciding the destination
            handlers: destination name -> Runnable or callable taking the query
        """
        self._router = router
        self._handlers: dict[str, Runnable] = {
            name: coerce_to_runnable(handler) for name, handler in handlers.items()
        }

        unbound = [n for n in router.registry.names() if n not in self._handlers]
        if unbound:
            logger.warning(f"Dispatcher: no handler bound for destinations {unbound}")

    def handler_for(self, decision: RoutingDecision) -> Runnable:
        """
        Look up the handler for a routing decision.

        Raises:
            NoRouteFoundError: If no handler is bound to the decision's destination
        """
        handler = self._handlers.get(decision.destination)
        if handler is None:
            raise NoRouteFoundError(
                decision.query,
                message=f"No handler bound for destination {decision.destination!r}",
            )
        return handler

    def invoke(self, query: str, **kwargs: Any) -> Any:
        """Route the query and invoke the chosen handler with it."""
        decision = self._router.route(query, **kwargs)
        handler = self.handler_for(decision)
        logger.debug(f"Dispatching '{query[:50]}' to {decision.destination}")
        return handler.invoke(query)

    async def ainvoke(self, query: str, **kwargs: Any) -> Any:
        """Async counterpart of invoke."""
        decision = await self._router.aroute(query, **kwargs)
        handler = self.handler_for(decision)
        logger.debug(f"Dispatching '{query[:50]}' to {decision.destination}")
        return await handler.ainvoke(query)
