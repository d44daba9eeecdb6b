#!/usr/bin/env python3
"""
Support Routing Example

Demonstrates routing customer-support messages to destination handlers.

Workflow:
1. Destinations are registered with example descriptions
2. Each message is embedded and matched against the descriptions
3. Weak matches fall back to the "general" destination
4. The dispatcher invokes the handler bound to the chosen destination

Usage:
    # OpenAI (needs OPENAI_API_KEY)
    python scripts/example_support_routing.py

    # Local Ollama model
    ROUTER_EMBEDDING_MODEL=ollama/nomic-embed-text python scripts/example_support_routing.py
"""

import asyncio
import logging

from embedding_router import (
    NoRouteFoundError,
    RouteDispatcher,
    RouterConfig,
    create_router,
)

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


DESTINATIONS = {
    "billing": [
        "questions about invoices and payments",
        "I want a refund",
        "my card was charged",
    ],
    "technical": [
        "the application crashes or shows an error",
        "bug report",
        "the app won't start",
    ],
}

MESSAGES = [
    "I was charged twice this month",
    "the app crashed on launch",
    "hello, how are you",
]


async def main():
    """Route a handful of messages and print where they went."""
    config = RouterConfig.from_env().model_copy(
        update={"confidence_threshold": 0.35, "default_destination": "general"}
    )

    router = create_router(config, destinations=DESTINATIONS)
    dispatcher = RouteDispatcher(
        router,
        {
            "billing": lambda q: "Forwarded to the billing team",
            "technical": lambda q: "Opened a support ticket",
            "general": lambda q: "I don't know how to handle this request yet",
        },
    )

    for message in MESSAGES:
        try:
            decision = await router.aroute(message, top_k=2)
            reply = await dispatcher.handler_for(decision).ainvoke(message)
        except NoRouteFoundError:
            reply = "I don't know how to handle this request"
            decision = None

        logger.info(f"Message: {message}")
        if decision is not None:
            score = f"{decision.score:.3f}" if decision.score is not None else "n/a"
            logger.info(f"  -> {decision.destination} ({decision.outcome.value}, score={score})")
        logger.info(f"  -> {reply}")


if __name__ == "__main__":
    asyncio.run(main())
