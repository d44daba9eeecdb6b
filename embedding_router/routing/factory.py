"""
Router Factory

Builds a ready-to-use EmbeddingRouter from a RouterConfig or the environment.

Destinations come from an explicit mapping or from the JSON file named by
the config. An explicit default_destination in the config wins over the
file's "default".
"""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from langchain_core.embeddings import Embeddings

from embedding_router.config import RouterConfig, load_destinations
from embedding_router.embeddings import EmbeddingClient, create_embeddings
from embedding_router.routing.router import EmbeddingRouter

logger = logging.getLogger(__name__)


def create_router(
    config: RouterConfig | None = None,
    destinations: Mapping[str, Sequence[str]] | None = None,
    embeddings: Embeddings | EmbeddingClient | None = None,
) -> EmbeddingRouter:
    """
    Create a router from configuration.

    Args:
        config: Router settings (defaults to RouterConfig())
        destinations: name -> descriptions; read from config.destinations_path if omitted
        embeddings: Embedding function; built from config.embedding_model if omitted

    Returns:
        EmbeddingRouter with every destination registered

    Raises:
        ValueError: If no destinations source is available or the file is malformed
        ImportError: If the embedding provider package is not installed

    Examples:
        # Explicit destinations, provider from config
        router = create_router(
            RouterConfig(embedding_model="ollama/nomic-embed-text", default_destination="general"),
            destinations={"billing": ["invoice", "refund"], "technical": ["bug", "crash"]},
        )
    """
    config = config or RouterConfig()
    default = config.default_destination

    if destinations is None:
        if not config.destinations_path:
            raise ValueError(
                "No destinations given: pass a mapping or set destinations_path "
                "(ROUTER_DESTINATIONS_PATH)"
            )
        destinations, file_default = load_destinations(config.destinations_path)
        if default is None:
            default = file_default

    if embeddings is None:
        embeddings = create_embeddings(model=config.embedding_model)

    logger.info(
        f"Creating router: {len(destinations)} destinations, "
        f"threshold={config.confidence_threshold}, top_k={config.top_k}, default={default}"
    )

    return EmbeddingRouter.from_names_and_descriptions(
        destinations,
        embeddings,
        default_destination=default,
        confidence_threshold=config.confidence_threshold,
        top_k=config.top_k,
    )


def create_router_from_env(
    destinations_path: str | None = None,
    embeddings: Embeddings | EmbeddingClient | None = None,
) -> EmbeddingRouter:
    """
    Create a router configured from ROUTER_* environment variables.

    Args:
        destinations_path: Destinations file; falls back to ROUTER_DESTINATIONS_PATH
        embeddings: Embedding function; built from ROUTER_EMBEDDING_MODEL if omitted
    """
    config = RouterConfig.from_env()
    if destinations_path is not None:
        config = config.model_copy(update={"destinations_path": str(destinations_path)})
    return create_router(config, embeddings=embeddings)
