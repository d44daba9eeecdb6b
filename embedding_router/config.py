"""
Router Configuration

Settings model for building a router, readable from environment variables,
plus the loader for JSON destination files.

Environment Variables:
- ROUTER_EMBEDDING_MODEL: Embedding model identifier (see create_embeddings)
- ROUTER_CONFIDENCE_THRESHOLD: Minimum similarity to accept a match (default: 0.0)
- ROUTER_TOP_K: Number of ranked candidates per decision (default: 1)
- ROUTER_DEFAULT_DESTINATION: Fallback destination name (optional)
- ROUTER_DESTINATIONS_PATH: JSON file with destinations (optional)

Destination file format:
    {
        "default": "general",
        "destinations": {
            "billing": ["invoice", "payment", "refund"],
            "technical": ["bug", "error", "crash"]
        }
    }
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class RouterConfig(BaseModel):
    """Configuration for router construction."""

    embedding_model: str = Field(
        default="text-embedding-3-small",
        description="Embedding model identifier (e.g., 'text-embedding-3-small', 'ollama/nomic-embed-text')",
    )
    confidence_threshold: Optional[float] = Field(
        default=None,
        ge=-1.0,
        le=1.0,
        description="Minimum cosine similarity to accept a match (inclusive); None takes the best match",
    )
    top_k: int = Field(
        default=1,
        ge=1,
        description="Number of ranked candidates reported per decision",
    )
    default_destination: Optional[str] = Field(
        default=None,
        description="Fallback destination when no match is confident enough",
    )
    destinations_path: Optional[str] = Field(
        default=None,
        description="Path to a JSON destinations file",
    )

    @classmethod
    def from_env(cls) -> "RouterConfig":
        """
        Build a config from ROUTER_* environment variables.

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value
        """
        values: dict = {}
        env_map = {
            "ROUTER_EMBEDDING_MODEL": "embedding_model",
            "ROUTER_CONFIDENCE_THRESHOLD": "confidence_threshold",
            "ROUTER_TOP_K": "top_k",
            "ROUTER_DEFAULT_DESTINATION": "default_destination",
            "ROUTER_DESTINATIONS_PATH": "destinations_path",
        }
        for env_name, field_name in env_map.items():
            value = os.getenv(env_name)
            if value:
                values[field_name] = value

        config = cls(**values)
        logger.debug(f"Loaded router config from environment: {config.model_dump()}")
        return config


def load_destinations(path: str | Path) -> tuple[dict[str, list[str]], Optional[str]]:
    """
    Load destinations from a JSON file.

    Args:
        path: Path to the destinations file

    Returns:
        Tuple of (name -> descriptions, default destination or None)

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the document is malformed
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            document = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in destinations file {path}: {e}") from e

    if not isinstance(document, dict):
        raise ValueError(f"Destinations file {path} must contain a JSON object")

    raw = document.get("destinations")
    if not isinstance(raw, dict):
        raise ValueError(f"Destinations file {path} needs a 'destinations' object")

    destinations: dict[str, list[str]] = {}
    for name, descriptions in raw.items():
        if isinstance(descriptions, str):
            descriptions = [descriptions]
        if not isinstance(descriptions, list) or not all(isinstance(d, str) for d in descriptions):
            raise ValueError(f"Descriptions for {name!r} in {path} must be a list of strings")
        destinations[name] = descriptions

    default = document.get("default")
    if default is not None and not isinstance(default, str):
        raise ValueError(f"'default' in {path} must be a string")

    logger.info(f"Loaded {len(destinations)} destinations from {path}")
    return destinations, default
