"""
Destination Model

Represents a named routing target in the registry.
Contains identity, the example texts it is matched against, and caller metadata.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Destination(BaseModel):
    """
    A registered destination.

    This is the router's view of a target - what it is called and
    which phrasings should lead to it. Binding the name to an actual
    handler is the caller's business.
    """

    model_config = ConfigDict(frozen=True)

    # === Identity ===
    name: str = Field(
        ...,
        min_length=1,
        description="Unique destination name (e.g., 'billing', 'technical')"
    )

    # === Matching ===
    descriptions: tuple[str, ...] = Field(
        ...,
        min_length=1,
        description="Example texts describing what this destination handles"
    )

    # === Bookkeeping ===
    registered_at: datetime = Field(
        default_factory=_utcnow,
        description="When the destination was registered"
    )
    metadata: dict = Field(
        default_factory=dict,
        description="Additional caller-owned metadata"
    )

    def to_public_dict(self) -> dict:
        """Return a serializable view of the destination."""
        return {
            "name": self.name,
            "descriptions": list(self.descriptions),
            "registered_at": self.registered_at.isoformat(),
            "metadata": self.metadata,
        }
