"""
Routing Decision Model

Output of a single route call. Created fresh per query, never persisted.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class RouteOutcome(str, Enum):
    """How the destination was chosen."""
    MATCHED = "matched"      # Best match cleared the confidence threshold
    FELL_BACK = "fell_back"  # Default destination used instead


class RouteCandidate(BaseModel):
    """A ranked destination considered for the query."""

    model_config = ConfigDict(frozen=True)

    destination: str = Field(description="Destination name")
    score: float = Field(
        description="Best cosine similarity across the destination's descriptions",
        ge=-1.0,
        le=1.0,
    )


class RoutingDecision(BaseModel):
    """
    Structured result of routing one query.

    destination is the selected name (the default on fallback). score is the
    best similarity found, kept on fallback for diagnostics, and None when
    nothing was searched (empty registry).
    """

    model_config = ConfigDict(frozen=True)

    destination: str = Field(description="Selected destination name")
    score: float | None = Field(
        default=None,
        description="Similarity of the best match, or None if the index was empty",
    )
    outcome: RouteOutcome = Field(description="Whether the destination was matched or a fallback")
    candidates: list[RouteCandidate] = Field(
        default_factory=list,
        description="Ranked matches, best first (runner-ups when top_k > 1)",
    )
    query: str = Field(default="", description="The routed query text")

    @property
    def is_fallback(self) -> bool:
        return self.outcome == RouteOutcome.FELL_BACK

    @property
    def runner_ups(self) -> list[RouteCandidate]:
        """Candidates other than the best match."""
        return self.candidates[1:]
