# Destination Registry
# Manages the destination set and populates the embedding index

from embedding_router.registry.destination import Destination
from embedding_router.registry.registry import DestinationRegistry

__all__ = ["Destination", "DestinationRegistry"]
