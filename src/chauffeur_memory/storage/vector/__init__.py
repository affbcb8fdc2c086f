"""Vector index implementations."""

from chauffeur_memory.storage.vector.memory import InMemoryVectorIndex
from chauffeur_memory.storage.vector.models import MemoryItem, MemoryItemPayload
from chauffeur_memory.storage.vector.qdrant import QdrantVectorIndex

__all__ = [
    "InMemoryVectorIndex",
    "QdrantVectorIndex",
    "MemoryItem",
    "MemoryItemPayload",
]
