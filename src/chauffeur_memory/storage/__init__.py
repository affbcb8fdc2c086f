"""
Storage protocols and backends for the memory engine.

Provides protocol definitions for the vector index, the CRM store and
message history, plus the shipped implementations.
"""

from chauffeur_memory.storage.crm import InMemoryCRMStore, SQLAlchemyCRMStore
from chauffeur_memory.storage.protocols import CRMStore, MessageStore, VectorIndex
from chauffeur_memory.storage.vector import InMemoryVectorIndex, QdrantVectorIndex

__all__ = [
    "VectorIndex",
    "CRMStore",
    "MessageStore",
    "InMemoryVectorIndex",
    "QdrantVectorIndex",
    "InMemoryCRMStore",
    "SQLAlchemyCRMStore",
]

# Redis is an optional extra
try:
    from chauffeur_memory.storage.messages.redis import RedisMessageStore  # noqa: F401

    __all__.append("RedisMessageStore")
except ImportError:
    pass
