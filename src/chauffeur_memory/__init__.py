"""
chauffeur-memory: Contextual memory engine for a chauffeur dispatch CRM.

Core components:
- memory_service: Per-entity vector memory for clients and drivers (ingest, recall, history, purge)
- synthesis: Concierge replies grounded in the structured profile and recalled memories
- embeddings: Embedding gateways (OpenAI-compatible API, local E5)
- storage: Vector index and CRM store protocols with Qdrant, SQLAlchemy and in-memory backends
- models: Domain records (Client, Driver, Trip, Message, StructuredProfile, ...)
"""

__version__ = "0.1.0"

from chauffeur_memory.config import MemorySettings
from chauffeur_memory.exceptions import ReplyGenerationError
from chauffeur_memory.memory_service import MemoryService
from chauffeur_memory.models import (
    BookingDetails,
    ChatReply,
    Client,
    ClientHistory,
    Driver,
    DriverHistory,
    MemoryStats,
    Message,
    ProfileDelta,
    ProfileUpdate,
    StructuredProfile,
    Trip,
)
from chauffeur_memory.synthesis import ContextSynthesizer

__all__ = [
    "__version__",
    "MemorySettings",
    "MemoryService",
    "ContextSynthesizer",
    "ReplyGenerationError",
    # Models
    "Client",
    "Driver",
    "Trip",
    "Message",
    "StructuredProfile",
    "ProfileUpdate",
    "ProfileDelta",
    "BookingDetails",
    "ClientHistory",
    "DriverHistory",
    "MemoryStats",
    "ChatReply",
]
