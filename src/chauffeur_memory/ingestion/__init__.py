"""
Ingestion of domain events (messages, trips, preferences, driver notes) into
the vector memories.
"""

from chauffeur_memory.ingestion.documents import (
    MemoryDocument,
    client_message_document,
    client_preference_document,
    client_trip_document,
    driver_message_document,
    driver_note_document,
    driver_trip_document,
)
from chauffeur_memory.ingestion.ingestor import MemoryIngestor

__all__ = [
    "MemoryIngestor",
    "MemoryDocument",
    "client_message_document",
    "client_preference_document",
    "client_trip_document",
    "driver_message_document",
    "driver_note_document",
    "driver_trip_document",
]
