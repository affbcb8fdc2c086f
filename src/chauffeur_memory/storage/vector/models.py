"""
Models for vector storage.

A Memory Item is one embedded document: its vector, the literal text that was
embedded (so retrieval can hand readable snippets to the model), and a
metadata payload that scopes it to one entity.
"""

from typing import List

from pydantic import BaseModel, ConfigDict

from chauffeur_memory.models import EntityType, MemorySource


class MemoryItemPayload(BaseModel):
    """
    Payload stored alongside each vector.

    Source-specific fields (trip_id, trip_status, client_name, message_id, ...)
    are kept as extra attributes.
    """

    model_config = ConfigDict(extra="allow")

    text: str
    entity_id: str
    entity_type: EntityType
    source: MemorySource
    timestamp: str


class MemoryItem(BaseModel):
    id: str
    vector: List[float]
    payload: MemoryItemPayload
