"""
Storage protocol definitions for the memory engine.

These protocols define the interfaces the engine consumes. They are
implementation-agnostic: the vector index can be local Qdrant, a Qdrant
server or an in-memory dict; the CRM store can be any relational database
SQLAlchemy supports, or in-memory for tests.
"""

from typing import Any, Dict, List, Optional, Protocol, Tuple

from chauffeur_memory.models import (
    Client,
    Driver,
    Message,
    ProfileUpdate,
    StructuredProfile,
)
from chauffeur_memory.storage.vector.models import MemoryItem


class VectorIndex(Protocol):
    """
    Protocol for a per-entity-kind vector index.

    Implementations serialize their own physical writes; single-item inserts
    and deletes are atomic. Failures are logged and reported through the
    return value (None / False / 0 / []), never raised.
    """

    def insert(
        self,
        vector: List[float],
        metadata: Dict[str, Any],
        text: str,
        item_id: Optional[str] = None,
    ) -> Optional[str]:
        """
        Store an item.

        Args:
            vector: Embedding of ``text``
            metadata: Payload fields (entity_id, entity_type, source, timestamp, ...)
            text: The document that was embedded
            item_id: Explicit id. When an item with this id exists it is replaced
                atomically (upsert); otherwise a new id is generated.

        Returns:
            The item id, or None if the write failed
        """
        ...

    def delete_by_id(self, item_id: str) -> bool:
        """
        Delete one item. Safe to call for ids that do not exist.

        Returns:
            True if the delete was issued, False on failure or absence
        """
        ...

    def delete_by_metadata(self, filters: Dict[str, Any]) -> int:
        """
        Delete every item whose payload matches all ``filters`` (equality).

        Returns:
            Number of items deleted
        """
        ...

    def list_by_metadata(
        self, filters: Dict[str, Any], limit: Optional[int] = None
    ) -> List[MemoryItem]:
        """
        List items whose payload matches all ``filters`` (equality), in
        index-internal order.
        """
        ...

    def query(
        self,
        vector: List[float],
        text_hint: Optional[str] = None,
        k: int = 5,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[Tuple[MemoryItem, float]]:
        """
        Nearest-neighbour search.

        Args:
            vector: Query embedding
            text_hint: Raw query text for hybrid (lexical + vector) backends;
                pure vector backends ignore it
            k: Maximum number of results
            filters: Optional equality filters the backend may push down

        Returns:
            (item, score) pairs, highest similarity first
        """
        ...

    def count(self) -> int:
        """Total number of items in the index."""
        ...

    def close(self) -> None:
        """Release file handles / connections."""
        ...


class MessageStore(Protocol):
    """
    Protocol for conversation message history.

    Messages are returned oldest first.
    """

    def add_message(self, message: Message) -> Message:
        """Persist a message and return it."""
        ...

    def list_messages(self, participant_id: str, limit: Optional[int] = None) -> List[Message]:
        """
        Messages sent or received by a participant, oldest first.

        Args:
            participant_id: Client or driver id
            limit: Only the most recent ``limit`` messages (still oldest first)
        """
        ...


class CRMStore(MessageStore, Protocol):
    """
    Protocol for the relational dispatch store, as seen by the memory engine.

    Covers client and driver lookup, the Structured Profile row per client
    and message history. Everything else the CRM stores (trips, payments,
    calendar ids) is outside this boundary.
    """

    def get_client(self, client_id: str) -> Optional[Client]:
        ...

    def get_client_by_phone(self, phone: str) -> Optional[Client]:
        ...

    def create_client(self, client: Client) -> Client:
        ...

    def get_driver(self, driver_id: str) -> Optional[Driver]:
        ...

    def create_driver(self, driver: Driver) -> Driver:
        ...

    def get_profile(self, client_id: str) -> Optional[StructuredProfile]:
        """The Structured Profile for a client, if one exists."""
        ...

    def create_profile(self, profile: StructuredProfile) -> StructuredProfile:
        ...

    def update_profile(
        self, client_id: str, update: ProfileUpdate
    ) -> Optional[StructuredProfile]:
        """
        Apply a partial update in one transaction. Each provided field is
        replaced whole.

        Returns:
            The updated profile, or None if the client has no profile
        """
        ...
