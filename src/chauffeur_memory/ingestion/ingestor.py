import logging
from typing import Optional, Union

from chauffeur_memory.ingestion.documents import (
    MemoryDocument,
    client_message_document,
    client_preference_document,
    client_trip_document,
    driver_message_document,
    driver_note_document,
    driver_trip_document,
)
from chauffeur_memory.memory_store import EntityMemoryStore
from chauffeur_memory.models import Client, Driver, Message, Trip

logger = logging.getLogger(__name__)


class MemoryIngestor:
    """
    Writes domain events into the client and driver memories.

    Ingestion is advisory: an unavailable embedding gateway or a failed index
    write is logged and the method returns None, so sending a message or
    saving a trip never fails because of memory.
    """

    def __init__(self, client_memory: EntityMemoryStore, driver_memory: EntityMemoryStore):
        self.client_memory = client_memory
        self.driver_memory = driver_memory

    async def _store(
        self, memory: EntityMemoryStore, entity_id: str, document: MemoryDocument
    ) -> Optional[str]:
        item_id = await memory.remember(
            entity_id,
            document.source,
            document.text,
            key=document.key,
            timestamp=document.timestamp,
            **document.fields,
        )
        if item_id:
            logger.debug(f"Ingested {document.source} memory {item_id} for {entity_id}")
        return item_id

    async def ingest_message(
        self,
        entity: Union[Client, Driver],
        message: Message,
        reply_text: Optional[str] = None,
    ) -> Optional[str]:
        """
        Store a message exchanged with a client or driver.

        Args:
            entity: The client or driver the message belongs to
            message: The inbound message
            reply_text: For clients, the concierge's reply, stored in the same
                document. For drivers, a context line placed before the message.
        """
        if isinstance(entity, Client):
            document = client_message_document(entity, message, reply_text)
            return await self._store(self.client_memory, entity.id, document)

        document = driver_message_document(entity, message, reply_text)
        return await self._store(self.driver_memory, entity.id, document)

    async def ingest_trip(
        self,
        entity: Union[Client, Driver],
        trip: Trip,
        counterparty_name: Optional[str] = None,
    ) -> Optional[str]:
        """
        Store (or replace) the memory of a trip for a client or driver.

        A trip's status, price and driver change over time, so it is keyed by
        trip id: re-ingesting the same trip leaves exactly one item holding the
        latest content.

        Args:
            entity: Client who booked, or driver assigned
            trip: Current trip record
            counterparty_name: Assigned driver's name (for a client) or the
                client's name (for a driver)
        """
        if isinstance(entity, Client):
            document = client_trip_document(entity, trip, counterparty_name)
            return await self._store(self.client_memory, entity.id, document)

        document = driver_trip_document(entity, trip, counterparty_name)
        return await self._store(self.driver_memory, entity.id, document)

    async def ingest_preference(
        self, client: Client, preference: str, source: str = "extracted"
    ) -> Optional[str]:
        """
        Store a client preference.

        Args:
            source: Where it came from ("extracted" from chat, "manual" from a dispatcher)
        """
        document = client_preference_document(client, preference, source)
        return await self._store(self.client_memory, client.id, document)

    async def ingest_driver_note(
        self, driver: Driver, note: str, note_type: str
    ) -> Optional[str]:
        """
        Store a dispatcher note about a driver.

        Raises:
            ValueError: If note_type is not performance, availability,
                feedback or communication
        """
        document = driver_note_document(driver, note, note_type)
        return await self._store(self.driver_memory, driver.id, document)
