import logging
from typing import List, Optional, Union

from chauffeur_memory.config import MemorySettings
from chauffeur_memory.embeddings import OpenAIEmbedding, TextEmbedding
from chauffeur_memory.ingestion import MemoryIngestor
from chauffeur_memory.memory_store import EntityMemoryStore
from chauffeur_memory.models import (
    DRIVER_NOTE_TYPES,
    Client,
    ClientHistory,
    Driver,
    DriverHistory,
    EntityType,
    MemoryStats,
    Message,
    Trip,
)
from chauffeur_memory.storage.protocols import VectorIndex
from chauffeur_memory.storage.vector import MemoryItem, QdrantVectorIndex

logger = logging.getLogger(__name__)


def _newest_first(items: List[MemoryItem]) -> List[MemoryItem]:
    # ISO-8601 timestamps in UTC sort lexically
    return sorted(items, key=lambda item: item.payload.timestamp, reverse=True)


class MemoryService:
    """
    Long-term memory for clients and drivers.

    Owns one EntityMemoryStore per entity kind, each over its own vector
    index, and the shared embedding gateway. Nothing here raises on a
    dependency failure: ingestion returns None, retrieval returns empty
    results, and the calling chat or booking flow carries on.
    """

    def __init__(
        self,
        client_index: VectorIndex,
        driver_index: VectorIndex,
        embedding: TextEmbedding,
        fanout_factor: int = 4,
    ):
        self.embedding = embedding
        self.client_memory = EntityMemoryStore("client", client_index, embedding, fanout_factor)
        self.driver_memory = EntityMemoryStore("driver", driver_index, embedding, fanout_factor)
        self.ingestor = MemoryIngestor(self.client_memory, self.driver_memory)

    @classmethod
    def from_settings(
        cls, settings: MemorySettings, embedding: Optional[TextEmbedding] = None
    ) -> "MemoryService":
        """
        Production wiring: Qdrant indexes (on disk under ``settings.data_dir``,
        or on a server when ``qdrant_url`` is set) and the OpenAI-compatible
        embedding gateway.
        """
        if settings.qdrant_url:
            client_index = QdrantVectorIndex(url=settings.qdrant_url, collection_name="clients")
            driver_index = QdrantVectorIndex(url=settings.qdrant_url, collection_name="drivers")
        else:
            client_index = QdrantVectorIndex(
                path=settings.client_index_path, collection_name="clients"
            )
            driver_index = QdrantVectorIndex(
                path=settings.driver_index_path, collection_name="drivers"
            )

        if embedding is None:
            embedding = OpenAIEmbedding(
                model=settings.embedding_model,
                api_key=settings.embedding_api_key,
                base_url=settings.embedding_base_url,
                timeout=settings.embedding_timeout,
            )

        return cls(client_index, driver_index, embedding, settings.index_fanout_factor)

    def _memory_for(self, entity_type: EntityType) -> EntityMemoryStore:
        if entity_type == "client":
            return self.client_memory
        if entity_type == "driver":
            return self.driver_memory
        raise ValueError(f"Unknown entity type {entity_type!r}, expected 'client' or 'driver'")

    def initialize(self) -> MemoryStats:
        """Open both indexes and report what they hold."""
        stats = self.get_stats()
        logger.info(
            f"Memory service ready: {stats.client_docs} client items, "
            f"{stats.driver_docs} driver items, embeddings "
            f"{'enabled' if stats.embeddings_enabled else 'disabled'}"
        )
        return stats

    def close(self) -> None:
        for memory in (self.client_memory, self.driver_memory):
            try:
                memory.close()
            except Exception as e:
                logger.error(f"Failed to close {memory.entity_type} index: {e}")

    # Ingestion

    async def ingest_message(
        self,
        entity: Union[Client, Driver],
        message: Message,
        reply_text: Optional[str] = None,
    ) -> Optional[str]:
        return await self.ingestor.ingest_message(entity, message, reply_text)

    async def ingest_trip(
        self,
        entity: Union[Client, Driver],
        trip: Trip,
        counterparty_name: Optional[str] = None,
    ) -> Optional[str]:
        return await self.ingestor.ingest_trip(entity, trip, counterparty_name)

    async def ingest_preference(
        self, client: Client, preference: str, source: str = "extracted"
    ) -> Optional[str]:
        return await self.ingestor.ingest_preference(client, preference, source)

    async def ingest_driver_note(
        self, driver: Driver, note: str, note_type: str
    ) -> Optional[str]:
        return await self.ingestor.ingest_driver_note(driver, note, note_type)

    # Retrieval

    async def fetch_context(
        self,
        entity_id: str,
        query: str,
        limit: int = 5,
        entity_type: EntityType = "client",
    ) -> List[str]:
        """
        Up to ``limit`` stored texts for one entity, most similar to ``query`` first.

        Returns an empty list when embeddings are unavailable or the index fails.

        Raises:
            ValueError: If entity_type is not "client" or "driver"
        """
        return await self._memory_for(entity_type).recall(entity_id, query, limit)

    def get_history(
        self,
        entity_id: str,
        limit: int = 20,
        entity_type: EntityType = "client",
    ) -> Union[ClientHistory, DriverHistory]:
        """
        Everything stored for one entity, grouped by what it came from.

        Each group holds at most ``limit`` texts, newest first.
        """
        items = _newest_first(self._memory_for(entity_type).items(entity_id))

        def texts(*sources: str) -> List[str]:
            return [item.payload.text for item in items if item.payload.source in sources][:limit]

        if entity_type == "client":
            return ClientHistory(
                conversations=texts("conversation"),
                trips=texts("trip"),
                preferences=texts("preference"),
            )

        note_sources = tuple(t for t in DRIVER_NOTE_TYPES if t != "communication")
        return DriverHistory(
            trips=texts("trip"),
            notes=texts(*note_sources),
            communications=texts("communication"),
        )

    # Maintenance

    def delete_entity_memory(
        self, entity_id: str, entity_type: Optional[EntityType] = None
    ) -> int:
        """
        Purge every item stored for an entity.

        Args:
            entity_type: Index to purge; None purges the id from both

        Returns:
            Number of items deleted
        """
        if entity_type is None:
            return self.client_memory.forget(entity_id) + self.driver_memory.forget(entity_id)
        return self._memory_for(entity_type).forget(entity_id)

    def get_stats(self) -> MemoryStats:
        return MemoryStats(
            client_docs=self.client_memory.count(),
            driver_docs=self.driver_memory.count(),
            embeddings_enabled=self.embedding.available,
        )
