"""
Per-entity-kind long-term memory.

One EntityMemoryStore wraps one vector index and is scoped to one entity
kind ("client" or "driver"); MemoryService owns one instance of each. Every
item is stamped with its entity id and kind, and recall always filters on
the entity id, so one entity's memories never leak into another's context.
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from chauffeur_memory.embeddings import TextEmbedding
from chauffeur_memory.models import EntityType, MemorySource
from chauffeur_memory.storage.protocols import VectorIndex
from chauffeur_memory.storage.vector.models import MemoryItem
from chauffeur_memory.utils.time import to_utc, utcnow

logger = logging.getLogger(__name__)

# Namespace for deterministic ids of keyed (mutable) items
MEMORY_KEY_NAMESPACE = uuid.UUID("6f1c8f5e-3b1a-4a8e-9a55-2d0b7c4e9f10")


def keyed_item_id(entity_type: str, entity_id: str, source: str, key: str) -> str:
    """Stable item id for the single item a mutable record (e.g. a trip) maps to."""
    return str(uuid.uuid5(MEMORY_KEY_NAMESPACE, f"{entity_type}:{entity_id}:{source}:{key}"))


class EntityMemoryStore:
    def __init__(
        self,
        entity_type: EntityType,
        index: VectorIndex,
        embedding: TextEmbedding,
        fanout_factor: int = 4,
    ):
        """
        Args:
            entity_type: Kind of entity every item in ``index`` belongs to
            index: Vector index dedicated to this entity kind
            embedding: Embedding gateway shared across stores
            fanout_factor: How many candidates to fetch per requested result
                before filtering to one entity. The index holds every entity
                of this kind, so the unfiltered top-k can be dominated by
                other entities.
        """
        self.entity_type = entity_type
        self.index = index
        self.embedding = embedding
        self.fanout_factor = max(1, fanout_factor)

    def _metadata(
        self,
        entity_id: str,
        source: MemorySource,
        timestamp: Optional[datetime],
        fields: Dict[str, Any],
    ) -> Dict[str, Any]:
        return {
            **{k: v for k, v in fields.items() if v is not None},
            "entity_id": entity_id,
            "entity_type": self.entity_type,
            "source": source,
            "timestamp": to_utc(timestamp or utcnow()).isoformat(),
        }

    async def remember(
        self,
        entity_id: str,
        source: MemorySource,
        text: str,
        key: Optional[str] = None,
        timestamp: Optional[datetime] = None,
        **fields: Any,
    ) -> Optional[str]:
        """
        Embed ``text`` and store it for ``entity_id``.

        Without ``key`` the item is appended. With ``key`` the item id is
        derived from (entity kind, entity id, source, key) and written as an
        upsert, so there is never more than one item per key and a rewrite
        replaces the old content in a single step.

        Returns:
            The stored item id, or None if embedding was unavailable or the
            write failed
        """
        try:
            vector = await self.embedding.embed_document(text)
            if vector is None:
                return None

            item_id = None
            if key is not None:
                item_id = keyed_item_id(self.entity_type, entity_id, source, key)

            return self.index.insert(
                vector,
                self._metadata(entity_id, source, timestamp, fields),
                text,
                item_id=item_id,
            )
        except Exception as e:
            logger.error(f"Failed to store {self.entity_type} {source} memory for {entity_id}: {e}")
            return None

    async def recall(self, entity_id: str, query: str, limit: int = 5) -> List[str]:
        """
        Texts of the ``limit`` items most similar to ``query`` for one entity,
        highest similarity first.
        """
        if limit <= 0:
            return []

        try:
            vector = await self.embedding.embed_query(query)
            if vector is None:
                return []

            results = self.index.query(
                vector,
                text_hint=query,
                k=limit * self.fanout_factor,
                filters={"entity_id": entity_id},
            )

            texts = [
                item.payload.text
                for item, _score in results
                if item.payload.entity_id == entity_id
            ]
            logger.debug(
                f"Recalled {min(len(texts), limit)} of {len(results)} candidates "
                f"for {self.entity_type} {entity_id}"
            )
            return texts[:limit]
        except Exception as e:
            logger.error(f"Failed to recall {self.entity_type} context for {entity_id}: {e}")
            return []

    def items(self, entity_id: str) -> List[MemoryItem]:
        """Every item stored for one entity, in index order."""
        try:
            return self.index.list_by_metadata({"entity_id": entity_id})
        except Exception as e:
            logger.error(f"Failed to list {self.entity_type} memories for {entity_id}: {e}")
            return []

    def forget(self, entity_id: str) -> int:
        """Delete every item stored for one entity. Returns the number deleted."""
        try:
            count = self.index.delete_by_metadata({"entity_id": entity_id})
            logger.info(f"Purged {count} {self.entity_type} memories for {entity_id}")
            return count
        except Exception as e:
            logger.error(f"Failed to purge {self.entity_type} memories for {entity_id}: {e}")
            return 0

    def count(self) -> int:
        try:
            return self.index.count()
        except Exception as e:
            logger.error(f"Failed to count {self.entity_type} memories: {e}")
            return 0

    def close(self) -> None:
        self.index.close()
