"""
In-memory vector index implementation.

Dictionary-backed store with cosine similarity search, suitable for tests
and development. For anything that must survive a restart use
QdrantVectorIndex.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional, Tuple

from chauffeur_memory.storage.vector.models import MemoryItem, MemoryItemPayload

logger = logging.getLogger(__name__)


class InMemoryVectorIndex:
    """
    In-memory implementation of the VectorIndex protocol.

    Items are kept in insertion order. Data is lost on restart.
    """

    def __init__(self, name: str = "memory"):
        self.name = name
        self._items: Dict[str, Dict[str, Any]] = {}  # id -> {vector, payload}

        logger.info(f"InMemoryVectorIndex '{name}' initialized")

    def _cosine_similarity(self, vec1: List[float], vec2: List[float]) -> float:
        """Calculate cosine similarity between two vectors."""
        if len(vec1) != len(vec2):
            raise ValueError("Vectors must have the same length")

        dot_product = sum(a * b for a, b in zip(vec1, vec2))
        magnitude1 = sum(a * a for a in vec1) ** 0.5
        magnitude2 = sum(b * b for b in vec2) ** 0.5

        if magnitude1 == 0 or magnitude2 == 0:
            return 0.0

        return dot_product / (magnitude1 * magnitude2)

    def _matches(self, payload: dict, filters: Optional[Dict[str, Any]]) -> bool:
        if not filters:
            return True
        return all(payload.get(key) == value for key, value in filters.items())

    def _to_item(self, item_id: str) -> MemoryItem:
        data = self._items[item_id]
        return MemoryItem(
            id=item_id,
            vector=data["vector"],
            payload=MemoryItemPayload(**data["payload"]),
        )

    def insert(
        self,
        vector: List[float],
        metadata: Dict[str, Any],
        text: str,
        item_id: Optional[str] = None,
    ) -> Optional[str]:
        """Insert an item, or replace it in place when item_id already exists."""
        item_id = item_id or str(uuid.uuid4())
        payload = {**metadata, "text": text}

        # Reassigning an existing key keeps its listing position
        self._items[item_id] = {"vector": list(vector), "payload": payload}

        logger.debug(f"[{self.name}] Stored item {item_id}: '{text[:50]}...'")
        return item_id

    def delete_by_id(self, item_id: str) -> bool:
        if self._items.pop(item_id, None) is None:
            return False
        logger.debug(f"[{self.name}] Deleted item {item_id}")
        return True

    def delete_by_metadata(self, filters: Dict[str, Any]) -> int:
        matching = [
            item_id
            for item_id, data in self._items.items()
            if self._matches(data["payload"], filters)
        ]
        for item_id in matching:
            del self._items[item_id]

        logger.info(f"[{self.name}] Deleted {len(matching)} items matching {filters}")
        return len(matching)

    def list_by_metadata(
        self, filters: Dict[str, Any], limit: Optional[int] = None
    ) -> List[MemoryItem]:
        items = [
            self._to_item(item_id)
            for item_id, data in self._items.items()
            if self._matches(data["payload"], filters)
        ]
        return items[:limit] if limit is not None else items

    def query(
        self,
        vector: List[float],
        text_hint: Optional[str] = None,
        k: int = 5,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[Tuple[MemoryItem, float]]:
        """Nearest neighbours by cosine similarity. text_hint is ignored."""
        scored = []
        for item_id, data in self._items.items():
            if not self._matches(data["payload"], filters):
                continue
            try:
                score = self._cosine_similarity(vector, data["vector"])
            except ValueError as e:
                logger.error(f"[{self.name}] Skipping item {item_id}: {e}")
                continue
            scored.append((item_id, score))

        # Stable sort keeps insertion order among ties
        scored.sort(key=lambda x: x[1], reverse=True)
        results = [(self._to_item(item_id), score) for item_id, score in scored[:k]]

        logger.debug(f"[{self.name}] {len(results)} results (k={k}, filters={filters})")
        return results

    def get_by_id(self, item_id: str) -> Optional[MemoryItem]:
        if item_id not in self._items:
            return None
        return self._to_item(item_id)

    def count(self) -> int:
        return len(self._items)

    def close(self) -> None:
        pass

    def clear(self) -> None:
        """Remove ALL items from the index."""
        count = len(self._items)
        self._items.clear()
        logger.info(f"[{self.name}] Cleared all items ({count} total)")
