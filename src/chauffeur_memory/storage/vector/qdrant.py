import logging
import threading
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from qdrant_client import QdrantClient
from qdrant_client.models import (
    Distance,
    FieldCondition,
    Filter,
    FilterSelector,
    MatchValue,
    PointIdsList,
    PointStruct,
    VectorParams,
)

from chauffeur_memory.storage.vector.models import MemoryItem, MemoryItemPayload

logger = logging.getLogger(__name__)

SCROLL_PAGE_SIZE = 256


class QdrantVectorIndex:
    """
    Qdrant-backed vector index.

    Runs Qdrant in local on-disk mode by default (one directory per index), so
    the index survives process restarts without a server. Pass ``url`` to use
    a Qdrant server instead.

    The collection is created lazily on the first insert, sized to that
    vector. Every operation logs and returns an empty value on failure: the
    index must never block the chat or booking flow.
    """

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        url: Optional[str] = None,
        collection_name: str = "memories",
    ):
        """
        Initialize the index. No I/O happens until the first operation.

        Args:
            path: Directory for local on-disk storage
            url: Qdrant server URL (takes precedence over path)
            collection_name: Collection name (default: memories)
        """
        if path is None and url is None:
            raise ValueError("QdrantVectorIndex needs a path or a url")

        self.path = Path(path) if path is not None else None
        self.url = url
        self.collection_name = collection_name
        self._client: Optional[QdrantClient] = None
        self._collection_ready = False
        self._write_lock = threading.Lock()

    def _get_client(self) -> QdrantClient:
        if self._client is None:
            if self.url:
                self._client = QdrantClient(url=self.url)
            else:
                self.path.mkdir(parents=True, exist_ok=True)
                self._client = QdrantClient(path=str(self.path))
            logger.info(
                f"Opened Qdrant index '{self.collection_name}' at {self.url or self.path}"
            )
        return self._client

    def _has_collection(self) -> bool:
        if not self._collection_ready:
            self._collection_ready = self._get_client().collection_exists(self.collection_name)
        return self._collection_ready

    def _ensure_collection(self, dimension: int) -> None:
        """Create the collection if no persisted one exists. Caller holds the write lock."""
        if self._has_collection():
            return

        self._get_client().create_collection(
            collection_name=self.collection_name,
            vectors_config=VectorParams(size=dimension, distance=Distance.COSINE),
        )
        self._collection_ready = True
        logger.info(f"Created collection '{self.collection_name}' ({dimension} dims)")

    def _build_filter(self, filters: Optional[Dict[str, Any]]) -> Optional[Filter]:
        if not filters:
            return None
        return Filter(
            must=[
                FieldCondition(key=key, match=MatchValue(value=value))
                for key, value in filters.items()
            ]
        )

    def _to_item(self, point) -> MemoryItem:
        vector = point.vector or []
        if isinstance(vector, dict):
            vector = next(iter(vector.values()), [])
        return MemoryItem(
            id=str(point.id),
            vector=vector,
            payload=MemoryItemPayload(**point.payload),
        )

    def insert(
        self,
        vector: List[float],
        metadata: Dict[str, Any],
        text: str,
        item_id: Optional[str] = None,
    ) -> Optional[str]:
        """
        Insert an item. With an explicit item_id this is an upsert: an existing
        point with that id is replaced atomically.

        Returns:
            The item id, or None if the write failed
        """
        item_id = item_id or str(uuid.uuid4())
        payload = {**metadata, "text": text}

        try:
            with self._write_lock:
                self._ensure_collection(len(vector))
                self._get_client().upsert(
                    collection_name=self.collection_name,
                    points=[PointStruct(id=item_id, vector=vector, payload=payload)],
                )
            logger.debug(f"Stored item {item_id} in '{self.collection_name}': '{text[:50]}...'")
            return item_id
        except Exception as e:
            logger.error(f"Failed to store item in '{self.collection_name}': {e}")
            return None

    def delete_by_id(self, item_id: str) -> bool:
        try:
            if not self._has_collection():
                return False
            with self._write_lock:
                self._get_client().delete(
                    collection_name=self.collection_name,
                    points_selector=PointIdsList(points=[item_id]),
                )
            logger.debug(f"Deleted item {item_id} from '{self.collection_name}'")
            return True
        except Exception as e:
            logger.error(f"Failed to delete item {item_id} from '{self.collection_name}': {e}")
            return False

    def delete_by_metadata(self, filters: Dict[str, Any]) -> int:
        try:
            if not self._has_collection():
                return 0
            qdrant_filter = self._build_filter(filters)
            with self._write_lock:
                client = self._get_client()
                count = client.count(
                    collection_name=self.collection_name,
                    count_filter=qdrant_filter,
                    exact=True,
                ).count
                if count > 0:
                    client.delete(
                        collection_name=self.collection_name,
                        points_selector=FilterSelector(filter=qdrant_filter),
                    )
            logger.info(f"Deleted {count} items from '{self.collection_name}' matching {filters}")
            return count
        except Exception as e:
            logger.error(f"Failed to delete items matching {filters}: {e}")
            return 0

    def list_by_metadata(
        self, filters: Dict[str, Any], limit: Optional[int] = None
    ) -> List[MemoryItem]:
        if limit is not None and limit <= 0:
            return []

        try:
            if not self._has_collection():
                return []

            client = self._get_client()
            qdrant_filter = self._build_filter(filters)
            items: List[MemoryItem] = []
            offset = None

            while True:
                page_size = SCROLL_PAGE_SIZE
                if limit is not None:
                    page_size = min(page_size, limit - len(items))
                points, offset = client.scroll(
                    collection_name=self.collection_name,
                    scroll_filter=qdrant_filter,
                    limit=page_size,
                    offset=offset,
                    with_payload=True,
                    with_vectors=True,
                )
                items.extend(self._to_item(point) for point in points)

                if offset is None or (limit is not None and len(items) >= limit):
                    break

            return items
        except Exception as e:
            logger.error(f"Failed to list items matching {filters}: {e}")
            return []

    def query(
        self,
        vector: List[float],
        text_hint: Optional[str] = None,
        k: int = 5,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[Tuple[MemoryItem, float]]:
        """Nearest neighbours, highest score first. text_hint is ignored (pure vector search)."""
        try:
            if not self._has_collection():
                return []

            hits = self._get_client().query_points(
                collection_name=self.collection_name,
                query=vector,
                limit=k,
                query_filter=self._build_filter(filters),
                with_payload=True,
                with_vectors=True,
            ).points

            logger.debug(f"{len(hits)} hits in '{self.collection_name}'")
            return [(self._to_item(hit), hit.score) for hit in hits]
        except Exception as e:
            logger.error(f"Query against '{self.collection_name}' failed: {e}")
            return []

    def get_by_id(self, item_id: str) -> Optional[MemoryItem]:
        try:
            if not self._has_collection():
                return None
            points = self._get_client().retrieve(
                collection_name=self.collection_name,
                ids=[item_id],
                with_payload=True,
                with_vectors=True,
            )
            return self._to_item(points[0]) if points else None
        except Exception as e:
            logger.error(f"Failed to retrieve item {item_id}: {e}")
            return None

    def count(self) -> int:
        try:
            if not self._has_collection():
                return 0
            return self._get_client().count(
                collection_name=self.collection_name, exact=True
            ).count
        except Exception as e:
            logger.error(f"Failed to count items in '{self.collection_name}': {e}")
            return 0

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
            self._collection_ready = False
