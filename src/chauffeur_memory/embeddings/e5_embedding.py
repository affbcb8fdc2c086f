"""Local E5 embedding gateway."""

import logging
from typing import List, Optional

logger = logging.getLogger(__name__)


class E5Embedding:
    """
    Local embedding gateway using an E5 sentence-transformers model.

    Useful when the dispatch office runs without a remote embedding key.
    E5 models expect a "passage: " prefix on stored documents and "query: "
    on search queries; embed_document() and embed_query() add them.

    Supported E5 models:
    - intfloat/e5-base-v2 (768 dims) - Default
    - intfloat/e5-small-v2 (384 dims) - Faster, fits small dispatch servers
    """

    def __init__(
        self,
        model_name: str = "intfloat/e5-base-v2",
        device: Optional[str] = None,
        cache_folder: Optional[str] = None,
    ):
        """
        Initialize E5 embedder.

        Args:
            model_name: HuggingFace model identifier (default: e5-base-v2)
            device: Device for computation ("cuda", "cpu", or None for auto)
            cache_folder: Directory for model cache (None = default ~/.cache)
        """
        try:
            from sentence_transformers import SentenceTransformer
        except ImportError as e:
            raise ImportError(
                "sentence-transformers is required for E5Embedding. "
                "Install with: pip install chauffeur-memory[embeddings-transformers]"
            ) from e

        self._model_name = model_name

        logger.info(f"Loading E5 model: {model_name}")
        self._model = SentenceTransformer(model_name, device=device, cache_folder=cache_folder)
        logger.info(f"Model loaded: {model_name}")

    @property
    def model_name(self) -> str:
        return self._model_name

    @property
    def available(self) -> bool:
        return True

    def _encode(self, text: str) -> Optional[List[float]]:
        try:
            embedding = self._model.encode(
                text, normalize_embeddings=True, show_progress_bar=False
            )
            return embedding.tolist()
        except Exception as e:
            logger.error(f"E5 encoding failed: {e}")
            return None

    async def embed(self, text: str) -> Optional[List[float]]:
        return await self.embed_document(text)

    async def embed_document(self, text: str) -> Optional[List[float]]:
        if not text or not text.strip():
            return None
        return self._encode(f"passage: {text}")

    async def embed_query(self, text: str) -> Optional[List[float]]:
        if not text or not text.strip():
            return None
        return self._encode(f"query: {text}")
