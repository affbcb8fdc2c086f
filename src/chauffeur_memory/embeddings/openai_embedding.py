"""OpenAI-compatible embedding gateway (xAI by default)."""

import logging
import os
from typing import List, Optional

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.x.ai/v1"

# Set once the disabled gateway has been reported in this process
_disabled_logged = False


class OpenAIEmbedding:
    """
    Embedding gateway over any OpenAI-compatible embeddings endpoint.

    Defaults to xAI's API, the provider the dispatch app is configured with.
    Without an API key the gateway is disabled: every call returns None and
    the condition is logged once per process, at INFO.

    Example:
        >>> embedder = OpenAIEmbedding(api_key="xai-...")
        >>> vector = await embedder.embed("Client Ana preference: still water")
    """

    def __init__(
        self,
        model: str = "v1",
        api_key: Optional[str] = None,
        base_url: Optional[str] = DEFAULT_BASE_URL,
        dimensions: Optional[int] = None,
        timeout: float = 30.0,
    ):
        """
        Initialize the gateway.

        Args:
            model: Embedding model name (default: xAI "v1")
            api_key: API key (None = read XAI_API_KEY, still None = disabled)
            base_url: Endpoint (default: xAI; None = official OpenAI)
            dimensions: Requested output dimension, for models that support it
            timeout: Request timeout in seconds
        """
        self._model = model
        self._dimensions = dimensions
        self._client = None

        api_key = api_key or os.getenv("XAI_API_KEY")
        if not api_key:
            return

        from openai import OpenAI

        self._client = OpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
        )
        logger.info(f"Embedding gateway initialized: {model} ({base_url or 'openai'})")

    @property
    def model_name(self) -> str:
        return self._model

    @property
    def available(self) -> bool:
        return self._client is not None

    def _embed_single(self, text: str) -> List[float]:
        kwargs = {"model": self._model, "input": text}
        if self._dimensions is not None:
            kwargs["dimensions"] = self._dimensions

        response = self._client.embeddings.create(**kwargs)
        return response.data[0].embedding

    async def embed(self, text: str) -> Optional[List[float]]:
        if self._client is None:
            global _disabled_logged
            if not _disabled_logged:
                logger.info("Embeddings disabled: no API key configured, memory features are off")
                _disabled_logged = True
            return None

        if not text or not text.strip():
            logger.debug("Skipping embedding of empty text")
            return None

        try:
            return self._embed_single(text)
        except Exception as e:
            logger.error(f"Embedding generation failed: {e}")
            return None

    async def embed_document(self, text: str) -> Optional[List[float]]:
        return await self.embed(text)

    async def embed_query(self, text: str) -> Optional[List[float]]:
        return await self.embed(text)
