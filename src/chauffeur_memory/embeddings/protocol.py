"""
Embedding gateway protocol.

Turns text into a fixed-length vector for the memory indexes. Memory is a
best-effort enhancement of the booking flow, so gateways never raise for
missing credentials or remote failures: they return ``None`` ("unavailable")
and the caller skips the operation.
"""

from typing import List, Optional, Protocol

from typing_extensions import runtime_checkable


@runtime_checkable
class TextEmbedding(Protocol):
    """
    Protocol for embedding gateways.

    Implementations must:

    1. Return ``None`` instead of raising when the backing model or API cannot
       produce a vector (no credential, transient error, timeout, empty text)
    2. Never retry on their own; retrying is the caller's decision
    3. Return vectors of the same dimension for every call

    Example:
        >>> embedder = OpenAIEmbedding(api_key=None)
        >>> await embedder.embed("Client Ana: need a car at 9am") is None
        True
    """

    @property
    def model_name(self) -> str:
        """Identifier of the embedding model (e.g., "v1", "intfloat/e5-base-v2")."""
        ...

    @property
    def available(self) -> bool:
        """
        Whether this gateway can produce vectors at all.

        False means a configuration-absent state (e.g., no API key), not a
        transient failure.
        """
        ...

    async def embed(self, text: str) -> Optional[List[float]]:
        """
        Embed a piece of text.

        Args:
            text: Text to embed

        Returns:
            Embedding vector, or None when unavailable
        """
        ...

    async def embed_document(self, text: str) -> Optional[List[float]]:
        """
        Embed a document that will be stored in an index.

        Models that distinguish documents from queries (E5) add their
        document prefix here.
        """
        ...

    async def embed_query(self, text: str) -> Optional[List[float]]:
        """
        Embed a search query.

        Models that distinguish documents from queries (E5) add their query
        prefix here.
        """
        ...
