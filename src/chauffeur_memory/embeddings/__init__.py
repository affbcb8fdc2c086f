"""
Embedding gateways for chauffeur-memory.

- OpenAIEmbedding: remote OpenAI-compatible API (xAI by default)
- E5Embedding: local E5 model (needs the embeddings-transformers extra)
"""

from chauffeur_memory.embeddings.e5_embedding import E5Embedding
from chauffeur_memory.embeddings.openai_embedding import OpenAIEmbedding
from chauffeur_memory.embeddings.protocol import TextEmbedding

__all__ = [
    "TextEmbedding",
    "OpenAIEmbedding",
    "E5Embedding",
]
