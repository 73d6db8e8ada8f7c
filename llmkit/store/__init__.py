"""
Embedding store interface and the Chroma adapter.
"""

from llmkit.store.embedding import EmbeddingMatch, EmbeddingStore, RelevanceScore
from llmkit.store.chroma import ChromaEmbeddingStore

__all__ = ["EmbeddingMatch", "EmbeddingStore", "RelevanceScore", "ChromaEmbeddingStore"]
