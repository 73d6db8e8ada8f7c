"""
Embedding Store Module

The contract for vector databases: add embeddings (optionally with the
text segment they were computed from) and find the most relevant ones for
a reference embedding.

Relevance scores range from 0 (not relevant) to 1 (highly relevant) and
are derived from cosine similarity.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, List, Optional, TypeVar

from llmkit.data.embedding import Embedding

Embedded = TypeVar("Embedded")


@dataclass
class EmbeddingMatch(Generic[Embedded]):
    """
    A single search hit.

    Attributes:
        score: Relevance score in [0, 1]
        embedding_id: Id under which the embedding is stored
        embedding: The stored embedding
        embedded: The original content, if it was stored
    """
    score: float
    embedding_id: str
    embedding: Optional[Embedding]
    embedded: Optional[Embedded] = None


class RelevanceScore:

    @staticmethod
    def from_cosine_similarity(cosine_similarity: float) -> float:
        return (cosine_similarity + 1) / 2

    @staticmethod
    def from_cosine_distance(cosine_distance: float) -> float:
        return RelevanceScore.from_cosine_similarity(1 - cosine_distance)


class EmbeddingStore(ABC, Generic[Embedded]):
    """
    Abstract base class for embedding stores.

    Implementations must support:
    - Adding embeddings with generated or caller-supplied ids
    - Adding embeddings together with their embedded content
    - Relevance search with a minimum score
    """

    @abstractmethod
    def add(self, embedding: Embedding, embedded: Optional[Embedded] = None) -> str:
        """
        Add an embedding (and optionally its content) under a generated id.

        Returns:
            The generated id
        """
        pass

    @abstractmethod
    def add_with_id(self, id: str, embedding: Embedding) -> None:
        pass

    @abstractmethod
    def add_all(self, embeddings: List[Embedding], embedded: Optional[List[Embedded]] = None) -> List[str]:
        """
        Add several embeddings at once.

        Raises:
            ValueError: If `embedded` is given and its length differs from `embeddings`
        """
        pass

    @abstractmethod
    def find_relevant(
        self,
        reference_embedding: Embedding,
        max_results: int,
        min_score: float = 0.0,
    ) -> List[EmbeddingMatch[Embedded]]:
        """
        Find the embeddings closest to `reference_embedding`.

        Returns:
            At most `max_results` matches with score >= min_score, best first
        """
        pass

    def find_relevant_for_memory(
        self,
        memory_id: Any,
        reference_embedding: Embedding,
        max_results: int,
        min_score: float = 0.0,
    ) -> List[EmbeddingMatch[Embedded]]:
        """Relevance search scoped to one user's memory; optional for stores."""
        raise NotImplementedError(f"{type(self).__name__} does not support memory-scoped search")


def check_same_length(embeddings: List[Embedding], embedded: Optional[List[Any]]) -> None:
    if embedded is not None and len(embedded) != len(embeddings):
        raise ValueError(
            f"The list of embeddings ({len(embeddings)}) and embedded ({len(embedded)}) must have the same size"
        )
