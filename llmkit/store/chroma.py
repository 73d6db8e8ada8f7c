"""
Chroma Embedding Store

EmbeddingStore backed by ChromaDB. Similarity search itself is done by
Chroma; this adapter maps embeddings, segments and metadata in and out.

Features:
- Local persistent storage or a remote Chroma server
- Cosine space, distances converted to relevance scores
- Segment metadata stored as Chroma metadata

Usage:
    from llmkit.store.chroma import ChromaEmbeddingStore

    store = ChromaEmbeddingStore(collection_name="docs")
    store.add_all(embeddings, segments)
    matches = store.find_relevant(query_embedding, max_results=5, min_score=0.7)
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, cast

import chromadb
from chromadb.config import Settings as ChromaSettings

from llmkit.config import settings
from llmkit.data.document import Metadata, TextSegment
from llmkit.data.embedding import Embedding
from llmkit.internal.utils import ensure_greater_than_zero, random_uuid
from llmkit.logger import get_logger
from llmkit.store.embedding import (
    EmbeddingMatch,
    EmbeddingStore,
    RelevanceScore,
    check_same_length,
)

logger = get_logger(__name__)

COLLECTION_METADATA = {"hnsw:space": "cosine"}

# Chroma rejects empty metadata dicts, so empty entries in a mixed batch carry this key
EMPTY_METADATA_KEY = "__llmkit_empty__"


class ChromaEmbeddingStore(EmbeddingStore[TextSegment]):

    def __init__(
        self,
        collection_name: Optional[str] = None,
        persist_directory: Optional[str] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
        client: Any = None,
    ):
        """
        Initialize the Chroma store.

        Args:
            collection_name: Collection to use (defaults to settings)
            persist_directory: Directory for local persistent storage
            host: Chroma server host; switches to the HTTP client
            port: Chroma server port
            client: Ready chromadb client, overrides the other connection arguments
        """
        self.collection_name = collection_name or settings.chroma.collection
        host = host or settings.chroma.host

        if client is not None:
            self._client = client
            self.location = "custom client"
        elif host:
            port = port or settings.chroma.port
            self._client = chromadb.HttpClient(
                host=host,
                port=port,
                settings=ChromaSettings(anonymized_telemetry=False),
            )
            self.location = f"{host}:{port}"
        else:
            persist_directory = persist_directory or settings.chroma.directory
            Path(persist_directory).mkdir(parents=True, exist_ok=True)
            self._client = chromadb.PersistentClient(
                path=persist_directory,
                settings=ChromaSettings(anonymized_telemetry=False),
            )
            self.location = persist_directory

        self._collection = self._client.get_or_create_collection(
            name=self.collection_name,
            metadata=COLLECTION_METADATA,
        )

        logger.info(
            f"Initialized ChromaEmbeddingStore: collection={self.collection_name}, "
            f"location={self.location}, existing_embeddings={self.count()}"
        )

    def add(self, embedding: Embedding, embedded: Optional[TextSegment] = None) -> str:
        id = random_uuid()
        self._upsert([id], [embedding], [embedded] if embedded is not None else None)
        return id

    def add_with_id(self, id: str, embedding: Embedding) -> None:
        self._upsert([id], [embedding], None)

    def add_all(self, embeddings: List[Embedding], embedded: Optional[List[TextSegment]] = None) -> List[str]:
        check_same_length(embeddings, embedded)
        if not embeddings:
            return []
        ids = [random_uuid() for _ in embeddings]
        self._upsert(ids, embeddings, embedded)
        return ids

    def _upsert(
        self,
        ids: List[str],
        embeddings: List[Embedding],
        segments: Optional[List[TextSegment]],
    ) -> None:
        kwargs: Dict[str, Any] = {
            "ids": ids,
            "embeddings": cast(Any, [e.vector_as_list() for e in embeddings]),
        }
        if segments is not None:
            kwargs["documents"] = [s.text for s in segments]
            metadatas = [s.metadata.to_dict() or None for s in segments]
            if any(metadatas):
                kwargs["metadatas"] = cast(Any, [m or {EMPTY_METADATA_KEY: ""} for m in metadatas])

        self._collection.upsert(**kwargs)
        logger.debug(f"Added {len(ids)} embeddings to {self.collection_name}")

    def find_relevant(
        self,
        reference_embedding: Embedding,
        max_results: int,
        min_score: float = 0.0,
    ) -> List[EmbeddingMatch[TextSegment]]:
        ensure_greater_than_zero(max_results, "max_results")

        count = self.count()
        if count == 0:
            return []

        results = self._collection.query(
            query_embeddings=[reference_embedding.vector_as_list()],
            n_results=min(max_results, count),
            include=["documents", "metadatas", "distances", "embeddings"],
        )

        matches: List[EmbeddingMatch[TextSegment]] = []
        ids = (results.get("ids") or [[]])[0]
        documents = _first(results.get("documents"))
        metadatas = _first(results.get("metadatas"))
        distances = _first(results.get("distances"))
        vectors = _first(results.get("embeddings"))

        for i, embedding_id in enumerate(ids):
            distance = distances[i] if i < len(distances) else 1.0
            score = RelevanceScore.from_cosine_distance(distance)
            if score < min_score:
                continue

            vector = vectors[i] if i < len(vectors) else None
            document = documents[i] if i < len(documents) else None
            metadata = dict(metadatas[i] or {}) if i < len(metadatas) else {}
            metadata.pop(EMPTY_METADATA_KEY, None)

            matches.append(EmbeddingMatch(
                score=score,
                embedding_id=embedding_id,
                embedding=Embedding.from_list(list(vector)) if vector is not None else None,
                embedded=TextSegment(text=document, metadata=Metadata(metadata)) if document is not None else None,
            ))

        matches.sort(key=lambda m: m.score, reverse=True)
        logger.debug(f"Search returned {len(matches)} matches")
        return matches

    def count(self) -> int:
        return self._collection.count()

    def remove_all(self, ids: Optional[List[str]] = None) -> None:
        """Remove the given ids, or everything when no ids are given."""
        if ids:
            self._collection.delete(ids=ids)
            logger.info(f"Deleted {len(ids)} embeddings from {self.collection_name}")
            return

        # Chroma has no truncate, so recreate the collection
        self._client.delete_collection(name=self.collection_name)
        self._collection = self._client.create_collection(
            name=self.collection_name,
            metadata=COLLECTION_METADATA,
        )
        logger.info(f"Cleared collection {self.collection_name}")

    def get_stats(self) -> Dict[str, Any]:
        return {
            "collection_name": self.collection_name,
            "embedding_count": self.count(),
            "location": self.location,
        }


def _first(nested: Optional[List[Any]]) -> List[Any]:
    """Chroma returns one list per query embedding; we always send one."""
    if nested is None or len(nested) == 0:
        return []
    return list(nested[0]) if nested[0] is not None else []
