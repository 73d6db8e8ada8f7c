"""
Embedding Store Ingestion

Orchestrates:
1. Splitting documents into segments
2. Embedding the segments in batches
3. Storing embeddings and segments in an EmbeddingStore

Usage:
    from llmkit.document import EmbeddingStoreIngestor

    ingestor = EmbeddingStoreIngestor(embedding_model, embedding_store, splitter)
    result = ingestor.ingest(documents)
    print(f"Ingested {result.segments_ingested} segments")
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from llmkit.data.document import Document, TextSegment
from llmkit.document.splitter import DocumentByTokenSplitter
from llmkit.internal.utils import ensure_greater_than_zero
from llmkit.logger import get_logger
from llmkit.model.embedding import EmbeddingModel
from llmkit.store.embedding import EmbeddingStore

logger = get_logger(__name__)


@dataclass
class IngestionResult:
    """
    Result of an ingestion run.

    Attributes:
        documents_processed: Number of documents split
        segments_created: Number of segments produced by splitting
        segments_ingested: Number of segments embedded and stored
        ids: Store ids of the ingested segments
        errors: Errors from failed documents or batches
    """
    documents_processed: int = 0
    segments_created: int = 0
    segments_ingested: int = 0
    ids: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return len(self.errors) == 0


class EmbeddingStoreIngestor:

    def __init__(
        self,
        embedding_model: EmbeddingModel,
        embedding_store: EmbeddingStore,
        document_splitter: Optional[DocumentByTokenSplitter] = None,
        batch_size: int = 64,
    ):
        """
        Args:
            embedding_model: Model used to embed segments
            embedding_store: Store receiving embeddings and segments
            document_splitter: Splitter; without one each document is a single segment
            batch_size: Segments per embedding request
        """
        self.embedding_model = embedding_model
        self.embedding_store = embedding_store
        self.document_splitter = document_splitter
        self.batch_size = ensure_greater_than_zero(batch_size, "batch_size")

    def ingest(self, documents: List[Document]) -> IngestionResult:
        result = IngestionResult()

        segments: List[TextSegment] = []
        for document in documents:
            try:
                if self.document_splitter is not None:
                    segments.extend(self.document_splitter.split(document))
                else:
                    segments.append(document.to_text_segment())
                result.documents_processed += 1
            except Exception as e:
                logger.error(f"Failed to split document: {e}")
                result.errors.append(f"Splitting error: {e}")

        result.segments_created = len(segments)

        for batch_start in range(0, len(segments), self.batch_size):
            batch = segments[batch_start:batch_start + self.batch_size]
            batch_number = batch_start // self.batch_size + 1
            try:
                embeddings = self.embedding_model.embed_all(batch).content
                ids = self.embedding_store.add_all(embeddings, batch)
                result.ids.extend(ids)
                result.segments_ingested += len(batch)
                logger.info(f"Ingested batch {batch_number}: {len(batch)} segments")
            except Exception as e:
                logger.error(f"Failed to ingest batch {batch_number}: {e}")
                result.errors.append(f"Batch {batch_number} error: {e}")

        return result

    def ingest_text(self, text: str, metadata: Optional[Dict[str, Any]] = None) -> IngestionResult:
        return self.ingest([Document.from_text(text, metadata)])
