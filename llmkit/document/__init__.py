"""
Document loading, parsing, splitting and ingestion.
"""

from llmkit.document.parser import DocumentParser, JsonDocumentParser, TextDocumentParser
from llmkit.document.loader import FileSystemDocumentLoader
from llmkit.document.splitter import DocumentByTokenSplitter
from llmkit.document.ingestor import EmbeddingStoreIngestor, IngestionResult

__all__ = [
    "DocumentParser",
    "JsonDocumentParser",
    "TextDocumentParser",
    "FileSystemDocumentLoader",
    "DocumentByTokenSplitter",
    "EmbeddingStoreIngestor",
    "IngestionResult",
]
