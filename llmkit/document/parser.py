"""
Document parsers turn a byte stream into a Document.

Supported formats:
- Plain text and markdown (TextDocumentParser)
- JSON objects or arrays of objects (JsonDocumentParser)
"""

import json
from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Dict, List, Optional, Sequence

from llmkit.data.document import Document, Metadata
from llmkit.internal.utils import is_null_or_blank


class DocumentParser(ABC):

    @abstractmethod
    def parse(self, stream: BinaryIO) -> Document:
        """
        Parse a document from a binary stream.

        Raises:
            ValueError: If the stream holds no usable text
        """
        pass


class TextDocumentParser(DocumentParser):

    def __init__(self, charset: str = "utf-8"):
        self.charset = charset

    def parse(self, stream: BinaryIO) -> Document:
        text = stream.read().decode(self.charset, errors="ignore")
        if is_null_or_blank(text):
            raise ValueError("Document is blank")
        return Document(text=text)


class JsonDocumentParser(DocumentParser):
    """
    Parses JSON records into a Document.

    The text comes from the first non-blank text field. FAQ-style records
    with `question` and `answer` are embedded together so retrieval sees
    both. Remaining scalar fields become metadata. An array of records is
    joined into one document, one record per paragraph.
    """

    def __init__(self, text_fields: Sequence[str] = ("text", "content", "body"), charset: str = "utf-8"):
        self.text_fields = tuple(text_fields)
        self.charset = charset

    def parse(self, stream: BinaryIO) -> Document:
        try:
            content = json.loads(stream.read().decode(self.charset))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}") from e

        if isinstance(content, dict):
            text = self._text_of(content)
            if text is None:
                raise ValueError("JSON object has no text field")
            return Document(text=text, metadata=self._metadata_of(content))

        if isinstance(content, list):
            texts: List[str] = []
            for item in content:
                if isinstance(item, dict):
                    text = self._text_of(item)
                    if text:
                        texts.append(text)
            if not texts:
                raise ValueError("JSON array has no records with text")
            return Document(text="\n\n".join(texts))

        raise ValueError(f"Unsupported JSON document type: {type(content).__name__}")

    def _text_of(self, item: Dict[str, Any]) -> Optional[str]:
        for name in self.text_fields:
            value = item.get(name)
            if isinstance(value, str) and value.strip():
                return value

        question = str(item.get("question") or "").strip()
        answer = str(item.get("answer") or "").strip()
        if question and answer:
            return f"Question: {question}\n\nAnswer: {answer}"
        return question or answer or None

    def _metadata_of(self, item: Dict[str, Any]) -> Metadata:
        metadata = Metadata()
        for key, value in item.items():
            if key in self.text_fields or key in ("question", "answer"):
                continue
            if isinstance(value, (str, int, float, bool)):
                metadata.add(key, value)
        return metadata
