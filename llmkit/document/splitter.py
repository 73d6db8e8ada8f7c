"""
Token-aware document splitting.

Splits documents into segments that fit an embedding model's context
window, with overlap between neighbours and boundaries snapped to nearby
sentence ends so segments read naturally.

Usage:
    from llmkit.document import DocumentByTokenSplitter

    splitter = DocumentByTokenSplitter(max_segment_tokens=500, overlap_tokens=50)
    segments = splitter.split(document)
"""

import re
from typing import List, Optional

from llmkit.config import settings
from llmkit.data.document import Document, TextSegment
from llmkit.logger import get_logger
from llmkit.model.tokenizer import OpenAiTokenizer

logger = get_logger(__name__)

SENTENCE_END = re.compile(r"[.!?]+(?=\s|$)|\n\n")

MAX_SEARCH_RANGE = 50


class DocumentByTokenSplitter:
    """
    Splits a document into TextSegments of at most `max_segment_tokens`.

    Each segment carries the document metadata plus its `index` within
    the document.
    """

    def __init__(
        self,
        max_segment_tokens: Optional[int] = None,
        overlap_tokens: Optional[int] = None,
        tokenizer: Optional[OpenAiTokenizer] = None,
        respect_sentences: bool = True,
    ):
        self.max_segment_tokens = max_segment_tokens if max_segment_tokens is not None else settings.splitter.max_segment_tokens
        self.overlap_tokens = overlap_tokens if overlap_tokens is not None else settings.splitter.overlap_tokens
        self.respect_sentences = respect_sentences

        if self.max_segment_tokens <= 0:
            raise ValueError("max_segment_tokens must be positive")
        if self.overlap_tokens < 0:
            raise ValueError("overlap_tokens cannot be negative")
        if self.overlap_tokens >= self.max_segment_tokens:
            raise ValueError("overlap_tokens must be less than max_segment_tokens")

        self.tokenizer = tokenizer or OpenAiTokenizer()
        self._search_range = min(MAX_SEARCH_RANGE, max(1, self.max_segment_tokens // 2))

        logger.debug(
            f"Initialized DocumentByTokenSplitter: max_segment_tokens={self.max_segment_tokens}, "
            f"overlap_tokens={self.overlap_tokens}"
        )

    def split(self, document: Document) -> List[TextSegment]:
        if not document.text or not document.text.strip():
            return []

        tokens = self.tokenizer.encode(document.text)
        total = len(tokens)

        if total <= self.max_segment_tokens:
            return [self._segment(document, document.text, 0)]

        segments: List[TextSegment] = []
        position = 0

        while position < total:
            end = min(position + self.max_segment_tokens, total)
            if end < total:
                end = self._snap_to_sentence_end(tokens, position, end)

            text = self.tokenizer.decode(tokens[position:end]).strip()
            if text:
                segments.append(self._segment(document, text, len(segments)))

            if end >= total:
                break

            next_position = end - self.overlap_tokens
            position = next_position if next_position > position else end

        logger.debug(f"Split document into {len(segments)} segments from {total} tokens")
        return segments

    def split_all(self, documents: List[Document]) -> List[TextSegment]:
        segments: List[TextSegment] = []
        for document in documents:
            segments.extend(self.split(document))
        return segments

    def _snap_to_sentence_end(self, tokens: List[int], position: int, end: int) -> int:
        """Move `end` back to the last sentence end within the search range."""
        if not self.respect_sentences:
            return end

        window_start = max(position + 1, end - self._search_range)
        window_text = self.tokenizer.decode(tokens[window_start:end])

        last = None
        for match in SENTENCE_END.finditer(window_text):
            last = match
        if last is None:
            return end

        snapped = window_start + len(self.tokenizer.encode(window_text[:last.end()]))
        return snapped if position < snapped <= end else end

    @staticmethod
    def _segment(document: Document, text: str, index: int) -> TextSegment:
        metadata = document.metadata.copy()
        metadata.add("index", index)
        return TextSegment(text=text, metadata=metadata)
