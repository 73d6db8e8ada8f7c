"""
Data Module Package

Vendor-neutral data types exchanged with models and stores:
- Chat messages and tool execution requests
- Tool specifications
- Embeddings
- Documents, text segments and metadata
"""

from llmkit.data.message import (
    ChatMessageType,
    ChatMessage,
    SystemMessage,
    UserMessage,
    AiMessage,
    ToolExecutionResultMessage,
    ToolExecutionRequest,
)
from llmkit.data.tool import ToolSpecification, ToolParameters
from llmkit.data.embedding import Embedding
from llmkit.data.document import Document, Metadata, TextSegment

__all__ = [
    "ChatMessageType",
    "ChatMessage",
    "SystemMessage",
    "UserMessage",
    "AiMessage",
    "ToolExecutionResultMessage",
    "ToolExecutionRequest",
    "ToolSpecification",
    "ToolParameters",
    "Embedding",
    "Document",
    "Metadata",
    "TextSegment",
]
