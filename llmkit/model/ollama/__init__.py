"""
Ollama adapters: chat, streaming chat and embeddings.
"""

from llmkit.model.ollama.client import OllamaClient
from llmkit.model.ollama.messages import ChatRequest, Message, Options, Role
from llmkit.model.ollama.chat_model import (
    OllamaChatModel,
    OllamaStreamingChatModel,
    OllamaStreamingResponseBuilder,
)
from llmkit.model.ollama.embedding_model import OllamaEmbeddingModel

__all__ = [
    "OllamaClient",
    "ChatRequest",
    "Message",
    "Options",
    "Role",
    "OllamaChatModel",
    "OllamaStreamingChatModel",
    "OllamaStreamingResponseBuilder",
    "OllamaEmbeddingModel",
]
