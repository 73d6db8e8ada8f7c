"""
Azure OpenAI adapters: chat, streaming chat and embeddings.
"""

from llmkit.model.azure.client import AzureOpenAiClient
from llmkit.model.azure.chat_model import AzureOpenAiChatModel
from llmkit.model.azure.streaming_chat_model import AzureOpenAiStreamingChatModel
from llmkit.model.azure.streaming_response_builder import AzureOpenAiStreamingResponseBuilder
from llmkit.model.azure.embedding_model import AzureOpenAiEmbeddingModel

__all__ = [
    "AzureOpenAiClient",
    "AzureOpenAiChatModel",
    "AzureOpenAiStreamingChatModel",
    "AzureOpenAiStreamingResponseBuilder",
    "AzureOpenAiEmbeddingModel",
]
