"""
Model Module Package

Common model abstractions and the per-vendor adapters:
- chat: ChatLanguageModel, StreamingChatLanguageModel, handlers
- embedding: EmbeddingModel
- tokenizer: Tokenizer, OpenAiTokenizer
- output: Response, TokenUsage, FinishReason
- azure / ollama: vendor adapters
"""

from llmkit.model.output import FinishReason, Response, TokenUsage
from llmkit.model.chat import (
    ChatLanguageModel,
    CollectingStreamingResponseHandler,
    StreamingChatLanguageModel,
    StreamingResponseHandler,
    TokenCountEstimator,
)
from llmkit.model.embedding import EmbeddingModel
from llmkit.model.tokenizer import OpenAiTokenizer, Tokenizer

__all__ = [
    "FinishReason",
    "Response",
    "TokenUsage",
    "ChatLanguageModel",
    "CollectingStreamingResponseHandler",
    "StreamingChatLanguageModel",
    "StreamingResponseHandler",
    "TokenCountEstimator",
    "EmbeddingModel",
    "OpenAiTokenizer",
    "Tokenizer",
]
