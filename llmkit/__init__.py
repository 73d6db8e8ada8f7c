"""
llmkit - Multi-provider LLM client toolkit

Common interfaces with vendor adapters behind them.

This package provides:
- Chat and streaming chat models (Azure OpenAI, OpenAI, Ollama)
- Embedding models and a Chroma embedding store
- Token estimation backed by tiktoken
- Document loading, splitting and ingestion
- CLI interface for interaction
"""

__version__ = "0.1.0"

from llmkit.config import settings

__all__ = ["settings", "__version__"]
