"""
Test Package Initialization

This package contains all unit tests for llmkit.

Test Structure:
- test_config.py: Configuration tests
- test_utils.py / test_json_codec.py: Internal helper tests
- test_messages.py / test_tokenizer.py: Data types and token estimation
- test_azure_*.py: Azure OpenAI client and model tests
- test_ollama.py: Ollama adapter tests
- test_embedding_store.py: Chroma embedding store tests
- test_document.py / test_ingestor.py: Loading, splitting and ingestion
- test_cli.py: Command line tests

Run tests with:
    pytest tests/ -v
"""
