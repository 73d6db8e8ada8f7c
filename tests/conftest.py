"""
Pytest Configuration and Fixtures

This module provides shared fixtures and configuration for all tests.
"""

import os
import sys
import pytest
from pathlib import Path
from unittest.mock import MagicMock, patch

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Set test environment
os.environ["APP_ENV"] = "test"
os.environ["AZURE_OPENAI_API_KEY"] = "test-key"
os.environ["AZURE_OPENAI_ENDPOINT"] = "https://test.openai.azure.com"
os.environ["AZURE_OPENAI_API_VERSION"] = "2024-02-01"
os.environ["OLLAMA_BASE_URL"] = "http://localhost:11434"
os.environ["CHROMA_DIR"] = "/tmp/llmkit_test_chroma"
os.environ.pop("CHROMA_HOST", None)
os.environ.pop("LLM_TEMPERATURE", None)


class FakeEncoding:
    """
    Whitespace tokenizer standing in for a tiktoken encoding.

    Every whitespace-separated word is one token, so token counts in
    tests can be worked out by hand.
    """

    def __init__(self):
        self._ids = {}
        self._words = {}

    def encode(self, text):
        tokens = []
        for word in text.split():
            if word not in self._ids:
                self._ids[word] = len(self._ids)
                self._words[self._ids[word]] = word
            tokens.append(self._ids[word])
        return tokens

    def decode(self, tokens):
        return " ".join(self._words[t] for t in tokens)


@pytest.fixture(autouse=True)
def fake_tiktoken():
    """Keep tiktoken from downloading encodings."""
    encoding = FakeEncoding()
    with patch("llmkit.model.tokenizer.tiktoken.encoding_for_model", return_value=encoding) as for_model, \
            patch("llmkit.model.tokenizer.tiktoken.get_encoding", return_value=encoding):
        yield for_model


@pytest.fixture
def tokenizer():
    """OpenAiTokenizer backed by the fake encoding."""
    from llmkit.model.tokenizer import OpenAiTokenizer
    return OpenAiTokenizer()


@pytest.fixture
def no_sleep():
    """Skip retry backoff waits; both HTTP clients share the time module."""
    with patch("time.sleep") as sleep:
        yield sleep


@pytest.fixture
def make_response():
    """Factory for fake requests.Response objects."""
    def _make(status_code=200, json_data=None, lines=None, headers=None):
        response = MagicMock()
        response.status_code = status_code
        response.headers = headers or {}
        response.json.return_value = json_data
        response.iter_lines.return_value = lines or []
        if status_code >= 400:
            import requests
            response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
        return response
    return _make


@pytest.fixture
def sample_texts():
    """Sample texts for testing."""
    return [
        "How do I reset my password? Click 'Forgot Password' on the login page.",
        "What payment methods do you accept? We accept Visa, MasterCard, and PayPal.",
        "How can I track my order? Log into your account and go to Order History.",
    ]


@pytest.fixture
def mock_chroma_client():
    """Mock chromadb client with an empty collection."""
    client = MagicMock()
    collection = MagicMock()
    collection.count.return_value = 0
    client.get_or_create_collection.return_value = collection
    client.create_collection.return_value = collection
    return client


@pytest.fixture
def sample_json_file(tmp_path):
    """Create a sample FAQ JSON file for testing."""
    import json

    data = {"id": "1", "question": "How to reset password?", "answer": "Click forgot password.", "category": "account"}

    filepath = tmp_path / "faq.json"
    filepath.write_text(json.dumps(data), encoding="utf-8")
    return filepath
