"""
Tests for Configuration Module

Tests the Settings and configuration management.
"""

import os
import pytest
from unittest.mock import patch


class TestGetEnv:
    """Tests for environment variable helpers."""

    def test_get_env_with_default(self):
        """Test getting env var with default."""
        from llmkit.config import get_env

        result = get_env("NONEXISTENT_VAR", "default_value")
        assert result == "default_value"

    def test_get_env_existing(self):
        """Test getting existing env var."""
        from llmkit.config import get_env

        with patch.dict(os.environ, {"TEST_VAR": "test_value"}):
            result = get_env("TEST_VAR")
            assert result == "test_value"

    def test_get_env_required_missing(self):
        """Test required env var raises error when missing."""
        from llmkit.config import get_env

        with pytest.raises(ValueError):
            get_env("DEFINITELY_NOT_SET", required=True)


class TestGetEnvTyped:
    """Tests for typed environment variable helpers."""

    def test_get_env_int(self):
        """Test getting int from env."""
        from llmkit.config import get_env_int

        with patch.dict(os.environ, {"INT_VAR": "42"}):
            result = get_env_int("INT_VAR", 0)
            assert result == 42
            assert isinstance(result, int)

    def test_get_env_float(self):
        """Test getting float from env."""
        from llmkit.config import get_env_float

        with patch.dict(os.environ, {"FLOAT_VAR": "0.25"}):
            result = get_env_float("FLOAT_VAR", 0.0)
            assert result == 0.25
            assert isinstance(result, float)

    def test_get_env_bool_true(self):
        """Test getting bool true from env."""
        from llmkit.config import get_env_bool

        for true_value in ["true", "True", "TRUE", "1", "yes", "on"]:
            with patch.dict(os.environ, {"BOOL_VAR": true_value}):
                assert get_env_bool("BOOL_VAR", False) is True

    def test_get_env_bool_false(self):
        """Test getting bool false from env."""
        from llmkit.config import get_env_bool

        for false_value in ["false", "False", "0", "no", "off"]:
            with patch.dict(os.environ, {"BOOL_VAR": false_value}):
                assert get_env_bool("BOOL_VAR", True) is False


class TestAzureOpenAIConfig:
    """Tests for Azure OpenAI configuration."""

    def test_defaults(self):
        """Test default deployments and API version."""
        from llmkit.config import AzureOpenAIConfig

        with patch.dict(os.environ, {}, clear=True):
            config = AzureOpenAIConfig()

        assert config.chat_deployment == "gpt-35-turbo"
        assert config.embedding_deployment == "text-embedding-ada-002"
        assert config.api_version == "2024-02-01"

    def test_chat_url(self):
        """Test chat URL construction."""
        from llmkit.config import AzureOpenAIConfig

        config = AzureOpenAIConfig(
            api_key="test",
            endpoint="https://test.openai.azure.com/",  # Trailing slash
            api_version="2024-02-01",
            chat_deployment="chat-model"
        )

        url = config.chat_url
        assert "chat-model" in url
        assert "chat/completions" in url
        assert "//" not in url.replace("https://", "")

    def test_validate_missing_key(self):
        """Test validation fails without API key."""
        from llmkit.config import AzureOpenAIConfig

        config = AzureOpenAIConfig(api_key="", endpoint="https://test.openai.azure.com")

        with pytest.raises(ValueError, match="API_KEY"):
            config.validate()

    def test_validate_missing_endpoint(self):
        """Test validation fails without endpoint."""
        from llmkit.config import AzureOpenAIConfig

        config = AzureOpenAIConfig(api_key="key", endpoint="")

        with pytest.raises(ValueError, match="ENDPOINT"):
            config.validate()


class TestSplitterConfig:
    """Tests for splitter configuration."""

    def test_validate_invalid_segment_size(self):
        """Test validation fails with invalid segment size."""
        from llmkit.config import SplitterConfig

        config = SplitterConfig()
        config.max_segment_tokens = 0

        with pytest.raises(ValueError, match="positive"):
            config.validate()

    def test_validate_overlap_too_large(self):
        """Test validation fails when overlap >= segment size."""
        from llmkit.config import SplitterConfig

        config = SplitterConfig()
        config.max_segment_tokens = 100
        config.overlap_tokens = 100

        with pytest.raises(ValueError, match="less than"):
            config.validate()


class TestLLMConfig:
    """Tests for generation parameter defaults."""

    def test_optional_parameters_unset(self):
        """Test optional sampling parameters default to None."""
        from llmkit.config import LLMConfig

        with patch.dict(os.environ, {}, clear=True):
            config = LLMConfig()

        assert config.temperature == 0.7
        assert config.top_p is None
        assert config.max_tokens is None

    def test_max_tokens_from_env(self):
        """Test max tokens read from env."""
        from llmkit.config import LLMConfig

        with patch.dict(os.environ, {"LLM_MAX_TOKENS": "256"}):
            config = LLMConfig()

        assert config.max_tokens == 256


class TestSettings:
    """Tests for main Settings class."""

    def test_settings_singleton(self):
        """Test settings is accessible."""
        from llmkit.config import settings

        assert settings is not None
        assert hasattr(settings, "azure")
        assert hasattr(settings, "ollama")
        assert hasattr(settings, "chroma")
        assert hasattr(settings, "splitter")

    def test_is_development(self):
        """Test development mode detection."""
        from llmkit.config import Settings

        settings = Settings()
        settings.app_env = "development"
        assert settings.is_development is True
        assert settings.is_production is False

    def test_is_production(self):
        """Test production mode detection."""
        from llmkit.config import Settings

        settings = Settings()
        settings.app_env = "production"
        assert settings.is_production is True
        assert settings.is_development is False

    def test_validate_all_checks_only_selected_provider(self):
        """Test an Ollama-only setup validates without Azure credentials."""
        from llmkit.config import AzureOpenAIConfig, Settings

        settings = Settings()
        settings.azure = AzureOpenAIConfig(api_key="", endpoint="")

        assert settings.validate_all("ollama") is True
        with pytest.raises(ValueError, match="AZURE_OPENAI_API_KEY"):
            settings.validate_all("azure")

    def test_validate_all_openai_needs_key(self):
        """Test the OpenAI provider requires its own key."""
        from llmkit.config import OpenAIConfig, Settings

        settings = Settings()
        settings.openai = OpenAIConfig(api_key="")

        with pytest.raises(ValueError, match="OPENAI_API_KEY"):
            settings.validate_all("openai")

        settings.openai.api_key = "sk-test"
        assert settings.validate_all("openai") is True

    def test_validate_all_unknown_provider(self):
        """Test unknown providers are rejected."""
        from llmkit.config import Settings

        with pytest.raises(ValueError, match="Unknown provider"):
            Settings().validate_all("bedrock")


class TestOllamaConfig:
    """Tests for Ollama configuration."""

    def test_validate_missing_base_url(self):
        """Test validation fails without a base URL."""
        from llmkit.config import OllamaConfig

        with pytest.raises(ValueError, match="OLLAMA_BASE_URL"):
            OllamaConfig(base_url="").validate()
