"""
Configuration Management Module

This module handles all library configuration using environment variables
with sensible defaults. Every adapter reads its defaults from here, so a
model can be constructed without arguments once the environment is set.

Usage:
    from llmkit.config import settings
    print(settings.azure.endpoint)

Environment variables are loaded from .env file (if present) and can be
overridden by system environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

PROVIDERS = ("azure", "openai", "ollama")


def get_env(key: str, default: str = "", required: bool = False) -> str:
    """
    Get an environment variable with optional default and validation.

    Args:
        key: The environment variable name
        default: Default value if not set
        required: If True, raises ValueError when not set

    Returns:
        The environment variable value or default

    Raises:
        ValueError: If required=True and the variable is not set
    """
    value = os.getenv(key, default)
    if required and not value:
        raise ValueError(f"Required environment variable '{key}' is not set")
    return value


def get_env_int(key: str, default: int) -> int:
    """Get an environment variable as integer."""
    return int(get_env(key, str(default)))


def get_env_float(key: str, default: float) -> float:
    """Get an environment variable as float."""
    return float(get_env(key, str(default)))


def get_env_bool(key: str, default: bool) -> bool:
    """Get an environment variable as boolean."""
    value = get_env(key, str(default)).lower()
    return value in ("true", "1", "yes", "on")


def get_env_list(key: str, default: str = "") -> List[str]:
    """Get a comma separated environment variable as a list of strings."""
    return [item.strip() for item in get_env(key, default).split(",") if item.strip()]


@dataclass
class AzureOpenAIConfig:
    """
    Azure OpenAI service configuration.

    Attributes:
        api_key: Azure OpenAI API key
        endpoint: Azure OpenAI endpoint URL
        api_version: API service version string
        chat_deployment: Deployment name for chat model
        embedding_deployment: Deployment name for embedding model
    """
    api_key: str = field(default_factory=lambda: get_env("AZURE_OPENAI_API_KEY"))
    endpoint: str = field(default_factory=lambda: get_env("AZURE_OPENAI_ENDPOINT"))
    api_version: str = field(default_factory=lambda: get_env("AZURE_OPENAI_API_VERSION", "2024-02-01"))
    chat_deployment: str = field(default_factory=lambda: get_env("AZURE_OPENAI_CHAT_DEPLOYMENT", "gpt-35-turbo"))
    embedding_deployment: str = field(
        default_factory=lambda: get_env("AZURE_OPENAI_EMBEDDING_DEPLOYMENT", "text-embedding-ada-002")
    )

    def validate(self) -> bool:
        """Validate that required Azure OpenAI settings are configured."""
        if not self.api_key:
            raise ValueError("AZURE_OPENAI_API_KEY is required")
        if not self.endpoint:
            raise ValueError("AZURE_OPENAI_ENDPOINT is required")
        return True

    @property
    def embedding_url(self) -> str:
        """Get the full URL for embedding API calls."""
        base = self.endpoint.rstrip("/")
        return f"{base}/openai/deployments/{self.embedding_deployment}/embeddings?api-version={self.api_version}"

    @property
    def chat_url(self) -> str:
        """Get the full URL for chat completion API calls."""
        base = self.endpoint.rstrip("/")
        return f"{base}/openai/deployments/{self.chat_deployment}/chat/completions?api-version={self.api_version}"


@dataclass
class OpenAIConfig:
    """Non-Azure OpenAI configuration, used with a plain OpenAI API key."""
    api_key: str = field(default_factory=lambda: get_env("OPENAI_API_KEY"))
    base_url: str = field(default_factory=lambda: get_env("OPENAI_BASE_URL", "https://api.openai.com/v1"))
    model_name: str = field(default_factory=lambda: get_env("OPENAI_MODEL", "gpt-3.5-turbo"))
    embedding_model_name: str = field(default_factory=lambda: get_env("OPENAI_EMBEDDING_MODEL", "text-embedding-ada-002"))

    def validate(self) -> bool:
        if not self.api_key:
            raise ValueError("OPENAI_API_KEY is required")
        return True


@dataclass
class OllamaConfig:
    """
    Ollama server configuration.

    Attributes:
        base_url: Ollama server URL
        model_name: Default chat model
        embedding_model_name: Default embedding model
    """
    base_url: str = field(default_factory=lambda: get_env("OLLAMA_BASE_URL", "http://localhost:11434"))
    model_name: str = field(default_factory=lambda: get_env("OLLAMA_MODEL", "llama2"))
    embedding_model_name: str = field(default_factory=lambda: get_env("OLLAMA_EMBEDDING_MODEL", "nomic-embed-text"))

    def validate(self) -> bool:
        if not self.base_url:
            raise ValueError("OLLAMA_BASE_URL is required")
        return True


@dataclass
class ChromaConfig:
    """
    Chroma embedding store configuration.

    A non-empty host switches the store to the HTTP client; otherwise
    data is persisted locally under `directory`.
    """
    directory: str = field(default_factory=lambda: get_env("CHROMA_DIR", "./chroma"))
    collection: str = field(default_factory=lambda: get_env("CHROMA_COLLECTION", "llmkit"))
    host: str = field(default_factory=lambda: get_env("CHROMA_HOST"))
    port: int = field(default_factory=lambda: get_env_int("CHROMA_PORT", 8000))

    @property
    def remote(self) -> bool:
        return bool(self.host)


@dataclass
class HttpConfig:
    """
    HTTP behaviour shared by all vendor clients.

    Attributes:
        timeout_s: Request timeout in seconds
        max_retries: Attempts for rate-limited or failing requests
        log_requests_and_responses: Log request and response bodies at DEBUG
    """
    timeout_s: float = field(default_factory=lambda: get_env_float("LLMKIT_HTTP_TIMEOUT", 60.0))
    max_retries: int = field(default_factory=lambda: get_env_int("LLMKIT_HTTP_MAX_RETRIES", 3))
    log_requests_and_responses: bool = field(
        default_factory=lambda: get_env_bool("LLMKIT_LOG_REQUESTS", False)
    )


@dataclass
class LLMConfig:
    """
    Default generation parameters.

    Attributes:
        temperature: Sampling temperature
        top_p: Nucleus sampling mass (unset by default)
        max_tokens: Maximum tokens in response (unset by default)
        presence_penalty: Penalty for repeating topics (unset by default)
        frequency_penalty: Penalty for repeating exact phrases (unset by default)
    """
    temperature: float = field(default_factory=lambda: get_env_float("LLM_TEMPERATURE", 0.7))
    top_p: Optional[float] = field(
        default_factory=lambda: get_env_float("LLM_TOP_P", 0.0) if get_env("LLM_TOP_P") else None
    )
    max_tokens: Optional[int] = field(
        default_factory=lambda: get_env_int("LLM_MAX_TOKENS", 0) if get_env("LLM_MAX_TOKENS") else None
    )
    presence_penalty: Optional[float] = field(
        default_factory=lambda: get_env_float("LLM_PRESENCE_PENALTY", 0.0) if get_env("LLM_PRESENCE_PENALTY") else None
    )
    frequency_penalty: Optional[float] = field(
        default_factory=lambda: get_env_float("LLM_FREQUENCY_PENALTY", 0.0) if get_env("LLM_FREQUENCY_PENALTY") else None
    )


@dataclass
class SplitterConfig:
    """
    Document splitting configuration.

    Attributes:
        max_segment_tokens: Maximum tokens per segment
        overlap_tokens: Number of overlapping tokens between segments
    """
    max_segment_tokens: int = field(default_factory=lambda: get_env_int("SPLITTER_MAX_SEGMENT_TOKENS", 500))
    overlap_tokens: int = field(default_factory=lambda: get_env_int("SPLITTER_OVERLAP_TOKENS", 50))

    def validate(self) -> bool:
        """Validate splitter settings."""
        if self.max_segment_tokens <= 0:
            raise ValueError("SPLITTER_MAX_SEGMENT_TOKENS must be positive")
        if self.overlap_tokens < 0:
            raise ValueError("SPLITTER_OVERLAP_TOKENS cannot be negative")
        if self.overlap_tokens >= self.max_segment_tokens:
            raise ValueError("SPLITTER_OVERLAP_TOKENS must be less than SPLITTER_MAX_SEGMENT_TOKENS")
        return True


@dataclass
class LoggingConfig:
    """
    Logging configuration.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        file: Optional log file path
    """
    level: str = field(default_factory=lambda: get_env("LOG_LEVEL", "INFO"))
    file: Optional[str] = field(default_factory=lambda: get_env("LOG_FILE") or None)


@dataclass
class Settings:
    """
    Main settings container aggregating all configuration sections.

    Example:
        from llmkit.config import settings

        settings.azure.validate()
        url = settings.azure.chat_url
        timeout = settings.http.timeout_s
    """
    azure: AzureOpenAIConfig = field(default_factory=AzureOpenAIConfig)
    openai: OpenAIConfig = field(default_factory=OpenAIConfig)
    ollama: OllamaConfig = field(default_factory=OllamaConfig)
    chroma: ChromaConfig = field(default_factory=ChromaConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    llm: LLMConfig = field(default_factory=LLMConfig)
    splitter: SplitterConfig = field(default_factory=SplitterConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    app_env: str = field(default_factory=lambda: get_env("APP_ENV", "development"))

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    def validate_all(self, provider: str = "azure") -> bool:
        """
        Validate the sections needed to use a model provider.

        Only the selected provider is checked, so an Ollama-only setup
        does not need Azure credentials.

        Args:
            provider: One of PROVIDERS

        Raises:
            ValueError: If the provider is unknown or a validation fails
        """
        if provider not in PROVIDERS:
            raise ValueError(f"Unknown provider: {provider}")
        getattr(self, provider).validate()
        self.splitter.validate()
        return True


# Singleton settings instance
settings = Settings()
