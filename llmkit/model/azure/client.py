"""
Azure OpenAI HTTP Client

A thin requests-based client for the Azure OpenAI (and plain OpenAI) REST
API: chat completions, streamed chat completions and embeddings.

Authentication:
1. Azure API key: sent in the `api-key` header
2. Non-Azure OpenAI key: `Authorization: Bearer`, endpoint defaults to
   https://api.openai.com/v1 and the model travels in the request body
3. Token credential: any object with `get_token(scope)` returning an
   object with a `.token` attribute (e.g. azure-identity credentials)

Usage:
    client = AzureOpenAiClient(endpoint=..., service_version=..., api_key=...)
    for chunk in client.chat_completions_stream("gpt-35-turbo", body):
        ...
"""

import json
import time
from typing import Any, Dict, Iterator, List, Optional

import requests

from llmkit.config import settings
from llmkit.internal.utils import ensure_not_blank, get_or_default
from llmkit.logger import get_logger

logger = get_logger(__name__)

OPENAI_ENDPOINT = "https://api.openai.com/v1"
COGNITIVE_SERVICES_SCOPE = "https://cognitiveservices.azure.com/.default"


class AzureOpenAiClient:
    """
    JSON-over-HTTP client with retry on rate limiting and server errors.

    Attributes:
        endpoint: Base URL of the Azure resource (or OpenAI API)
        service_version: Azure `api-version` query parameter
        non_azure: True when talking to api.openai.com with a plain key
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        service_version: Optional[str] = None,
        api_key: Optional[str] = None,
        key_credential: Optional[str] = None,
        token_credential: Any = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        proxies: Optional[Dict[str, str]] = None,
        log_requests_and_responses: Optional[bool] = None,
    ):
        """
        Initialize the client.

        Args:
            endpoint: Azure endpoint, e.g. https://{resource}.openai.azure.com/
            service_version: API version, e.g. 2024-02-01
            api_key: Azure OpenAI API key
            key_credential: Non-Azure OpenAI API key
            token_credential: Microsoft Entra ID credential
            timeout: Request timeout in seconds
            max_retries: Attempts on 429/5xx/transport errors
            proxies: requests-style proxy mapping
            log_requests_and_responses: Log bodies at DEBUG level
        """
        self.token_credential = token_credential
        self.key_credential = key_credential
        self.non_azure = key_credential is not None and token_credential is None

        if self.non_azure:
            self.endpoint = get_or_default(endpoint, settings.openai.base_url or OPENAI_ENDPOINT)
            self.api_key = None
        else:
            self.endpoint = ensure_not_blank(get_or_default(endpoint, settings.azure.endpoint), "endpoint")
            self.api_key = get_or_default(api_key, settings.azure.api_key)
            if token_credential is None:
                ensure_not_blank(self.api_key, "api_key")

        self.service_version = get_or_default(service_version, settings.azure.api_version)
        self.timeout = get_or_default(timeout, settings.http.timeout_s)
        self.max_retries = max(1, get_or_default(max_retries, settings.http.max_retries))
        self.proxies = proxies
        self.log_requests_and_responses = get_or_default(
            log_requests_and_responses, settings.http.log_requests_and_responses
        )

        logger.info(
            f"Initialized AzureOpenAiClient: endpoint={self.endpoint}, "
            f"auth={self._auth_mode}, max_retries={self.max_retries}"
        )

    @property
    def _auth_mode(self) -> str:
        if self.token_credential is not None:
            return "token_credential"
        if self.non_azure:
            return "openai_key"
        return "api_key"

    def _url(self, deployment: str, operation: str) -> str:
        base = self.endpoint.rstrip("/")
        if self.non_azure:
            return f"{base}/{operation}"
        return f"{base}/openai/deployments/{deployment}/{operation}?api-version={self.service_version}"

    @property
    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token_credential is not None:
            token = self.token_credential.get_token(COGNITIVE_SERVICES_SCOPE)
            headers["Authorization"] = f"Bearer {token.token}"
        elif self.non_azure:
            headers["Authorization"] = f"Bearer {self.key_credential}"
        else:
            headers["api-key"] = self.api_key
        return headers

    def _with_model(self, deployment: str, body: Dict[str, Any]) -> Dict[str, Any]:
        # Azure routes by deployment; OpenAI needs the model in the body
        if self.non_azure:
            return {**body, "model": deployment}
        return body

    def _post(self, url: str, body: Dict[str, Any], stream: bool = False) -> requests.Response:
        """
        POST with retry logic.

        Raises:
            requests.RequestException: If all retries fail
        """
        if self.log_requests_and_responses:
            logger.debug(f"Request to {url}: {json.dumps(body)}")

        last_exception: Optional[Exception] = None

        for attempt in range(self.max_retries):
            try:
                response = requests.post(
                    url,
                    headers=self._headers,
                    json=body,
                    timeout=self.timeout,
                    stream=stream,
                    proxies=self.proxies,
                )

                retryable = response.status_code == 429 or response.status_code >= 500
                if retryable and attempt < self.max_retries - 1:
                    wait_time = int(response.headers.get("Retry-After", 2 ** attempt))
                    logger.warning(
                        f"Request failed with {response.status_code}, retrying in {wait_time}s "
                        f"(attempt {attempt + 1}/{self.max_retries})"
                    )
                    response.close()
                    time.sleep(wait_time)
                    continue

                response.raise_for_status()
                return response

            except (requests.ConnectionError, requests.Timeout) as e:
                last_exception = e
                logger.warning(f"API call failed (attempt {attempt + 1}/{self.max_retries}): {e}")
                if attempt < self.max_retries - 1:
                    time.sleep(2 ** attempt)

        raise last_exception or RuntimeError("Request failed")

    def chat_completions(self, deployment: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """Create a (non-streamed) chat completion."""
        response = self._post(self._url(deployment, "chat/completions"), self._with_model(deployment, body))
        data = response.json()
        if self.log_requests_and_responses:
            logger.debug(f"Response: {json.dumps(data)}")
        return data

    def chat_completions_stream(self, deployment: str, body: Dict[str, Any]) -> Iterator[Dict[str, Any]]:
        """
        Create a streamed chat completion.

        Yields:
            Decoded `chat.completion.chunk` objects from the SSE stream
        """
        body = {**self._with_model(deployment, body), "stream": True}
        response = self._post(self._url(deployment, "chat/completions"), body, stream=True)

        try:
            for line in response.iter_lines():
                if not line:
                    continue
                if isinstance(line, bytes):
                    line = line.decode("utf-8")
                if not line.startswith("data:"):
                    continue

                data_str = line[5:].strip()
                if data_str == "[DONE]":
                    break

                try:
                    chunk = json.loads(data_str)
                except json.JSONDecodeError:
                    logger.debug(f"Skipping malformed stream line: {data_str[:80]}")
                    continue

                if self.log_requests_and_responses:
                    logger.debug(f"Chunk: {data_str}")
                yield chunk
        finally:
            response.close()

    def embeddings(self, deployment: str, inputs: List[str]) -> Dict[str, Any]:
        """Create embeddings for a batch of input texts."""
        response = self._post(self._url(deployment, "embeddings"), self._with_model(deployment, {"input": inputs}))
        return response.json()
