"""
Ollama HTTP Client

requests-based client for a local or remote Ollama server.

Usage:
    client = OllamaClient("http://localhost:11434")
    for chunk in client.stream_chat(request):
        print(chunk["message"]["content"], end="")
"""

import json
import time
from typing import Any, Dict, Iterator, Optional

import requests

from llmkit.config import settings
from llmkit.internal.utils import ensure_not_blank, get_or_default
from llmkit.logger import get_logger
from llmkit.model.ollama.messages import ChatRequest

logger = get_logger(__name__)


class OllamaClient:

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        log_requests_and_responses: Optional[bool] = None,
    ):
        self.base_url = ensure_not_blank(get_or_default(base_url, settings.ollama.base_url), "base_url").rstrip("/")
        self.timeout = get_or_default(timeout, settings.http.timeout_s)
        self.max_retries = max(1, get_or_default(max_retries, settings.http.max_retries))
        self.log_requests_and_responses = get_or_default(
            log_requests_and_responses, settings.http.log_requests_and_responses
        )

    def _post(self, path: str, body: Dict[str, Any], stream: bool = False) -> requests.Response:
        url = f"{self.base_url}{path}"
        if self.log_requests_and_responses:
            logger.debug(f"Request to {url}: {json.dumps(body)}")

        last_exception: Optional[Exception] = None

        for attempt in range(self.max_retries):
            try:
                response = requests.post(url, json=body, timeout=self.timeout, stream=stream)

                # Model loading can briefly return 503; proxies in front of Ollama may rate limit
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
                logger.warning(f"Ollama call failed (attempt {attempt + 1}/{self.max_retries}): {e}")
                if attempt < self.max_retries - 1:
                    time.sleep(2 ** attempt)

        raise last_exception or RuntimeError("Request failed")

    def chat(self, request: ChatRequest) -> Dict[str, Any]:
        body = {**request.to_dict(), "stream": False}
        data = self._post("/api/chat", body).json()
        if self.log_requests_and_responses:
            logger.debug(f"Response: {json.dumps(data)}")
        return data

    def stream_chat(self, request: ChatRequest) -> Iterator[Dict[str, Any]]:
        """
        Yields:
            Decoded newline-delimited JSON chunks, up to and including the one with done=true
        """
        body = {**request.to_dict(), "stream": True}
        response = self._post("/api/chat", body, stream=True)

        try:
            for line in response.iter_lines():
                if not line:
                    continue
                chunk = json.loads(line)
                if "error" in chunk:
                    raise RuntimeError(f"Ollama error: {chunk['error']}")
                if self.log_requests_and_responses:
                    logger.debug(f"Chunk: {chunk}")
                yield chunk
                if chunk.get("done"):
                    break
        finally:
            response.close()

    def embed(self, model: str, prompt: str) -> Dict[str, Any]:
        return self._post("/api/embeddings", {"model": model, "prompt": prompt}).json()
