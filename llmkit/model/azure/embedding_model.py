"""
Azure OpenAI Embedding Model

Generates embeddings with an Azure OpenAI embedding deployment
(text-embedding-ada-002 by default).

Features:
- Automatic batching with configurable batch size
- Results re-ordered by the response `index` field
- Token usage summed across batches
- Optional vector normalization for cosine similarity

Usage:
    model = AzureOpenAiEmbeddingModel(deployment_name="text-embedding-3-small")
    embeddings = model.embed_all([TextSegment.from_text("Hello")]).content
"""

from typing import Any, Dict, List, Optional

from llmkit.config import settings
from llmkit.data.document import TextSegment
from llmkit.data.embedding import Embedding
from llmkit.internal.utils import ensure_greater_than_zero, get_or_default
from llmkit.logger import get_logger
from llmkit.model.azure.client import AzureOpenAiClient
from llmkit.model.azure.helper import token_usage_from
from llmkit.model.embedding import EmbeddingModel
from llmkit.model.output import Response, TokenUsage

logger = get_logger(__name__)

DEFAULT_EMBEDDING_DEPLOYMENT = "text-embedding-ada-002"


class AzureOpenAiEmbeddingModel(EmbeddingModel):

    def __init__(
        self,
        client: Optional[AzureOpenAiClient] = None,
        endpoint: Optional[str] = None,
        service_version: Optional[str] = None,
        api_key: Optional[str] = None,
        non_azure_api_key: Optional[str] = None,
        token_credential: Any = None,
        deployment_name: Optional[str] = None,
        batch_size: int = 16,
        normalize: bool = False,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        proxies: Optional[Dict[str, str]] = None,
        log_requests_and_responses: Optional[bool] = None,
    ):
        """
        Initialize the embedding model.

        Args:
            client: Ready client; otherwise one is built from the remaining arguments
            deployment_name: Embedding deployment (defaults to settings)
            batch_size: Number of texts per API call
            normalize: Scale vectors to unit length
        """
        self.client = client or AzureOpenAiClient(
            endpoint=endpoint,
            service_version=service_version,
            api_key=api_key,
            key_credential=non_azure_api_key,
            token_credential=token_credential,
            timeout=timeout,
            max_retries=max_retries,
            proxies=proxies,
            log_requests_and_responses=log_requests_and_responses,
        )
        self.deployment_name = get_or_default(
            deployment_name, settings.azure.embedding_deployment or DEFAULT_EMBEDDING_DEPLOYMENT
        )
        self.batch_size = ensure_greater_than_zero(batch_size, "batch_size")
        self.normalize = normalize

        logger.info(
            f"Initialized AzureOpenAiEmbeddingModel: deployment={self.deployment_name}, "
            f"batch_size={self.batch_size}"
        )

    def embed_all(self, segments: List[TextSegment]) -> Response[List[Embedding]]:
        """
        Embed the segments in order.

        Raises:
            requests.RequestException: If the API call fails after retries
        """
        if not segments:
            return Response(content=[])

        texts = [segment.text for segment in segments]
        embeddings: List[Embedding] = []
        token_usage: Optional[TokenUsage] = None
        total_batches = (len(texts) + self.batch_size - 1) // self.batch_size

        for batch_idx, batch_start in enumerate(range(0, len(texts), self.batch_size)):
            batch = texts[batch_start:batch_start + self.batch_size]
            if total_batches > 1:
                logger.debug(f"Processing batch {batch_idx + 1}/{total_batches} ({len(batch)} texts)")

            data = self.client.embeddings(self.deployment_name, batch)
            items = sorted(data["data"], key=lambda item: item.get("index", 0))
            for item in items:
                embedding = Embedding.from_list(item["embedding"])
                embeddings.append(embedding.normalize() if self.normalize else embedding)

            batch_usage = token_usage_from(data.get("usage"))
            token_usage = batch_usage if token_usage is None else token_usage.add(batch_usage)

        return Response(content=embeddings, token_usage=token_usage)
