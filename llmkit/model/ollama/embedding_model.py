from typing import List, Optional

from llmkit.config import settings
from llmkit.data.document import TextSegment
from llmkit.data.embedding import Embedding
from llmkit.internal.utils import ensure_not_blank, get_or_default
from llmkit.logger import get_logger
from llmkit.model.embedding import EmbeddingModel
from llmkit.model.ollama.client import OllamaClient
from llmkit.model.output import Response

logger = get_logger(__name__)


class OllamaEmbeddingModel(EmbeddingModel):
    """
    Embeddings from an Ollama server, one request per segment.

    Example:
        model = OllamaEmbeddingModel(model_name="nomic-embed-text")
        vector = model.embed("Hello").content.vector
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        model_name: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        client: Optional[OllamaClient] = None,
    ):
        self.client = client or OllamaClient(base_url=base_url, timeout=timeout, max_retries=max_retries)
        self.model_name = ensure_not_blank(
            get_or_default(model_name, settings.ollama.embedding_model_name), "model_name"
        )
        logger.info(f"Initialized OllamaEmbeddingModel: model={self.model_name}")

    def embed_all(self, segments: List[TextSegment]) -> Response[List[Embedding]]:
        embeddings = [
            Embedding.from_list(self.client.embed(self.model_name, segment.text)["embedding"])
            for segment in segments
        ]
        return Response(content=embeddings)
