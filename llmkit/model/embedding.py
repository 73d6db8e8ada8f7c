from abc import ABC, abstractmethod
from typing import List, Union

from llmkit.data.document import TextSegment
from llmkit.data.embedding import Embedding
from llmkit.model.output import Response


class EmbeddingModel(ABC):
    """
    Contract for all embedding model adapters.

    Implementations must return embeddings in the same order as the input.
    """

    def embed(self, text: Union[str, TextSegment]) -> Response[Embedding]:
        segment = TextSegment.from_text(text) if isinstance(text, str) else text
        response = self.embed_all([segment])
        return Response(
            content=response.content[0],
            token_usage=response.token_usage,
            finish_reason=response.finish_reason,
        )

    @abstractmethod
    def embed_all(self, segments: List[TextSegment]) -> Response[List[Embedding]]:
        pass
