"""
Chat Model Interfaces

This module defines the contracts implemented by every chat model adapter.

Architecture:
- ChatLanguageModel: blocking request/response
- StreamingChatLanguageModel: incremental delivery through a handler
- StreamingResponseHandler: on_next* then exactly one of on_complete/on_error
- TokenCountEstimator: prompt size estimation before sending

Usage:
    from llmkit.model.chat import CollectingStreamingResponseHandler

    handler = CollectingStreamingResponseHandler(on_token=lambda t: print(t, end=""))
    model.generate([UserMessage.from_text("Hello!")], handler)
    print(handler.response.content.text)
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from llmkit.data.message import AiMessage, ChatMessage
from llmkit.data.tool import ToolSpecification
from llmkit.model.output import Response


class StreamingResponseHandler(ABC):
    """
    Receives the events of one streamed generation.

    on_next is called for each text token; then exactly one of
    on_complete or on_error is called.
    """

    @abstractmethod
    def on_next(self, token: str) -> None:
        pass

    def on_complete(self, response: Response[AiMessage]) -> None:
        pass

    @abstractmethod
    def on_error(self, error: BaseException) -> None:
        pass


class CollectingStreamingResponseHandler(StreamingResponseHandler):
    """
    Handler that records everything it receives.

    Attributes:
        tokens: Tokens in arrival order
        response: Final response, set by on_complete
        error: Error, set by on_error
    """

    def __init__(self, on_token: Optional[Callable[[str], None]] = None):
        self._on_token = on_token
        self.tokens: List[str] = []
        self.response: Optional[Response[AiMessage]] = None
        self.error: Optional[BaseException] = None
        self.completions = 0
        self.errors = 0

    def on_next(self, token: str) -> None:
        self.tokens.append(token)
        if self._on_token:
            self._on_token(token)

    def on_complete(self, response: Response[AiMessage]) -> None:
        self.response = response
        self.completions += 1

    def on_error(self, error: BaseException) -> None:
        self.error = error
        self.errors += 1

    @property
    def text(self) -> str:
        return "".join(self.tokens)

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


class ChatLanguageModel(ABC):

    @abstractmethod
    def generate(
        self,
        messages: List[ChatMessage],
        tool_specifications: Optional[List[ToolSpecification]] = None,
        tool_specification: Optional[ToolSpecification] = None,
    ) -> Response[AiMessage]:
        """
        Generate a response to the conversation.

        Args:
            messages: Conversation so far
            tool_specifications: Tools the model may choose to call
            tool_specification: A single tool the model must call

        Returns:
            Response wrapping the AiMessage
        """
        pass


class StreamingChatLanguageModel(ABC):

    @abstractmethod
    def generate(
        self,
        messages: List[ChatMessage],
        handler: StreamingResponseHandler,
        tool_specifications: Optional[List[ToolSpecification]] = None,
        tool_specification: Optional[ToolSpecification] = None,
    ) -> None:
        """
        Stream a response to the conversation into `handler`.

        Blocks until the stream is exhausted. Errors are delivered to
        handler.on_error instead of being raised.
        """
        pass


class TokenCountEstimator(ABC):

    @abstractmethod
    def estimate_token_count(self, messages: List[ChatMessage]) -> int:
        pass
