"""
Azure OpenAI Streaming Chat Model

An OpenAI chat model hosted on Azure (e.g. gpt-35-turbo) whose response is
streamed token by token into a StreamingResponseHandler.

Usage:
    from llmkit.model.azure import AzureOpenAiStreamingChatModel
    from llmkit.model.chat import CollectingStreamingResponseHandler

    model = AzureOpenAiStreamingChatModel(
        endpoint="https://my-resource.openai.azure.com/",
        service_version="2024-02-01",
        api_key="...",
        deployment_name="gpt-35-turbo",
    )
    handler = CollectingStreamingResponseHandler(on_token=print)
    model.generate([UserMessage.from_text("Tell me a joke")], handler)
"""

from typing import Any, Dict, List, Optional

from llmkit.data.message import ChatMessage
from llmkit.data.tool import ToolSpecification
from llmkit.logger import get_logger
from llmkit.model.azure.base import AzureOpenAiChatModelBase
from llmkit.model.azure.streaming_response_builder import AzureOpenAiStreamingResponseBuilder
from llmkit.model.chat import StreamingChatLanguageModel, StreamingResponseHandler, TokenCountEstimator

logger = get_logger(__name__)


class AzureOpenAiStreamingChatModel(AzureOpenAiChatModelBase, StreamingChatLanguageModel, TokenCountEstimator):
    """
    Streaming chat model for Azure OpenAI.

    The handler sees on_next for every content fragment, followed by
    exactly one on_complete (with the aggregated response) or on_error.
    """

    def generate(
        self,
        messages: List[ChatMessage],
        handler: StreamingResponseHandler,
        tool_specifications: Optional[List[ToolSpecification]] = None,
        tool_specification: Optional[ToolSpecification] = None,
    ) -> None:
        try:
            body = self._build_body(messages, tool_specifications, tool_specification)
            input_token_count = self._estimate_input_token_count(messages, tool_specifications, tool_specification)
            builder = AzureOpenAiStreamingResponseBuilder(input_token_count)

            for chunk in self.client.chat_completions_stream(self.deployment_name, body):
                builder.append(chunk)
                self._handle(chunk, handler)

            response = builder.build(self.tokenizer, tool_specification is not None)
        except Exception as e:
            logger.error(f"Streaming chat failed: {e}")
            handler.on_error(e)
            return

        handler.on_complete(response)

    @staticmethod
    def _handle(chunk: Dict[str, Any], handler: StreamingResponseHandler) -> None:
        choices = chunk.get("choices")
        if not choices or choices[0] is None:
            return
        delta = choices[0].get("delta") or {}
        content = delta.get("content")
        if content is not None:
            handler.on_next(content)
