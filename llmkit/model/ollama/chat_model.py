"""
Ollama Chat Models

Chat completions against an Ollama server, both blocking and streamed.

Usage:
    model = OllamaStreamingChatModel(model_name="llama2", temperature=0.2)
    model.generate([UserMessage.from_text("Why is the sky blue?")], handler)
"""

from typing import Any, Dict, List, Optional

from llmkit.config import settings
from llmkit.data.message import AiMessage, ChatMessage
from llmkit.data.tool import ToolSpecification
from llmkit.internal.utils import ensure_not_blank, get_or_default
from llmkit.logger import get_logger
from llmkit.model.chat import ChatLanguageModel, StreamingChatLanguageModel, StreamingResponseHandler
from llmkit.model.ollama.client import OllamaClient
from llmkit.model.ollama.messages import ChatRequest, Message, Options, to_ollama_messages
from llmkit.model.output import FinishReason, Response, TokenUsage

logger = get_logger(__name__)


def _finish_reason_from(done_reason: Optional[str]) -> FinishReason:
    if done_reason is None or done_reason == "stop":
        return FinishReason.STOP
    if done_reason == "length":
        return FinishReason.LENGTH
    return FinishReason.OTHER


def _message_from(data: Dict[str, Any]) -> Message:
    return Message.from_dict(data.get("message") or {})


def _token_usage_from(data: Dict[str, Any]) -> Optional[TokenUsage]:
    if "prompt_eval_count" not in data and "eval_count" not in data:
        return None
    return TokenUsage(data.get("prompt_eval_count"), data.get("eval_count"))


class OllamaStreamingResponseBuilder:
    """Concatenates streamed message fragments; usage comes with the final chunk."""

    def __init__(self):
        self._content = []
        self._final: Optional[Dict[str, Any]] = None

    def append(self, chunk: Optional[Dict[str, Any]]) -> None:
        if chunk is None:
            return
        message = _message_from(chunk)
        if message.content:
            self._content.append(message.content)
        if chunk.get("done"):
            self._final = chunk

    def build(self) -> Response[AiMessage]:
        final = self._final or {}
        return Response(
            content=AiMessage.from_text("".join(self._content)),
            token_usage=_token_usage_from(final),
            finish_reason=_finish_reason_from(final.get("done_reason")),
        )


class OllamaChatModelBase:

    def __init__(
        self,
        base_url: Optional[str] = None,
        model_name: Optional[str] = None,
        temperature: Optional[float] = None,
        top_k: Optional[int] = None,
        top_p: Optional[float] = None,
        repeat_penalty: Optional[float] = None,
        seed: Optional[int] = None,
        num_predict: Optional[int] = None,
        stop: Optional[List[str]] = None,
        format: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        log_requests_and_responses: Optional[bool] = None,
        client: Optional[OllamaClient] = None,
    ):
        """
        Args:
            base_url: Ollama server URL (defaults to settings)
            model_name: Model to run, e.g. "llama2" (defaults to settings)
            format: Response format, e.g. "json"
        """
        self.client = client or OllamaClient(
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            log_requests_and_responses=log_requests_and_responses,
        )
        self.model_name = ensure_not_blank(get_or_default(model_name, settings.ollama.model_name), "model_name")
        self.options = Options(
            temperature=temperature,
            top_k=top_k,
            top_p=top_p,
            repeat_penalty=repeat_penalty,
            seed=seed,
            num_predict=num_predict,
            stop=stop,
        )
        self.format = format

        logger.info(f"Initialized {type(self).__name__}: model={self.model_name}")

    def _request(
        self,
        messages: List[ChatMessage],
        tool_specifications: Optional[List[ToolSpecification]],
        tool_specification: Optional[ToolSpecification],
    ) -> ChatRequest:
        if tool_specifications or tool_specification:
            raise ValueError("Tools are not supported by Ollama chat models")
        return ChatRequest(
            model=self.model_name,
            messages=to_ollama_messages(messages),
            options=self.options,
            format=self.format,
        )


class OllamaChatModel(OllamaChatModelBase, ChatLanguageModel):

    def generate(
        self,
        messages: List[ChatMessage],
        tool_specifications: Optional[List[ToolSpecification]] = None,
        tool_specification: Optional[ToolSpecification] = None,
    ) -> Response[AiMessage]:
        data = self.client.chat(self._request(messages, tool_specifications, tool_specification))
        return Response(
            content=AiMessage.from_text(_message_from(data).content),
            token_usage=_token_usage_from(data),
            finish_reason=_finish_reason_from(data.get("done_reason")),
        )


class OllamaStreamingChatModel(OllamaChatModelBase, StreamingChatLanguageModel):

    def generate(
        self,
        messages: List[ChatMessage],
        handler: StreamingResponseHandler,
        tool_specifications: Optional[List[ToolSpecification]] = None,
        tool_specification: Optional[ToolSpecification] = None,
    ) -> None:
        try:
            request = self._request(messages, tool_specifications, tool_specification)
            builder = OllamaStreamingResponseBuilder()

            for chunk in self.client.stream_chat(request):
                builder.append(chunk)
                content = _message_from(chunk).content
                if content:
                    handler.on_next(content)

            response = builder.build()
        except Exception as e:
            logger.error(f"Streaming chat failed: {e}")
            handler.on_error(e)
            return

        handler.on_complete(response)
