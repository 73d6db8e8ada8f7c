"""
Streaming Response Builder

Accumulates the partial deltas of a streamed chat completion into one
complete AiMessage, together with token usage and finish reason.

Each delta carries either a content fragment or tool call fragments
(legacy `function_call`, or `tool_calls` keyed by index). The builder is
fed every chunk via append() and asked for the final Response once the
stream ends.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from llmkit.data.message import AiMessage, ToolExecutionRequest
from llmkit.model.azure.helper import finish_reason_from, token_usage_from
from llmkit.model.output import Response, TokenUsage
from llmkit.model.tokenizer import Tokenizer


@dataclass
class _ToolCallBuffer:
    id: Optional[str] = None
    name: str = ""
    arguments: str = ""


class AzureOpenAiStreamingResponseBuilder:
    """
    Builds a Response[AiMessage] out of streamed chat completion chunks.

    Example:
        builder = AzureOpenAiStreamingResponseBuilder(input_token_count=12)
        for chunk in client.chat_completions_stream(deployment, body):
            builder.append(chunk)
        response = builder.build(tokenizer, forceful_tool_execution=False)
    """

    def __init__(self, input_token_count: Optional[int]):
        """
        Args:
            input_token_count: Prompt size estimated before sending, if known
        """
        self.input_token_count = input_token_count
        self._content = []
        self._function_call = _ToolCallBuffer()
        self._tool_calls: Dict[int, _ToolCallBuffer] = {}
        self._finish_reason: Optional[str] = None
        self._usage: Optional[Dict[str, Any]] = None

    def append(self, chunk: Optional[Dict[str, Any]]) -> None:
        if chunk is None:
            return

        # Only present on the final chunk when usage reporting is enabled
        if chunk.get("usage"):
            self._usage = chunk["usage"]

        choices = chunk.get("choices")
        if not choices:
            return

        choice = choices[0]
        if choice is None:
            return

        finish_reason = choice.get("finish_reason")
        if finish_reason is not None:
            self._finish_reason = finish_reason

        delta = choice.get("delta")
        if delta is None:
            return

        content = delta.get("content")
        if content is not None:
            self._content.append(content)
            return

        function_call = delta.get("function_call")
        if function_call:
            if function_call.get("name") is not None:
                self._function_call.name += function_call["name"]
            if function_call.get("arguments") is not None:
                self._function_call.arguments += function_call["arguments"]

        for tool_call in delta.get("tool_calls") or []:
            buffer = self._tool_calls.setdefault(tool_call.get("index", 0), _ToolCallBuffer())
            if tool_call.get("id") is not None:
                buffer.id = tool_call["id"]
            function = tool_call.get("function") or {}
            if function.get("name") is not None:
                buffer.name += function["name"]
            if function.get("arguments") is not None:
                buffer.arguments += function["arguments"]

    @property
    def content(self) -> str:
        return "".join(self._content)

    def _tool_execution_requests(self):
        requests = [
            ToolExecutionRequest(id=buffer.id, name=buffer.name, arguments=buffer.arguments)
            for _, buffer in sorted(self._tool_calls.items())
            if buffer.name
        ]
        if self._function_call.name:
            requests.append(ToolExecutionRequest(
                name=self._function_call.name,
                arguments=self._function_call.arguments,
            ))
        return requests

    def build(self, tokenizer: Optional[Tokenizer], forceful_tool_execution: bool) -> Response[AiMessage]:
        """
        Assemble the final response.

        Content wins over tool calls; with neither, the message is empty.
        """
        finish_reason = finish_reason_from(self._finish_reason)

        content = self.content
        if content:
            return Response(
                content=AiMessage.from_text(content),
                token_usage=self._token_usage_for_text(content, tokenizer),
                finish_reason=finish_reason,
            )

        requests = self._tool_execution_requests()
        if requests:
            return Response(
                content=AiMessage.from_requests(*requests),
                token_usage=self._token_usage_for_requests(requests, tokenizer, forceful_tool_execution),
                finish_reason=finish_reason,
            )

        return Response(
            content=AiMessage.from_text(""),
            token_usage=self._token_usage_for_text("", tokenizer),
            finish_reason=finish_reason,
        )

    def _token_usage_for_text(self, content: str, tokenizer: Optional[Tokenizer]) -> Optional[TokenUsage]:
        if self._usage:
            return token_usage_from(self._usage)
        if tokenizer is None:
            return None
        return TokenUsage(self.input_token_count, tokenizer.estimate_token_count_in_text(content))

    def _token_usage_for_requests(self, requests, tokenizer: Optional[Tokenizer], forceful: bool) -> Optional[TokenUsage]:
        if self._usage:
            return token_usage_from(self._usage)
        if tokenizer is None:
            return None
        if forceful and len(requests) == 1:
            # A forced call is billed differently from a model-chosen one
            output_token_count = tokenizer.estimate_token_count_in_forceful_tool_execution_request(requests[0])
        else:
            output_token_count = tokenizer.estimate_token_count_in_tool_execution_requests(requests)
        return TokenUsage(self.input_token_count, output_token_count)
