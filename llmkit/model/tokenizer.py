"""
Tokenizer Module

Token count estimation for prompts, tool definitions and tool calls.

Architecture:
- Tokenizer: Abstract base class defining the estimation contract
- OpenAiTokenizer: tiktoken-backed implementation following the OpenAI
  chat-format accounting

The actual byte-pair encoding is done by tiktoken; this module only adds
the per-message and per-tool overheads the chat format introduces.

Usage:
    from llmkit.model.tokenizer import OpenAiTokenizer

    tokenizer = OpenAiTokenizer("gpt-3.5-turbo")
    tokenizer.estimate_token_count_in_messages(messages)
"""

import json
from abc import ABC, abstractmethod
from typing import Iterable, List

import tiktoken

from llmkit.data.message import (
    AiMessage,
    ChatMessage,
    ChatMessageType,
    ToolExecutionRequest,
    ToolExecutionResultMessage,
    UserMessage,
)
from llmkit.data.tool import ToolParameters, ToolSpecification
from llmkit.logger import get_logger

logger = get_logger(__name__)


class Tokenizer(ABC):
    """Contract for token count estimation."""

    @abstractmethod
    def estimate_token_count_in_text(self, text: str) -> int:
        pass

    @abstractmethod
    def estimate_token_count_in_message(self, message: ChatMessage) -> int:
        pass

    @abstractmethod
    def estimate_token_count_in_messages(self, messages: Iterable[ChatMessage]) -> int:
        pass

    @abstractmethod
    def estimate_token_count_in_tool_specifications(self, tool_specifications: Iterable[ToolSpecification]) -> int:
        pass

    def estimate_token_count_in_tool_specification(self, tool_specification: ToolSpecification) -> int:
        return self.estimate_token_count_in_tool_specifications([tool_specification])

    @abstractmethod
    def estimate_token_count_in_forceful_tool_specification(self, tool_specification: ToolSpecification) -> int:
        pass

    @abstractmethod
    def estimate_token_count_in_tool_execution_requests(self, requests: Iterable[ToolExecutionRequest]) -> int:
        pass

    @abstractmethod
    def estimate_token_count_in_forceful_tool_execution_request(self, request: ToolExecutionRequest) -> int:
        pass


_ROLES = {
    ChatMessageType.SYSTEM: "system",
    ChatMessageType.USER: "user",
    ChatMessageType.AI: "assistant",
    ChatMessageType.TOOL_EXECUTION_RESULT: "tool",
}


class OpenAiTokenizer(Tokenizer):
    """
    tiktoken-backed tokenizer for OpenAI chat models.

    Example:
        tokenizer = OpenAiTokenizer("gpt-4")
        tokenizer.estimate_token_count_in_text("Hello world")  # 2
    """

    DEFAULT_ENCODING = "cl100k_base"
    LEGACY_MODEL = "gpt-3.5-turbo-0301"

    def __init__(self, model_name: str = "gpt-3.5-turbo"):
        self.model_name = model_name
        try:
            self._encoding = tiktoken.encoding_for_model(model_name)
        except KeyError:
            logger.debug(f"No tiktoken mapping for {model_name}, using {self.DEFAULT_ENCODING}")
            self._encoding = tiktoken.get_encoding(self.DEFAULT_ENCODING)

    def encode(self, text: str) -> List[int]:
        return self._encoding.encode(text)

    def decode(self, tokens: List[int]) -> str:
        return self._encoding.decode(tokens)

    def estimate_token_count_in_text(self, text: str) -> int:
        if not text:
            return 0
        return len(self.encode(text))

    def _extra_tokens_per_message(self) -> int:
        return 4 if self.model_name == self.LEGACY_MODEL else 3

    def _extra_tokens_per_name(self) -> int:
        return -1 if self.model_name == self.LEGACY_MODEL else 1

    def estimate_token_count_in_message(self, message: ChatMessage) -> int:
        token_count = self._extra_tokens_per_message()
        token_count += self.estimate_token_count_in_text(_ROLES[message.type])
        token_count += self.estimate_token_count_in_text(message.text or "")

        if isinstance(message, UserMessage) and message.name:
            token_count += self._extra_tokens_per_name()
            token_count += self.estimate_token_count_in_text(message.name)

        if isinstance(message, AiMessage) and message.has_tool_execution_requests():
            token_count += self.estimate_token_count_in_tool_execution_requests(message.tool_execution_requests)

        if isinstance(message, ToolExecutionResultMessage):
            token_count += self.estimate_token_count_in_text(message.tool_name)

        return token_count

    def estimate_token_count_in_messages(self, messages: Iterable[ChatMessage]) -> int:
        # every reply is primed with <|start|>assistant<|message|>
        token_count = 3
        for message in messages:
            token_count += self.estimate_token_count_in_message(message)
        return token_count

    def estimate_token_count_in_tool_specifications(self, tool_specifications: Iterable[ToolSpecification]) -> int:
        token_count = 0
        for spec in tool_specifications:
            token_count += 6
            token_count += self.estimate_token_count_in_text(spec.name)
            if spec.description:
                token_count += 2
                token_count += self.estimate_token_count_in_text(spec.description)
            token_count += self._estimate_token_count_in_tool_parameters(spec.parameters)
        if token_count:
            token_count += 12
        return token_count

    def _estimate_token_count_in_tool_parameters(self, parameters: ToolParameters) -> int:
        if parameters is None:
            return 0
        token_count = 3
        for name, schema in parameters.properties.items():
            token_count += 3
            token_count += self.estimate_token_count_in_text(name)
            for key, value in schema.items():
                if key == "type":
                    token_count += self.estimate_token_count_in_text(str(value))
                elif key == "description":
                    token_count += 2
                    token_count += self.estimate_token_count_in_text(str(value))
                elif key == "enum":
                    token_count -= 3
                    for enum_value in value:
                        token_count += 3
                        token_count += self.estimate_token_count_in_text(str(enum_value))
        return token_count

    def estimate_token_count_in_forceful_tool_specification(self, tool_specification: ToolSpecification) -> int:
        token_count = self.estimate_token_count_in_tool_specifications([tool_specification])
        token_count += 4
        token_count += self.estimate_token_count_in_text(tool_specification.name)
        return token_count

    def estimate_token_count_in_tool_execution_requests(self, requests: Iterable[ToolExecutionRequest]) -> int:
        token_count = 0
        requests = list(requests)
        for request in requests:
            token_count += 4
            token_count += self.estimate_token_count_in_text(request.name)
            token_count += self.estimate_token_count_in_text(request.arguments)
        if len(requests) > 1:
            token_count += 15
        return token_count

    def estimate_token_count_in_forceful_tool_execution_request(self, request: ToolExecutionRequest) -> int:
        # A forced call only emits the arguments object
        if _count_arguments(request.arguments) == 0:
            return 1
        return self.estimate_token_count_in_text(request.arguments)


def _count_arguments(arguments: str) -> int:
    if not arguments or not arguments.strip():
        return 0
    try:
        parsed = json.loads(arguments)
    except json.JSONDecodeError:
        return 0
    return len(parsed) if isinstance(parsed, dict) else 0
