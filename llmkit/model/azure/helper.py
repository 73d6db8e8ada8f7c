"""
Mapping between llmkit types and the OpenAI chat completions wire format.
"""

from typing import Any, Dict, List, Optional

from llmkit.data.message import (
    AiMessage,
    ChatMessage,
    SystemMessage,
    ToolExecutionRequest,
    ToolExecutionResultMessage,
    UserMessage,
)
from llmkit.data.tool import ToolSpecification
from llmkit.model.output import FinishReason, TokenUsage


def to_openai_message(message: ChatMessage) -> Dict[str, Any]:
    if isinstance(message, SystemMessage):
        return {"role": "system", "content": message.text}

    if isinstance(message, UserMessage):
        wire: Dict[str, Any] = {"role": "user", "content": message.text}
        if message.name:
            wire["name"] = message.name
        return wire

    if isinstance(message, AiMessage):
        wire = {"role": "assistant", "content": message.text}
        if message.has_tool_execution_requests():
            wire["tool_calls"] = [
                {
                    "id": request.id,
                    "type": "function",
                    "function": {"name": request.name, "arguments": request.arguments},
                }
                for request in message.tool_execution_requests
            ]
        return wire

    if isinstance(message, ToolExecutionResultMessage):
        return {"role": "tool", "tool_call_id": message.id, "content": message.text}

    raise ValueError(f"Unknown message type: {type(message).__name__}")


def to_openai_messages(messages: List[ChatMessage]) -> List[Dict[str, Any]]:
    return [to_openai_message(m) for m in messages]


def to_tools(tool_specifications: List[ToolSpecification]) -> List[Dict[str, Any]]:
    return [{"type": "function", "function": spec.to_dict()} for spec in tool_specifications]


def tool_choice(tool_specification: ToolSpecification) -> Dict[str, Any]:
    return {"type": "function", "function": {"name": tool_specification.name}}


_FINISH_REASONS = {
    "stop": FinishReason.STOP,
    "length": FinishReason.LENGTH,
    "tool_calls": FinishReason.TOOL_EXECUTION,
    "function_call": FinishReason.TOOL_EXECUTION,
    "content_filter": FinishReason.CONTENT_FILTER,
}


def finish_reason_from(finish_reason: Optional[str]) -> Optional[FinishReason]:
    if finish_reason is None:
        return None
    return _FINISH_REASONS.get(finish_reason, FinishReason.OTHER)


def token_usage_from(usage: Optional[Dict[str, Any]]) -> Optional[TokenUsage]:
    if not usage:
        return None
    return TokenUsage(
        input_token_count=usage.get("prompt_tokens"),
        output_token_count=usage.get("completion_tokens"),
        total_token_count=usage.get("total_tokens"),
    )


def ai_message_from(message: Dict[str, Any]) -> AiMessage:
    """Build an AiMessage from a non-streamed `choices[0].message`."""
    content = message.get("content")
    if content is not None:
        return AiMessage.from_text(content)

    requests = [
        ToolExecutionRequest(
            id=call.get("id"),
            name=call["function"]["name"],
            arguments=call["function"].get("arguments") or "{}",
        )
        for call in message.get("tool_calls") or []
    ]
    function_call = message.get("function_call")
    if function_call:
        requests.append(ToolExecutionRequest(
            name=function_call["name"],
            arguments=function_call.get("arguments") or "{}",
        ))
    if requests:
        return AiMessage.from_requests(*requests)
    return AiMessage.from_text("")
