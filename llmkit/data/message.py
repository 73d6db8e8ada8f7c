"""
Chat message types shared by every chat model adapter.

Adapters translate these into their vendor's wire format and back; nothing
here knows about any particular vendor.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from llmkit.internal.utils import random_uuid


class ChatMessageType(Enum):
    SYSTEM = "system"
    USER = "user"
    AI = "ai"
    TOOL_EXECUTION_RESULT = "tool_execution_result"


@dataclass
class ToolExecutionRequest:
    """
    A request from the model to execute a tool.

    Attributes:
        id: Call id assigned by the model (may be None for legacy function calls)
        name: Tool name
        arguments: Tool arguments as a JSON string
    """
    name: str
    arguments: str = "{}"
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "arguments": self.arguments}


class ChatMessage:
    """Base class of all chat messages."""

    @property
    def type(self) -> ChatMessageType:
        raise NotImplementedError

    @property
    def text(self) -> Optional[str]:
        raise NotImplementedError


@dataclass
class SystemMessage(ChatMessage):
    content: str

    @property
    def type(self) -> ChatMessageType:
        return ChatMessageType.SYSTEM

    @property
    def text(self) -> str:
        return self.content

    @classmethod
    def from_text(cls, text: str) -> "SystemMessage":
        return cls(content=text)


@dataclass
class UserMessage(ChatMessage):
    content: str
    name: Optional[str] = None

    @property
    def type(self) -> ChatMessageType:
        return ChatMessageType.USER

    @property
    def text(self) -> str:
        return self.content

    @classmethod
    def from_text(cls, text: str, name: Optional[str] = None) -> "UserMessage":
        return cls(content=text, name=name)


@dataclass
class AiMessage(ChatMessage):
    """
    Message produced by the model: either text or tool execution requests.

    Attributes:
        content: Generated text (None when the model requested tools)
        tool_execution_requests: Tools the model wants executed
    """
    content: Optional[str] = None
    tool_execution_requests: List[ToolExecutionRequest] = field(default_factory=list)

    @property
    def type(self) -> ChatMessageType:
        return ChatMessageType.AI

    @property
    def text(self) -> Optional[str]:
        return self.content

    def has_tool_execution_requests(self) -> bool:
        return bool(self.tool_execution_requests)

    @classmethod
    def from_text(cls, text: str) -> "AiMessage":
        return cls(content=text)

    @classmethod
    def from_requests(cls, *requests: ToolExecutionRequest) -> "AiMessage":
        return cls(content=None, tool_execution_requests=list(requests))


@dataclass
class ToolExecutionResultMessage(ChatMessage):
    tool_name: str
    content: str
    id: str = field(default_factory=random_uuid)

    @property
    def type(self) -> ChatMessageType:
        return ChatMessageType.TOOL_EXECUTION_RESULT

    @property
    def text(self) -> str:
        return self.content

    @classmethod
    def from_request(cls, request: ToolExecutionRequest, result: str) -> "ToolExecutionResultMessage":
        return cls(tool_name=request.name, content=result, id=request.id or random_uuid())
