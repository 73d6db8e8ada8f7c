"""
Ollama wire types for the /api/chat endpoint.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from llmkit.data.message import ChatMessage, ChatMessageType


class Role(Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass
class Message:
    role: Role
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role.value, "content": self.content}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        return cls(role=Role(data.get("role", "assistant")), content=data.get("content") or "")


@dataclass
class Options:
    """Sampling options; unset values are left to the server defaults."""
    temperature: Optional[float] = None
    top_k: Optional[int] = None
    top_p: Optional[float] = None
    repeat_penalty: Optional[float] = None
    seed: Optional[int] = None
    num_predict: Optional[int] = None
    stop: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {key: value for key, value in self.__dict__.items() if value is not None}


@dataclass
class ChatRequest:
    model: str
    messages: List[Message]
    options: Options = field(default_factory=Options)
    format: Optional[str] = None
    stream: bool = False

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
            "stream": self.stream,
        }
        options = self.options.to_dict()
        if options:
            body["options"] = options
        if self.format:
            body["format"] = self.format
        return body


_ROLES = {
    ChatMessageType.SYSTEM: Role.SYSTEM,
    ChatMessageType.USER: Role.USER,
    ChatMessageType.AI: Role.ASSISTANT,
    # Ollama has no tool role; results are fed back as user input
    ChatMessageType.TOOL_EXECUTION_RESULT: Role.USER,
}


def to_ollama_messages(messages: List[ChatMessage]) -> List[Message]:
    return [Message(role=_ROLES[m.type], content=m.text or "") for m in messages]
