"""
Model output types: the generic Response wrapper, token usage and finish reasons.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class FinishReason(Enum):
    STOP = "stop"
    LENGTH = "length"
    TOOL_EXECUTION = "tool_execution"
    CONTENT_FILTER = "content_filter"
    OTHER = "other"


@dataclass
class TokenUsage:
    """
    Token accounting for one request.

    Attributes:
        input_token_count: Tokens in the prompt (None if unknown)
        output_token_count: Tokens in the completion (None if unknown)
        total_token_count: Derived from the other two when not given
    """
    input_token_count: Optional[int] = None
    output_token_count: Optional[int] = None
    total_token_count: Optional[int] = None

    def __post_init__(self):
        if self.total_token_count is None:
            if self.input_token_count is not None or self.output_token_count is not None:
                self.total_token_count = (self.input_token_count or 0) + (self.output_token_count or 0)

    def add(self, other: Optional["TokenUsage"]) -> "TokenUsage":
        if other is None:
            return TokenUsage(self.input_token_count, self.output_token_count, self.total_token_count)
        return TokenUsage(
            input_token_count=_sum(self.input_token_count, other.input_token_count),
            output_token_count=_sum(self.output_token_count, other.output_token_count),
            total_token_count=_sum(self.total_token_count, other.total_token_count),
        )


def _sum(first: Optional[int], second: Optional[int]) -> Optional[int]:
    if first is None:
        return second
    if second is None:
        return first
    return first + second


@dataclass
class Response(Generic[T]):
    content: T
    token_usage: Optional[TokenUsage] = None
    finish_reason: Optional[FinishReason] = None
