"""
JSON Codec Module

A pluggable JSON codec. The default implementation delegates to pydantic
TypeAdapters, so dataclasses, enums, ISO dates, nested lists and Optional
fields are written and rebuilt without hand-written conversion code.

Usage:
    from llmkit.internal.json_codec import Json

    text = Json.to_json(ToolExecutionRequest(id="1", name="f", arguments="{}"))
    request = Json.from_json(text, ToolExecutionRequest)
"""

import io
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any, Dict, Type, TypeVar

from pydantic import TypeAdapter

T = TypeVar("T")


class JsonCodec(ABC):
    """Contract for JSON (de)serialization backends."""

    @abstractmethod
    def to_json(self, obj: Any) -> str:
        pass

    @abstractmethod
    def from_json(self, text: str, type_: Type[T]) -> T:
        pass

    def to_input_stream(self, obj: Any) -> io.BytesIO:
        return io.BytesIO(self.to_json(obj).encode("utf-8"))


@lru_cache(maxsize=128)
def _adapter(type_: Any) -> TypeAdapter:
    return TypeAdapter(type_)


class StandardJsonCodec(JsonCodec):
    """
    Default codec: pretty-printed output, ISO dates, dataclass support.

    Raises:
        pydantic.ValidationError (a ValueError) when the text does not fit
        the requested type.
    """

    def to_json(self, obj: Any) -> str:
        return _adapter(type(obj)).dump_json(obj, indent=2).decode("utf-8")

    def from_json(self, text: str, type_: Type[T]) -> T:
        if type_ is dict:
            # Untyped maps decode to string values, nested JSON stays as JSON text
            data = _adapter(Dict[str, Any]).validate_json(text)
            return {  # type: ignore[return-value]
                key: value if isinstance(value, str) else _adapter(type(value)).dump_json(value).decode("utf-8")
                for key, value in data.items()
            }
        return _adapter(type_).validate_json(text)


class Json:
    """Static facade over the active codec."""

    _codec: JsonCodec = StandardJsonCodec()

    @classmethod
    def set_codec(cls, codec: JsonCodec) -> None:
        cls._codec = codec

    @classmethod
    def to_json(cls, obj: Any) -> str:
        return cls._codec.to_json(obj)

    @classmethod
    def from_json(cls, text: str, type_: Type[T]) -> T:
        return cls._codec.from_json(text, type_)

    @classmethod
    def to_input_stream(cls, obj: Any) -> io.BytesIO:
        return cls._codec.to_input_stream(obj)
