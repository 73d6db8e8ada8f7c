"""
Documents, text segments and their metadata.

A Document is what a loader produces; a TextSegment is what a splitter
produces and what gets embedded and stored.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

Scalar = Union[str, int, float, bool]


class Metadata:
    """
    String-keyed map of scalar values attached to documents and segments.

    Values are restricted to scalars so they can be stored as-is by
    embedding stores such as Chroma.
    """

    def __init__(self, values: Optional[Dict[str, Scalar]] = None):
        self._values: Dict[str, Scalar] = {}
        for key, value in (values or {}).items():
            self.add(key, value)

    def add(self, key: str, value: Any) -> "Metadata":
        if not isinstance(value, (str, int, float, bool)):
            value = str(value)
        self._values[key] = value
        return self

    def get(self, key: str, default: Optional[Scalar] = None) -> Optional[Scalar]:
        return self._values.get(key, default)

    def remove(self, key: str) -> "Metadata":
        self._values.pop(key, None)
        return self

    def merge(self, other: "Metadata") -> "Metadata":
        merged = self.copy()
        for key, value in other.to_dict().items():
            merged.add(key, value)
        return merged

    def copy(self) -> "Metadata":
        return Metadata(dict(self._values))

    def to_dict(self) -> Dict[str, Scalar]:
        return dict(self._values)

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Metadata) and self._values == other._values

    def __repr__(self) -> str:
        return f"Metadata({self._values!r})"

    @classmethod
    def from_value(cls, value: Any) -> "Metadata":
        if isinstance(value, Metadata):
            return value
        if isinstance(value, dict):
            return cls(value)
        raise ValueError(f"Cannot build Metadata from {type(value).__name__}")

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        # Read from a plain object, written back through to_dict
        return core_schema.no_info_plain_validator_function(
            cls.from_value,
            serialization=core_schema.plain_serializer_function_ser_schema(lambda metadata: metadata.to_dict()),
        )


@dataclass
class TextSegment:
    text: str
    metadata: Metadata = field(default_factory=Metadata)

    @classmethod
    def from_text(cls, text: str, metadata: Optional[Dict[str, Scalar]] = None) -> "TextSegment":
        return cls(text=text, metadata=Metadata(metadata))


@dataclass
class Document:
    """
    A loaded document.

    Attributes:
        text: Full document text
        metadata: Metadata such as file_name and absolute_directory_path
    """
    text: str
    metadata: Metadata = field(default_factory=Metadata)

    FILE_NAME = "file_name"
    ABSOLUTE_DIRECTORY_PATH = "absolute_directory_path"

    def to_text_segment(self) -> TextSegment:
        return TextSegment(text=self.text, metadata=self.metadata.copy())

    @classmethod
    def from_text(cls, text: str, metadata: Optional[Dict[str, Scalar]] = None) -> "Document":
        return cls(text=text, metadata=Metadata(metadata))
