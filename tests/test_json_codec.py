"""
Tests for JSON Codec

Tests serialization of llmkit types and dataclass reconstruction through
the pydantic-backed default codec.
"""

import json
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional

import pytest


@dataclass
class Event:
    name: str
    day: date
    at: Optional[datetime] = None


@dataclass
class Calendar:
    owner: str
    events: List[Event]


class TestStandardJsonCodec:
    """Tests for the default codec."""

    def test_to_json_is_pretty_printed(self):
        """Test output is indented."""
        from llmkit.internal.json_codec import StandardJsonCodec

        text = StandardJsonCodec().to_json({"a": 1})
        assert text == '{\n  "a": 1\n}'

    def test_dates_are_iso_formatted(self):
        """Test dates and datetimes use ISO-8601."""
        from llmkit.internal.json_codec import StandardJsonCodec

        text = StandardJsonCodec().to_json(Event("launch", date(2024, 1, 15), datetime(2024, 1, 15, 9, 30)))
        data = json.loads(text)

        assert data["day"] == "2024-01-15"
        assert data["at"] == "2024-01-15T09:30:00"

    def test_from_json_rebuilds_dates(self):
        """Test dataclasses with date fields are rebuilt."""
        from llmkit.internal.json_codec import StandardJsonCodec

        codec = StandardJsonCodec()
        event = codec.from_json('{"name": "launch", "day": "2024-01-15", "at": "2024-01-15T09:30:00"}', Event)

        assert event == Event("launch", date(2024, 1, 15), datetime(2024, 1, 15, 9, 30))

    def test_from_json_nested_list(self):
        """Test nested dataclass lists are rebuilt."""
        from llmkit.internal.json_codec import StandardJsonCodec

        codec = StandardJsonCodec()
        calendar = codec.from_json(
            '{"owner": "ann", "events": [{"name": "a", "day": "2024-02-01"}], "unknown": 1}',
            Calendar,
        )

        assert calendar.owner == "ann"
        assert calendar.events == [Event("a", date(2024, 2, 1))]

    def test_from_json_to_string_map(self):
        """Test maps decode to string values."""
        from llmkit.internal.json_codec import StandardJsonCodec

        result = StandardJsonCodec().from_json('{"city": "Paris", "days": 3}', dict)
        assert result == {"city": "Paris", "days": "3"}

    def test_from_json_rejects_non_object_for_dataclass(self):
        """Test a JSON array cannot become a dataclass."""
        from llmkit.internal.json_codec import StandardJsonCodec

        with pytest.raises(ValueError):
            StandardJsonCodec().from_json("[1, 2]", Event)

    def test_tool_request_round_trip(self):
        """Test llmkit DTOs serialize through to_dict."""
        from llmkit.data.message import ToolExecutionRequest
        from llmkit.internal.json_codec import StandardJsonCodec

        codec = StandardJsonCodec()
        request = ToolExecutionRequest(name="get_weather", arguments='{"city": "Paris"}', id="call_1")

        assert codec.from_json(codec.to_json(request), ToolExecutionRequest) == request


class TestJsonFacade:
    """Tests for the static Json facade."""

    def test_to_input_stream(self):
        """Test the stream holds UTF-8 JSON."""
        from llmkit.internal.json_codec import Json

        stream = Json.to_input_stream({"greeting": "héllo"})
        assert json.loads(stream.read().decode("utf-8")) == {"greeting": "héllo"}

    def test_set_codec(self):
        """Test a custom codec replaces the default."""
        from llmkit.internal.json_codec import Json, JsonCodec, StandardJsonCodec

        class UpperCodec(JsonCodec):
            def to_json(self, obj):
                return json.dumps(obj).upper()

            def from_json(self, text, type_):
                return json.loads(text)

        try:
            Json.set_codec(UpperCodec())
            assert Json.to_json({"a": "b"}) == '{"A": "B"}'
        finally:
            Json.set_codec(StandardJsonCodec())


class TestDocumentRoundTrip:
    """Tests for documents and segments through the codec."""

    def test_document_keeps_metadata_type(self):
        """Test a decoded Document carries a usable Metadata."""
        from llmkit.data.document import Document, Metadata
        from llmkit.internal.json_codec import Json

        document = Document.from_text("hello", {"file_name": "a.txt", "index": 2})

        text = Json.to_json(document)
        back = Json.from_json(text, Document)

        assert json.loads(text) == {"text": "hello", "metadata": {"file_name": "a.txt", "index": 2}}
        assert isinstance(back.metadata, Metadata)
        assert back == document
        back.metadata.add("page", 1)
        assert back.metadata.to_dict() == {"file_name": "a.txt", "index": 2, "page": 1}

    def test_text_segment_keeps_metadata_type(self):
        """Test a decoded TextSegment carries a usable Metadata."""
        from llmkit.data.document import Metadata, TextSegment
        from llmkit.internal.json_codec import Json

        segment = TextSegment.from_text("chunk", {"source": "faq.json"})

        back = Json.from_json(Json.to_json(segment), TextSegment)

        assert isinstance(back.metadata, Metadata)
        assert back.metadata.get("source") == "faq.json"

    def test_missing_metadata_defaults_to_empty(self):
        """Test metadata falls back to an empty Metadata."""
        from llmkit.data.document import Document, Metadata
        from llmkit.internal.json_codec import Json

        back = Json.from_json('{"text": "plain"}', Document)

        assert back.metadata == Metadata()

    def test_invalid_metadata_rejected(self):
        """Test non-object metadata is rejected."""
        from llmkit.data.document import Document
        from llmkit.internal.json_codec import Json

        with pytest.raises(ValueError):
            Json.from_json('{"text": "plain", "metadata": [1, 2]}', Document)
