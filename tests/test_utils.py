"""
Tests for Internal Utilities

Tests defaults, blank checks, id generation and argument validation.
"""

import uuid

import pytest


class TestDefaults:
    """Tests for get_or_default helpers."""

    def test_value_wins(self):
        """Test a non-None value is returned unchanged."""
        from llmkit.internal.utils import get_or_default

        assert get_or_default("value", "default") == "value"
        assert get_or_default(0, 5) == 0

    def test_default_used_for_none(self):
        """Test the default is used for None."""
        from llmkit.internal.utils import get_or_default

        assert get_or_default(None, "default") == "default"

    def test_callable_default_is_lazy(self):
        """Test a callable default is only called when needed."""
        from llmkit.internal.utils import get_or_default

        calls = []

        def supplier():
            calls.append(1)
            return "computed"

        assert get_or_default("value", supplier) == "value"
        assert calls == []
        assert get_or_default(None, supplier) == "computed"
        assert calls == [1]

    def test_get_or_default_lazy(self):
        """Test supplier variant."""
        from llmkit.internal.utils import get_or_default_lazy

        assert get_or_default_lazy(None, lambda: 42) == 42
        assert get_or_default_lazy(7, lambda: 42) == 7


class TestBlankChecks:
    """Tests for null/blank/empty checks."""

    def test_is_null_or_blank(self):
        """Test blank detection."""
        from llmkit.internal.utils import is_null_or_blank

        assert is_null_or_blank(None) is True
        assert is_null_or_blank("") is True
        assert is_null_or_blank("   \n\t") is True
        assert is_null_or_blank(" a ") is False

    def test_are_not_null_or_blank(self):
        """Test all strings must be present."""
        from llmkit.internal.utils import are_not_null_or_blank

        assert are_not_null_or_blank("a", "b") is True
        assert are_not_null_or_blank("a", " ") is False
        assert are_not_null_or_blank("a", None) is False
        assert are_not_null_or_blank() is False

    def test_is_null_or_empty(self):
        """Test empty collection detection."""
        from llmkit.internal.utils import is_null_or_empty

        assert is_null_or_empty(None) is True
        assert is_null_or_empty([]) is True
        assert is_null_or_empty({}) is True
        assert is_null_or_empty([1]) is False


class TestStrings:
    """Tests for string helpers."""

    def test_repeat(self):
        """Test string repetition."""
        from llmkit.internal.utils import repeat

        assert repeat("ab", 3) == "ababab"
        assert repeat("ab", 0) == ""

    def test_quoted(self):
        """Test quoting, with None rendered as null."""
        from llmkit.internal.utils import quoted

        assert quoted("hello") == '"hello"'
        assert quoted(None) == "null"

    def test_first_chars(self):
        """Test truncation."""
        from llmkit.internal.utils import first_chars

        assert first_chars("hello world", 5) == "hello"
        assert first_chars("hi", 5) == "hi"
        assert first_chars(None, 5) is None


class TestIds:
    """Tests for UUID helpers."""

    def test_random_uuid_is_valid(self):
        """Test random ids are distinct UUIDs."""
        from llmkit.internal.utils import random_uuid

        first, second = random_uuid(), random_uuid()
        assert first != second
        assert str(uuid.UUID(first)) == first

    def test_generate_uuid_from_is_stable(self):
        """Test the same text always gives the same id."""
        from llmkit.internal.utils import generate_uuid_from

        assert generate_uuid_from("hello") == generate_uuid_from("hello")
        assert generate_uuid_from("hello") != generate_uuid_from("world")

    def test_generate_uuid_from_is_version_3(self):
        """Test generated ids are name-based UUIDs."""
        from llmkit.internal.utils import generate_uuid_from

        assert uuid.UUID(generate_uuid_from("hello")).version == 3


class TestValidation:
    """Tests for ensure_* argument checks."""

    def test_ensure_not_null(self):
        """Test None is rejected."""
        from llmkit.internal.utils import ensure_not_null

        assert ensure_not_null(0, "value") == 0
        with pytest.raises(ValueError, match="value cannot be null"):
            ensure_not_null(None, "value")

    def test_ensure_not_blank(self):
        """Test blank strings are rejected."""
        from llmkit.internal.utils import ensure_not_blank

        assert ensure_not_blank("x", "name") == "x"
        with pytest.raises(ValueError, match="name cannot be null or blank"):
            ensure_not_blank("  ", "name")

    def test_ensure_not_empty(self):
        """Test empty collections are rejected."""
        from llmkit.internal.utils import ensure_not_empty

        with pytest.raises(ValueError):
            ensure_not_empty([], "items")

    def test_ensure_greater_than_zero(self):
        """Test non-positive numbers are rejected."""
        from llmkit.internal.utils import ensure_greater_than_zero

        assert ensure_greater_than_zero(3, "size") == 3
        with pytest.raises(ValueError, match="size must be greater than zero"):
            ensure_greater_than_zero(0, "size")

    def test_ensure_between(self):
        """Test range checks are inclusive."""
        from llmkit.internal.utils import ensure_between

        assert ensure_between(1.0, 0.0, 1.0, "score") == 1.0
        with pytest.raises(ValueError):
            ensure_between(1.5, 0.0, 1.0, "score")
