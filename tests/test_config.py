"""Tests for configuration and shared models."""

import pytest
from pydantic import BaseModel, ValidationError

from korero import __version__
from korero.config import KoreroConfig
from korero.models import Method, QueryParams
from korero.output import Verbosity


class TestMethod:
    """Tests for Method enum."""

    def test_parse_is_case_insensitive(self):
        """Test method names parse regardless of case and padding."""
        assert Method.parse("get") == Method.GET
        assert Method.parse(" Patch ") == Method.PATCH
        assert Method.parse(Method.DELETE) is Method.DELETE
        assert Method.parse("trace") == Method.TRACE
        assert Method.parse("CONNECT") == Method.CONNECT

    def test_parse_unknown_method(self):
        """Test that unknown methods are rejected."""
        with pytest.raises(ValueError) as exc_info:
            Method.parse("FETCH")

        assert "Unsupported HTTP method" in str(exc_info.value)


class TestQueryParams:
    """Tests for QueryParams model."""

    def test_default_is_empty(self):
        """Test that new params are empty and falsy."""
        params = QueryParams()

        assert len(params) == 0
        assert not params
        assert list(params) == []

    def test_add_preserves_order_and_repeats(self):
        """Test that pairs keep insertion order and repeated keys."""
        params = QueryParams().add("tag", "a").add("page", 2).add("tag", "b")

        assert list(params) == [("tag", "a"), ("page", "2"), ("tag", "b")]

    def test_add_renders_values(self):
        """Test booleans, enums and None handling."""
        params = QueryParams().add("draft", True).add("live", False).add("method", Method.GET).add("skip", None)

        assert list(params) == [("draft", "true"), ("live", "false"), ("method", "GET")]

    def test_from_mapping_expands_lists(self):
        """Test mapping input with list values."""
        params = QueryParams.from_value({"id": 123, "tag": ["x", "y"], "missing": None})

        assert list(params) == [("id", "123"), ("tag", "x"), ("tag", "y")]

    def test_from_pairs(self):
        """Test sequence-of-pairs input."""
        params = QueryParams.from_value([("id", "123"), ("foo", "abc")])

        assert list(params) == [("id", "123"), ("foo", "abc")]

    def test_from_model(self):
        """Test pydantic model input drops unset optional fields."""

        class Filter(BaseModel):
            q: str
            limit: int = 10
            cursor: str | None = None

        params = QueryParams.from_value(Filter(q="rust"))

        assert list(params) == [("q", "rust"), ("limit", "10")]

    def test_from_query_params_copies(self):
        """Test that building from QueryParams does not share state."""
        original = QueryParams().add("a", "1")
        copy = QueryParams.from_value(original)
        copy.add("b", "2")

        assert len(original) == 1
        assert copy == QueryParams(params=[("a", "1"), ("b", "2")])


class TestKoreroConfig:
    """Tests for KoreroConfig model."""

    def test_defaults(self):
        """Test default configuration values."""
        config = KoreroConfig()

        assert config.timeout is None
        assert config.max_attempts == 1
        assert config.verbosity == Verbosity.LOW
        assert config.log_level == "WARNING"
        assert config.session_headers == {"User-Agent": f"korero/{__version__}"}

    def test_log_level_uppercased(self):
        """Test that log level is normalized."""
        assert KoreroConfig(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        """Test that unknown log levels fail validation."""
        with pytest.raises(ValidationError) as exc_info:
            KoreroConfig(log_level="LOUD")

        assert "Unknown log level" in str(exc_info.value)

    def test_max_attempts_must_be_positive(self):
        """Test that zero attempts fails validation."""
        with pytest.raises(ValidationError):
            KoreroConfig(max_attempts=0)

    def test_timeout_must_be_positive(self):
        """Test that a zero timeout fails validation."""
        with pytest.raises(ValidationError):
            KoreroConfig(timeout=0)

    def test_extra_headers_merge_into_session_headers(self):
        """Test that configured headers sit alongside the User-Agent."""
        config = KoreroConfig(user_agent="tests", headers={"X-Trace": "1"})

        assert config.session_headers == {"User-Agent": "tests", "X-Trace": "1"}

    def test_verbosity_from_int(self):
        """Test verbosity accepts its integer value."""
        assert KoreroConfig(verbosity=3).verbosity == Verbosity.HIGH
