"""Unit tests for error and warning message helpers."""

from __future__ import annotations

import pytest

from normkit.exceptions import NormalizationError
from normkit.messages import (
    alter_error,
    alter_error_async,
    combine_messages,
    get_error_message,
    indent,
    prepend_message,
)


class TestGetErrorMessage:
    """Test message extraction from error values."""

    def test_exception_message(self) -> None:
        """Test a normkit error yields its message."""
        assert get_error_message(NormalizationError("Required.")) == "Required."

    def test_plain_exception(self) -> None:
        """Test any exception yields its text."""
        assert get_error_message(ValueError("bad value")) == "bad value"

    def test_string(self) -> None:
        """Test a string is its own message."""
        assert get_error_message("Oops.") == "Oops."

    def test_empty_falls_back_to_default(self) -> None:
        """Empty strings and message-less exceptions use the default."""
        assert get_error_message("") == "Unknown error."
        assert get_error_message(ValueError()) == "Unknown error."
        assert get_error_message("", default_message="Nope.") == "Nope."


class TestPrependMessage:
    """Test label prefixing."""

    def test_single_line(self) -> None:
        """Test a label is joined with a colon."""
        assert prepend_message("name", "Required.") == "name: Required."

    def test_multi_line_is_indented(self) -> None:
        """Test a multi-line message moves below the label."""
        message = "city: Required.\nzip: Too long."
        assert prepend_message("address", message) == "address:\n  city: Required.\n  zip: Too long."

    def test_nested_multi_line(self) -> None:
        """Each level of nesting adds one indentation step."""
        inner = prepend_message("address", "city: Required.\nzip: Too long.")
        outer = prepend_message("user", inner)
        assert outer == "user:\n  address:\n    city: Required.\n    zip: Too long."

    def test_empty_prefix_or_message(self) -> None:
        """Test an empty label or message is left alone."""
        assert prepend_message(None, "Required.") == "Required."
        assert prepend_message("", "Required.") == "Required."
        assert prepend_message("name", None) is None
        assert prepend_message("name", "") == ""


class TestIndent:
    """Test line indentation."""

    def test_indents_every_line(self) -> None:
        """Blank lines are indented too."""
        assert indent("a\n\nb") == "  a\n  \n  b"

    def test_custom_indentation(self) -> None:
        """Test a custom indent string is used on every line."""
        assert indent("a\nb", "> ") == "> a\n> b"


class TestCombineMessages:
    """Test combining labelled messages."""

    def test_mapping(self) -> None:
        """Test a mapping is labelled by key and skips empty messages."""
        assert combine_messages({"a": "Required.", "b": None, "c": "Bad."}) == "a: Required.\nc: Bad."

    def test_pairs(self) -> None:
        """Test label and message pairs keep their order."""
        assert combine_messages([("Item #1", "Bad."), ("Item #2", "Worse.")]) == "Item #1: Bad.\nItem #2: Worse."

    def test_nothing_to_report(self) -> None:
        """Test no messages give None."""
        assert combine_messages({}) is None
        assert combine_messages({"a": None, "b": ""}) is None


class TestAlterError:
    """Test replacing errors raised by an action."""

    def test_returns_value_on_success(self) -> None:
        """Test the action result is returned when nothing fails."""
        assert alter_error(lambda: 42, lambda error: "Never used.") == 42

    def test_replaces_message(self) -> None:
        """Test a string from the handler becomes the new message."""
        def action() -> None:
            raise ValueError("low level")

        with pytest.raises(NormalizationError, match="Invalid configuration.") as exc_info:
            alter_error(action, lambda error: "Invalid configuration.")
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_replaces_exception(self) -> None:
        """Test an exception from the handler is raised instead."""
        def action() -> None:
            raise ValueError("low level")

        with pytest.raises(KeyError):
            alter_error(action, lambda error: KeyError("missing"))

    def test_falsy_handler_reraises_original(self) -> None:
        """Test a falsy handler result re-raises the original error."""
        def action() -> None:
            raise ValueError("low level")

        with pytest.raises(ValueError, match="low level"):
            alter_error(action, lambda error: None)

    @pytest.mark.asyncio
    async def test_async_variant(self) -> None:
        """Test the async variant rewrites the message."""
        async def action() -> None:
            raise ValueError("low level")

        with pytest.raises(NormalizationError, match="Wrapped."):
            await alter_error_async(action, lambda error: "Wrapped.")

    @pytest.mark.asyncio
    async def test_async_returns_value(self) -> None:
        """Test the async variant returns the awaited value."""
        async def action() -> str:
            return "done"

        assert await alter_error_async(action, lambda error: "Wrapped.") == "done"
