"""Error and warning message helpers.

Messages are plain strings. Nested producers prefix their messages with a
label or path so the final text reads as an indented trace:

    address:
      city: Required.
      zip: String length must be at most 10.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import Any, TypeVar

from normkit.exceptions import NormalizationError

R = TypeVar("R")

ErrorHandler = Callable[[Exception], "str | Exception | None"]


def get_error_message(error: Any, default_message: str = "Unknown error.") -> str:
    """Extract a message string from any error value.

    Args:
        error: An exception, a string, or anything with a ``message`` attribute.
        default_message: Returned when nothing usable can be extracted.

    Returns:
        The message text.
    """
    if isinstance(error, str):
        return error or default_message
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(error) or default_message


def indent(value: str, indentation: str = "  ") -> str:
    """Prepend ``indentation`` to every line, blank lines included."""
    return indentation + value.replace("\n", "\n" + indentation)


def prepend_message(prefix: str | None, message: str | None) -> str | None:
    """Prepend a label to a message.

    - Single-line: ``"prefix: message"``
    - Multi-line: the prefix on its own line, the message indented below it

    Empty prefixes and empty messages are returned unchanged.
    """
    if not message or not prefix:
        return message
    if "\n" in message:
        return f"{prefix}:\n{indent(message, '  ')}"
    return f"{prefix}: {message}"


def combine_messages(
    messages: Mapping[str, str | None] | Iterable[tuple[str, str | None]],
) -> str | None:
    """Combine labelled messages into a single newline-separated string.

    Args:
        messages: Mapping of label to message, or an iterable of
            ``(label, message)`` pairs. Empty messages are skipped.

    Returns:
        The combined text, or None when there is nothing to report.
    """
    pairs = messages.items() if isinstance(messages, Mapping) else messages
    lines = [prepend_message(label, message) for label, message in pairs if message]
    return "\n".join(line for line in lines if line) or None


def combine_errors(items: Iterable[tuple[str, Any]]) -> str | None:
    """Combine the ``error_message`` of labelled results (or raw strings)."""
    return combine_messages(
        (label, _message_of(item, "error_message")) for label, item in items
    )


def combine_warnings(items: Iterable[tuple[str, Any]]) -> str | None:
    """Combine the ``warning_message`` of labelled results (or raw strings)."""
    return combine_messages(
        (label, _message_of(item, "warning_message")) for label, item in items
    )


def _message_of(item: Any, attribute: str) -> str | None:
    if not item:
        return None
    if isinstance(item, str):
        return item
    return getattr(item, attribute, None)


def alter_error(action: Callable[[], R], handle_error: ErrorHandler) -> R:
    """Run ``action``, letting ``handle_error`` replace the error it raises.

    Args:
        action: Zero-argument callable to run.
        handle_error: Receives the raised exception and returns a new message,
            a new exception, or a falsy value to re-raise the original.

    Returns:
        Whatever ``action`` returns.

    Raises:
        NormalizationError: When the handler returns a message string.
    """
    try:
        return action()
    except Exception as error:
        handled = handle_error(error)
        if not handled:
            raise
        if isinstance(handled, str):
            raise NormalizationError(handled) from error
        raise handled from error


async def alter_error_async(
    action: Callable[[], Awaitable[R]],
    handle_error: ErrorHandler,
) -> R:
    """Async variant of :func:`alter_error`."""
    try:
        return await action()
    except Exception as error:
        handled = handle_error(error)
        if not handled:
            raise
        if isinstance(handled, str):
            raise NormalizationError(handled) from error
        raise handled from error


__all__ = [
    "alter_error",
    "alter_error_async",
    "combine_errors",
    "combine_messages",
    "combine_warnings",
    "get_error_message",
    "indent",
    "prepend_message",
]
