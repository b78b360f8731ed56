"""Composable validation and transformation pipelines.

A pipeline wraps a step ``(value, warn) -> value`` that raises to signal an
error. Steps are chained into longer pipelines that share one warning
accumulator per run::

    email = string_trimmed.chain(lambda value, warn: value and value.lower())
    result = email.required.normalize("  Someone@Example.com ")
    result.value            # "someone@example.com"
    result.warning_message  # "Leading or trailing whitespace is removed."

``AsyncNormalizer`` is the variant whose steps may be coroutines. Steps
still run one after another, and an ``asyncio.Event`` abort signal is
checked around every step.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

from normkit.exceptions import AbortedError, NormalizationError
from normkit.messages import get_error_message
from normkit.normalizer.normalized import MISSING, Normalized
from normkit.normalizer.warn import Warn

logger = logging.getLogger(__name__)

V = TypeVar("V")
W = TypeVar("W")

ParseOrThrow = Callable[[Any, Warn], V]
ParseOrThrowAsync = Callable[[Any, Warn, "asyncio.Event | None"], Awaitable[V]]

ABORTED_MESSAGE = "Aborted."
REQUIRED_MESSAGE = "Required."


def is_missing(value: Any) -> bool:
    """Presence predicate used by ``required``.

    Missing means ``None``, ``MISSING``, the empty string or an empty
    list/tuple. ``0``, ``NaN`` and ``False`` are present values, and so is
    an empty dict.
    """
    if value is None or value is MISSING:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def _require(value: Any, warn: Warn) -> Any:
    if is_missing(value):
        raise NormalizationError(REQUIRED_MESSAGE)
    return value


def _raise_if_aborted(abort_signal: asyncio.Event | None) -> None:
    if abort_signal is not None and abort_signal.is_set():
        raise AbortedError(ABORTED_MESSAGE)


class Normalizer(Generic[V]):
    """Synchronous pipeline.

    Args:
        parse_or_throw: The step, called with the input value and the run's
            ``Warn`` accumulator. It returns the normalized value or raises.
    """

    __slots__ = ("parse_or_throw",)

    def __init__(self, parse_or_throw: ParseOrThrow[V]) -> None:
        self.parse_or_throw = parse_or_throw

    def normalize(self, value: Any) -> Normalized[V]:
        """Run the pipeline.

        ``MISSING`` is passed through without running any step.

        Returns:
            The value with any accumulated warning, or the error message of
            the first step that raised.
        """
        warn = Warn()
        try:
            parsed = MISSING if value is MISSING else self.parse_or_throw(value, warn)
        except Exception as error:
            message = get_error_message(error)
            logger.debug("Normalization failed: %s", message)
            return Normalized.failure(message)
        return Normalized.success(parsed, warn.message)

    def chain(self, parse_or_throw: ParseOrThrow[W]) -> Normalizer[W]:
        """Append a synchronous step."""
        previous = self.parse_or_throw

        def parse(value: Any, warn: Warn) -> W:
            return parse_or_throw(previous(value, warn), warn)

        return Normalizer(parse)

    def chain_async(self, parse_or_throw_async: ParseOrThrowAsync[W]) -> AsyncNormalizer[W]:
        """Append an asynchronous step, turning the pipeline into an ``AsyncNormalizer``."""
        previous = self.parse_or_throw

        async def parse(value: Any, warn: Warn, abort_signal: asyncio.Event | None) -> W:
            intermediate = previous(value, warn)
            _raise_if_aborted(abort_signal)
            result = await parse_or_throw_async(intermediate, warn, abort_signal)
            _raise_if_aborted(abort_signal)
            return result

        return AsyncNormalizer(parse)

    @property
    def required(self) -> Normalizer[V]:
        """A derivative that fails with "Required." for missing values."""
        return self.chain(_require)

    def __repr__(self) -> str:
        return f"Normalizer({getattr(self.parse_or_throw, '__qualname__', self.parse_or_throw)!s})"


class AsyncNormalizer(Generic[V]):
    """Pipeline whose steps may suspend.

    Args:
        parse_or_throw_async: Coroutine function called with the input
            value, the run's ``Warn`` accumulator and the abort signal.
    """

    __slots__ = ("parse_or_throw_async",)

    def __init__(self, parse_or_throw_async: ParseOrThrowAsync[V]) -> None:
        self.parse_or_throw_async = parse_or_throw_async

    async def normalize(self, value: Any, abort_signal: asyncio.Event | None = None) -> Normalized[V]:
        """Run the pipeline.

        Args:
            value: Input value; ``MISSING`` is passed through.
            abort_signal: Optional event. Once set, the run resolves to the
                "Aborted." error instead of a value.

        Returns:
            The value with any accumulated warning, or an error result.
        """
        warn = Warn()
        try:
            _raise_if_aborted(abort_signal)
            parsed = MISSING if value is MISSING else await self.parse_or_throw_async(value, warn, abort_signal)
            _raise_if_aborted(abort_signal)
        except Exception as error:
            if abort_signal is not None and abort_signal.is_set():
                logger.debug("Async normalization aborted")
                return Normalized.failure(ABORTED_MESSAGE)
            message = get_error_message(error)
            logger.debug("Async normalization failed: %s", message)
            return Normalized.failure(message)
        return Normalized.success(parsed, warn.message)

    def chain(self, parse_or_throw: ParseOrThrow[W]) -> AsyncNormalizer[W]:
        """Append a synchronous step."""
        previous = self.parse_or_throw_async

        async def parse(value: Any, warn: Warn, abort_signal: asyncio.Event | None) -> W:
            intermediate = await previous(value, warn, abort_signal)
            _raise_if_aborted(abort_signal)
            result = parse_or_throw(intermediate, warn)
            _raise_if_aborted(abort_signal)
            return result

        return AsyncNormalizer(parse)

    def chain_async(self, parse_or_throw_async: ParseOrThrowAsync[W]) -> AsyncNormalizer[W]:
        """Append an asynchronous step."""
        previous = self.parse_or_throw_async

        async def parse(value: Any, warn: Warn, abort_signal: asyncio.Event | None) -> W:
            intermediate = await previous(value, warn, abort_signal)
            _raise_if_aborted(abort_signal)
            result = await parse_or_throw_async(intermediate, warn, abort_signal)
            _raise_if_aborted(abort_signal)
            return result

        return AsyncNormalizer(parse)

    @property
    def required(self) -> AsyncNormalizer[V]:
        """A derivative that fails with "Required." for missing values."""
        return self.chain(_require)

    def __repr__(self) -> str:
        return f"AsyncNormalizer({getattr(self.parse_or_throw_async, '__qualname__', self.parse_or_throw_async)!s})"
