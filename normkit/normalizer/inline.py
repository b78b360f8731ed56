"""Normalize arrays and objects in place with per-item callbacks.

Example::

    result = normalize_object_inline(
        payload,
        lambda value: {
            "name": string_trimmed.required.normalize(value.get("name")),
            "age": number_integer.normalize(value.get("age", MISSING)),
        },
    )
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

from normkit.normalizer.builtins import array, object_value
from normkit.normalizer.normalized import MISSING, Normalized, combine
from normkit.normalizer.warn import Warn

ItemNormalizer = Callable[[Any, int, Sequence[Any]], Any]
PropertiesNormalizer = Callable[[Mapping[str, Any]], Mapping[str, Any]]


async def _resolve(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


def normalize_array_inline(value: Sequence[Any] | None, normalize_item: ItemNormalizer) -> Normalized[Any]:
    """Normalize every item of a sequence and combine the results.

    Args:
        value: The sequence. ``None`` and ``MISSING`` are returned as-is.
        normalize_item: Called with ``(item, index, items)``; returns a
            ``Normalized`` result or a plain value.

    Returns:
        A result holding the list of item values; item errors and warnings
        are labelled ``Item #<n>``.
    """
    if value is None or value is MISSING:
        return Normalized.success(value)

    def parse(items: list[Any], warn: Warn) -> list[Any]:
        results = [normalize_item(item, index, items) for index, item in enumerate(items)]
        return combine(results).get_value(warn)

    return array.chain(parse).normalize(value)


async def normalize_array_inline_async(
    value: Sequence[Any] | None,
    normalize_item: Callable[[Any, int, Sequence[Any]], Any | Awaitable[Any]],
) -> Normalized[Any]:
    """Async variant of :func:`normalize_array_inline`.

    Item callbacks may return awaitables; they are awaited concurrently.
    """
    if value is None or value is MISSING:
        return Normalized.success(value)

    async def parse(items: list[Any], warn: Warn, abort_signal: asyncio.Event | None) -> list[Any]:
        results = await asyncio.gather(
            *(_resolve(normalize_item(item, index, items)) for index, item in enumerate(items))
        )
        return combine(list(results)).get_value(warn)

    return await array.chain_async(parse).normalize(value)


def normalize_object_inline(value: Mapping[str, Any] | None, normalize_properties: PropertiesNormalizer) -> Normalized[Any]:
    """Normalize an object through a callback producing per-property results.

    Args:
        value: The object. ``None`` and ``MISSING`` are returned as-is.
        normalize_properties: Receives the object and returns a mapping of
            property name to ``Normalized`` result (or plain value).

    Returns:
        A result holding the combined dict, property errors and warnings
        labelled by property name.
    """
    if value is None or value is MISSING:
        return Normalized.success(value)

    def parse(obj: Mapping[str, Any], warn: Warn) -> dict[str, Any]:
        return combine(normalize_properties(obj)).get_value(warn)

    return object_value.required.chain(parse).normalize(value)


async def normalize_object_inline_async(
    value: Mapping[str, Any] | None,
    normalize_properties: Callable[[Mapping[str, Any]], Mapping[str, Any] | Awaitable[Mapping[str, Any]]],
) -> Normalized[Any]:
    """Async variant of :func:`normalize_object_inline`."""
    if value is None or value is MISSING:
        return Normalized.success(value)

    async def parse(obj: Mapping[str, Any], warn: Warn, abort_signal: asyncio.Event | None) -> dict[str, Any]:
        properties = await _resolve(normalize_properties(obj))
        return combine(properties).get_value(warn)

    return await object_value.required.chain_async(parse).normalize(value)
