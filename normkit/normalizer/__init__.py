"""Composable validation pipelines.

Usage::

    from normkit.normalizer import Normalizer, combine

    doubled = Normalizer(lambda value, warn: value * 2)
    result = combine({"x": doubled.normalize(3), "y": 4})
    result.value  # {"x": 6, "y": 4}
"""

from __future__ import annotations

from normkit.normalizer.inline import (
    normalize_array_inline,
    normalize_array_inline_async,
    normalize_object_inline,
    normalize_object_inline_async,
)
from normkit.normalizer.normalized import MISSING, Normalized, combine
from normkit.normalizer.pipeline import (
    ABORTED_MESSAGE,
    REQUIRED_MESSAGE,
    AsyncNormalizer,
    Normalizer,
    ParseOrThrow,
    ParseOrThrowAsync,
    is_missing,
)
from normkit.normalizer.warn import Warn

__all__ = [
    "ABORTED_MESSAGE",
    "MISSING",
    "REQUIRED_MESSAGE",
    "AsyncNormalizer",
    "Normalized",
    "Normalizer",
    "ParseOrThrow",
    "ParseOrThrowAsync",
    "Warn",
    "combine",
    "is_missing",
    "normalize_array_inline",
    "normalize_array_inline_async",
    "normalize_object_inline",
    "normalize_object_inline_async",
]
