"""Deep equality for JSON-like values."""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import date, datetime, time
from typing import Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def have_same_contents(first: Any, second: Any) -> bool:
    """Structural equality used for ``const`` and ``enum`` comparisons.

    Differs from ``==`` in three ways: two NaNs are equal, a boolean never
    equals a number (``True != 1``), and sequences compare by items whether
    they are lists or tuples.
    """
    if isinstance(first, bool) or isinstance(second, bool):
        return isinstance(first, bool) and isinstance(second, bool) and first is second

    if _is_number(first):
        if not _is_number(second):
            return False
        if isinstance(first, float) and math.isnan(first):
            return isinstance(second, float) and math.isnan(second)
        return first == second

    if first is None or isinstance(first, str):
        return first == second if isinstance(second, type(first)) else False

    if isinstance(first, (list, tuple)):
        return (
            isinstance(second, (list, tuple))
            and len(first) == len(second)
            and all(have_same_contents(a, b) for a, b in zip(first, second))
        )

    if isinstance(first, (datetime, date, time)):
        return type(first) is type(second) and first == second

    if isinstance(first, Mapping):
        return (
            isinstance(second, Mapping)
            and all(key in second and have_same_contents(value, second[key]) for key, value in first.items())
            and all(key in first for key in second)
        )

    return first is second or first == second
