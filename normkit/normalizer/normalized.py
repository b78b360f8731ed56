"""Result container for pipeline runs.

A ``Normalized`` holds either a value (with an optional warning) or an
error message, never both. ``combine`` merges many of them into one.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from normkit.exceptions import NormalizationError
from normkit.messages import combine_errors, combine_warnings, prepend_message

if TYPE_CHECKING:
    from normkit.normalizer.warn import Warn

V = TypeVar("V")


class _Missing:
    """Sentinel type for "no value supplied"."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Missing:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Missing:
        return self


MISSING: Any = _Missing()
"""Stands for an absent value. Pipelines pass it through untouched and
``combine`` drops entries that resolve to it."""


class Normalized(Generic[V]):
    """Outcome of a pipeline run.

    Use :meth:`success` and :meth:`failure` to build instances; the
    constructor enforces that an error never travels with a value or a
    warning.
    """

    __slots__ = ("_error_message", "_value", "_warning_message")

    def __init__(
        self,
        *,
        value: Any = MISSING,
        warning_message: str | None = None,
        error_message: str | None = None,
    ) -> None:
        if error_message is not None:
            if value is not MISSING or warning_message is not None:
                raise ValueError("An error result cannot carry a value or a warning.")
            if not error_message:
                raise ValueError("Error message cannot be empty.")
        self._error_message = error_message
        self._warning_message = warning_message or None
        self._value = value

    @classmethod
    def success(cls, value: V, warning: str | None = None) -> Normalized[V]:
        """Build a successful result."""
        return cls(value=value, warning_message=warning)

    @classmethod
    def failure(cls, error: str) -> Normalized[Any]:
        """Build an error result."""
        return cls(error_message=error)

    @property
    def ok(self) -> bool:
        """Whether a value was produced."""
        return self._error_message is None

    @property
    def error_message(self) -> str | None:
        """Error message if normalization failed."""
        return self._error_message

    @property
    def warning_message(self) -> str | None:
        """Warning message if normalization succeeded with issues."""
        return self._warning_message

    @property
    def value_safe(self) -> V | None:
        """The value, or None for an error result. Never raises."""
        if self._error_message is not None:
            return None
        return self._value

    @property
    def value(self) -> V:
        """The value.

        Raises:
            NormalizationError: If this is an error result.
        """
        if self._error_message is not None:
            raise NormalizationError(self._error_message)
        return self._value

    def get_value(self, warn: Warn | None = None, *, prefix: str | None = None) -> V:
        """Unwrap the value inside another pipeline step.

        The warning (prefixed) is forwarded to ``warn``; an error is raised
        (prefixed) so the enclosing step fails too.

        Args:
            warn: Accumulator of the enclosing pipeline run.
            prefix: Label or path to prepend to the messages.

        Raises:
            NormalizationError: If this is an error result.
        """
        if self._error_message is not None:
            raise NormalizationError(prepend_message(prefix, self._error_message) or self._error_message)
        if warn is not None:
            warn(prepend_message(prefix, self._warning_message))
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Normalized):
            return NotImplemented
        return (
            self._error_message == other._error_message
            and self._warning_message == other._warning_message
            and self._value == other._value
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self._error_message is not None:
            return f"Normalized(error_message={self._error_message!r})"
        if self._warning_message is not None:
            return f"Normalized(value={self._value!r}, warning_message={self._warning_message!r})"
        return f"Normalized(value={self._value!r})"

    @staticmethod
    def combine(
        items: Mapping[str, Any] | Sequence[Any],
        labels: Mapping[Any, str | None] | None = None,
    ) -> Normalized[Any]:
        """Alias of :func:`combine`."""
        return combine(items, labels)


def _resolve(item: Any) -> Any:
    return item.value if isinstance(item, Normalized) else item


def combine(
    items: Mapping[str, Any] | Sequence[Any],
    labels: Mapping[Any, str | None] | None = None,
) -> Normalized[Any]:
    """Combine independently produced results into one.

    Items may be ``Normalized`` results or raw values (treated as already
    successful). Every error is reported, labelled; if there is none, the
    warnings are merged the same way and the values are collected.

    Args:
        items: A mapping (keyed results) or a sequence (positional results).
        labels: Optional label overrides by key or by index. A falsy
            override falls back to the key, or to ``"Item #<n>"`` for
            positional items.

    Returns:
        A result whose value is a dict or a list of the resolved values,
        with ``MISSING`` entries dropped.
    """
    labels = labels or {}

    if isinstance(items, Mapping):
        labelled = [(labels.get(key) or key, item) for key, item in items.items()]
    else:
        labelled = [(labels.get(index) or f"Item #{index + 1}", item) for index, item in enumerate(items)]

    results = [(label, item) for label, item in labelled if isinstance(item, Normalized)]

    error_message = combine_errors(results)
    if error_message:
        return Normalized.failure(error_message)

    warning_message = combine_warnings(results)

    if isinstance(items, Mapping):
        value: Any = {key: _resolve(item) for key, item in items.items()}
        value = {key: item for key, item in value.items() if item is not MISSING}
    else:
        value = [resolved for resolved in (_resolve(item) for item in items) if resolved is not MISSING]

    return Normalized.success(value, warning_message)
