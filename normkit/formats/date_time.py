"""ISO date-time strings: ``YYYY-MM-DDTHH:mm:ss.sssZ``."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from normkit.exceptions import NormalizationError
from normkit.normalizer import Normalizer, Warn

_DATETIME_ADAPTER = TypeAdapter(datetime)


def to_iso(value: datetime) -> str:
    """Render as UTC with millisecond precision; naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _parse_date_time(value: Any, warn: Warn) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (datetime, str, int, float)):
        raise NormalizationError("Invalid date time.")
    try:
        parsed = _DATETIME_ADAPTER.validate_python(value)
    except PydanticValidationError as error:
        raise NormalizationError("Invalid date time.") from error
    return to_iso(parsed)


normalizer: Normalizer[str | None] = Normalizer(_parse_date_time)
