"""Absolute URLs, normalized to their canonical form."""

from __future__ import annotations

from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from normkit.exceptions import NormalizationError
from normkit.messages import prepend_message
from normkit.normalizer import Normalizer, Warn
from normkit.normalizer.builtins import string_trimmed

_URL_ADAPTER = TypeAdapter(AnyUrl)


def _parse_url(value: str | None, warn: Warn) -> str | None:
    if not value:
        return None
    try:
        return str(_URL_ADAPTER.validate_python(value))
    except PydanticValidationError as error:
        details = error.errors()[0]["msg"] if error.errors() else str(error)
        raise NormalizationError(prepend_message("Invalid URL", details) or "Invalid URL") from error


normalizer: Normalizer[str | None] = string_trimmed.chain(_parse_url)
