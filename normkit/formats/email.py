"""Lowercase email addresses."""

from __future__ import annotations

import re

from normkit.exceptions import NormalizationError
from normkit.normalizer import Normalizer, Warn
from normkit.normalizer.builtins import string_trimmed

EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[a-zA-Z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@(?:[a-zA-Z0-9](?:[a-zA-Z0-9-]*[a-zA-Z0-9])?\.)+[a-zA-Z0-9](?:[a-zA-Z0-9-]*[a-zA-Z0-9])?$"
)


def _parse_email(value: str | None, warn: Warn) -> str | None:
    refined = value.lower() if value else None
    if not refined:
        return None
    if not EMAIL_PATTERN.match(refined):
        raise NormalizationError("Invalid email address.")
    return refined


normalizer: Normalizer[str | None] = string_trimmed.chain(_parse_email)
