"""Lowercase UUID strings."""

from __future__ import annotations

import re

from normkit.exceptions import NormalizationError
from normkit.normalizer import Normalizer, Warn
from normkit.normalizer.builtins import string_trimmed_and_lower_cased

UUID_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$")


def _parse_uuid(value: str | None, warn: Warn) -> str | None:
    if not value:
        return None
    if not UUID_PATTERN.match(value):
        raise NormalizationError("Invalid UUID.")
    return value


normalizer: Normalizer[str | None] = string_trimmed_and_lower_cased.chain(_parse_uuid)
