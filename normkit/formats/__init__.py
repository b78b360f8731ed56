"""String format normalizers used by the ``format`` schema keyword.

Each module exposes ``normalizer``, a pipeline with the contract
``normalize(value) -> Normalized[str | None]``.
"""

from __future__ import annotations

from normkit.formats import date_time, email, url, uuid
from normkit.normalizer import Normalizer

# format keyword -> (normalizer, error reported by the schema validator)
FORMAT_NORMALIZERS: dict[str, tuple[Normalizer[str | None], str]] = {
    "date-time": (date_time.normalizer, "Invalid date-time format."),
    "email": (email.normalizer, "Invalid email format."),
    "uuid": (uuid.normalizer, "Invalid UUID format."),
    "uri": (url.normalizer, "Invalid URI format."),
}

__all__ = ["FORMAT_NORMALIZERS", "date_time", "email", "url", "uuid"]
