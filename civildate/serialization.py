"""Record encoding for CivilDate.

New writes always produce ``{"date": "YYYY-MM-DD"}``. Reads also accept the
shapes written by earlier releases; each shape has its own decoder and they
are tried in a fixed order:

1. canonical           {"date": "2020-01-31"}
2. nested-string       '{"date": "2020-01-31"}'  or  {"date": "\\"2020-01-31\\""}
3. embedded-datetime   {"_CivilDate__datetime": {"date": "2020-01-31 00:00:00.000000",
                                                 "timezone_type": 3, "timezone": "UTC"}}
"""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from .civil_date import CivilDate
from .errors import ConversionError, ParseError
from .settings import CANONICAL_FORMAT

logger = logging.getLogger(__name__)

DATE_FIELD = "date"
# Private attribute of the old mutable class, as dumped from its __dict__.
LEGACY_DATETIME_FIELD = "_CivilDate__datetime"

CANONICAL_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class RecordDecoder(ABC):
    name: str

    @abstractmethod
    def decode(self, payload: Any) -> str | None:
        """Return the canonical date string, or None if the shape doesn't match."""
        raise NotImplementedError


class CanonicalDecoder(RecordDecoder):
    name = "canonical"

    def decode(self, payload: Any) -> str | None:
        if not isinstance(payload, Mapping):
            return None
        value = payload.get(DATE_FIELD)
        if isinstance(value, str) and CANONICAL_RE.fullmatch(value):
            return value
        return None


class NestedStringDecoder(RecordDecoder):
    name = "nested-string"

    def decode(self, payload: Any) -> str | None:
        if isinstance(payload, Mapping):
            payload = payload.get(DATE_FIELD)
            if not isinstance(payload, str):
                return None
            inner = _loads_or_none(payload)
            if isinstance(inner, str) and CANONICAL_RE.fullmatch(inner):
                return inner
            return None

        if not isinstance(payload, str):
            return None
        inner = _loads_or_none(payload)
        return CanonicalDecoder().decode(inner)


class EmbeddedDateTimeDecoder(RecordDecoder):
    name = "embedded-datetime"

    def decode(self, payload: Any) -> str | None:
        if not isinstance(payload, Mapping):
            return None
        inner = payload.get(LEGACY_DATETIME_FIELD)
        if not isinstance(inner, Mapping):
            return None
        stamp = inner.get("date")
        if not isinstance(stamp, str):
            return None
        # "YYYY-MM-DD HH:MM:SS.ffffff" in the stored timezone; the old class
        # always held local midnight so the date part is the civil date.
        day = stamp.strip()[:10]
        return day if CANONICAL_RE.fullmatch(day) else None


DECODERS: tuple[RecordDecoder, ...] = (
    CanonicalDecoder(),
    NestedStringDecoder(),
    EmbeddedDateTimeDecoder(),
)


def _loads_or_none(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        return None


def encode_record(d: CivilDate) -> dict[str, str]:
    return {DATE_FIELD: str(d)}


def decode_record(payload: Any) -> CivilDate:
    """Decode any known record shape into a CivilDate."""

    for decoder in DECODERS:
        value = decoder.decode(payload)
        if value is None:
            continue
        if decoder.name != CanonicalDecoder.name:
            logger.debug("Decoded legacy %s record as %s", decoder.name, value)
        try:
            return CivilDate.parse(value, CANONICAL_FORMAT)
        except ParseError as e:
            raise ConversionError(payload, "CivilDate", CANONICAL_FORMAT, reason=f"field {DATE_FIELD!r}") from e

    logger.debug("No record decoder matched %r", payload)
    raise ConversionError(payload, "CivilDate", CANONICAL_FORMAT, reason="unrecognized record shape")


def dumps(d: CivilDate) -> str:
    return json.dumps(encode_record(d))


def loads(text: str) -> CivilDate:
    try:
        payload = json.loads(text)
    except ValueError as e:
        raise ConversionError(text, "CivilDate", CANONICAL_FORMAT, reason="invalid JSON") from e
    return decode_record(payload)
