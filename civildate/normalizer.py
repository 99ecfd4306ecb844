"""Normalization of CivilDate for transport formats (JSON APIs, pydantic models)."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime
from typing import Annotated, Any

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from .civil_date import CivilDate
from .errors import EmptyValueError, InvalidArgumentError, MalformedValueError, ParseError
from .serialization import CANONICAL_RE, decode_record
from .settings import CANONICAL_FORMAT, Settings

logger = logging.getLogger(__name__)

EMPTY_STRING_OR_NULL_MESSAGE = (
    "The data is either an empty string or None. "
    "Pass a string that can be parsed with the given format or a valid YYYY-MM-DD string."
)


class CivilDateNormalizer:
    """CivilDate <-> string, with a configurable default output pattern."""

    def __init__(self, default_format: str = CANONICAL_FORMAT) -> None:
        self.default_format = default_format

    @classmethod
    def from_settings(cls, settings: Settings) -> "CivilDateNormalizer":
        return cls(default_format=settings.output_format)

    def supports_normalization(self, data: Any) -> bool:
        return isinstance(data, CivilDate)

    def normalize(self, obj: Any, pattern: str | None = None) -> str:
        if not isinstance(obj, CivilDate):
            raise InvalidArgumentError(f'The object must be an instance of "{CivilDate.__name__}".')
        return obj.format(pattern or self.default_format)

    def supports_denormalization(self, type_: Any) -> bool:
        return type_ is CivilDate

    def denormalize(self, data: Any, pattern: str | None = None) -> CivilDate:
        """Parse `data` with `pattern` (canonical when omitted).

        None/"" raise EmptyValueError; anything unparseable raises
        MalformedValueError with the ParseError chained.
        """
        if data is None or data == "":
            raise EmptyValueError(data, CivilDate.__name__, reason=EMPTY_STRING_OR_NULL_MESSAGE)

        fmt = pattern or CANONICAL_FORMAT
        try:
            return CivilDate.parse(data, fmt)
        except ParseError as e:
            logger.debug("Cannot denormalize %r with %r: %s", data, fmt, e)
            raise MalformedValueError(data, CivilDate.__name__, fmt, reason=str(e)) from e


def _validate(value: Any) -> CivilDate:
    if isinstance(value, CivilDate):
        return value
    if isinstance(value, date) and not isinstance(value, datetime):
        return CivilDate(value)
    if isinstance(value, str):
        if not CANONICAL_RE.fullmatch(value):
            raise ValueError(f"expected a YYYY-MM-DD date, got {value!r}")
        return CivilDate.parse(value)
    if isinstance(value, Mapping):
        return decode_record(value)
    raise ValueError(f"cannot build a CivilDate from {type(value).__name__}")


class _CivilDatePydanticAnnotation:
    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            _validate,
            serialization=core_schema.plain_serializer_function_ser_schema(str, when_used="json"),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {"type": "string", "format": "date"}


# Use as a field type: `due: CivilDateField`.
CivilDateField = Annotated[CivilDate, _CivilDatePydanticAnnotation]
