"""SQLAlchemy column type storing CivilDate as its formatted string."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any

from sqlalchemy.engine import Dialect
from sqlalchemy.types import String, TypeDecorator

from .civil_date import CivilDate
from .errors import ConversionError, ParseError
from .settings import CANONICAL_FORMAT, Settings

logger = logging.getLogger(__name__)


class CivilDateType(TypeDecorator):
    """Column type for CivilDate values.

        due = mapped_column(CivilDateType())

    Values are written with `storage_format` and read back with the same
    pattern. A CivilDate coming back from the driver is passed through, and a
    driver `date` (e.g. from a DATE column) is wrapped.
    """

    impl = String
    cache_ok = True

    type_name = "civil_date"

    def __init__(self, storage_format: str = CANONICAL_FORMAT, length: int = 10) -> None:
        super().__init__(length)
        self.storage_format = storage_format
        self.length = length

    @classmethod
    def from_settings(cls, settings: Settings) -> "CivilDateType":
        return cls(storage_format=settings.storage_format)

    def process_bind_param(self, value: Any, dialect: Dialect) -> str | None:
        if value is None:
            return None
        if isinstance(value, CivilDate):
            return value.format(self.storage_format)
        raise ConversionError(
            value,
            self.type_name,
            reason=f"expected None or CivilDate, got {type(value).__name__}",
        )

    def process_result_value(self, value: Any, dialect: Dialect) -> CivilDate | None:
        if value is None or isinstance(value, CivilDate):
            return value
        if isinstance(value, date) and not isinstance(value, datetime):
            return CivilDate(value)
        try:
            return CivilDate.parse(value, self.storage_format)
        except ParseError as e:
            logger.debug("Cannot read %r as %s: %s", value, self.type_name, e)
            raise ConversionError(value, self.type_name, self.storage_format) from e
