from __future__ import annotations

import re

from babel import Locale, UnknownLocaleError
from babel.dates import get_date_format

from .civil_date import CivilDate
from .errors import ParseError, UnknownPatternError, UnsupportedLocaleError
from .settings import Settings

PATTERN_TOKEN_RE = re.compile(r"[A-Za-z]+")
VALUE_PART_RE = re.compile(r"\d+")

DAY_TOKENS = ("d", "dd")
MONTH_TOKENS = ("M", "MM")
YEAR_TOKENS = ("y", "yy", "yyyy")


class LocalizedStringParser:
    """Parse short localized dates such as 9/1/23 (en_US) or 09/01/2023 (fr_FR)."""

    def __init__(self, default_locale: str = "en_US") -> None:
        self.default_locale = default_locale

    @classmethod
    def from_settings(cls, settings: Settings) -> "LocalizedStringParser":
        return cls(default_locale=settings.default_locale)

    def get_pattern_from_locale(self, locale: str) -> str:
        """Return the CLDR short date pattern of a locale (en-US and en_US both work)."""
        ident = (locale or "").strip().replace("-", "_")
        try:
            loc = Locale.parse(ident)
        except (UnknownLocaleError, ValueError, TypeError) as e:
            raise UnsupportedLocaleError(locale) from e
        pattern = get_date_format("short", locale=loc).pattern
        if not pattern:
            raise UnsupportedLocaleError(locale)
        return pattern

    def create(self, text: str, locale: str | None = None) -> CivilDate:
        locale = locale or self.default_locale
        tokens = PATTERN_TOKEN_RE.findall(self.get_pattern_from_locale(locale))
        values = VALUE_PART_RE.findall(text)
        if len(tokens) != len(values):
            raise ParseError(text, "/".join(tokens), f"expected {len(tokens)} parts for locale {locale}")

        year = month = day = ""
        year_directive = "%Y"
        for token, value in zip(tokens, values):
            if token in DAY_TOKENS:
                day = value.zfill(2)
            elif token in MONTH_TOKENS:
                month = value.zfill(2)
            elif token in YEAR_TOKENS:
                year = value
                year_directive = "%y" if len(value) == 2 else "%Y"
            else:
                raise UnknownPatternError(token)

        return CivilDate.parse(f"{year}-{month}-{day}", f"{year_directive}-%m-%d")
