from __future__ import annotations

from typing import Any


class CivilDateError(Exception):
    """Base class for every error raised by civildate."""


class ParseError(CivilDateError, ValueError):
    def __init__(self, text: str, pattern: str, reason: str | None = None) -> None:
        msg = f"Cannot parse {text!r} with format {pattern!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
        self.text = text
        self.pattern = pattern


class InvalidModifierError(CivilDateError, ValueError):
    """A modify() expression used tokens outside the calendar vocabulary."""

    def __init__(self, expression: str, tokens: tuple[str, ...] = (), reason: str | None = None) -> None:
        if reason is None:
            reason = "unsupported token(s): " + ", ".join(repr(t) for t in tokens) if tokens else "empty expression"
        super().__init__(f"Invalid date modifier {expression!r} ({reason})")
        self.expression = expression
        self.tokens = tokens


class DateOutOfRangeError(CivilDateError, ValueError):
    """A calendar step left the supported range (years 1..9999)."""

    def __init__(self, start: object, reason: str) -> None:
        super().__init__(f"Cannot move {start} outside the supported date range: {reason}")
        self.start = start


class UnknownTimezoneError(CivilDateError, ValueError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown timezone: {name}")
        self.name = name


class UnsupportedLocaleError(CivilDateError, ValueError):
    def __init__(self, locale: str) -> None:
        super().__init__(f"No short date pattern available for locale {locale!r}")
        self.locale = locale


class UnknownPatternError(CivilDateError, ValueError):
    def __init__(self, token: str) -> None:
        super().__init__(f"Unknown date pattern token {token!r}")
        self.token = token


class ConversionError(CivilDateError, ValueError):
    """An adapter could not turn a value into (or out of) a CivilDate.

    The underlying ParseError, when there is one, is chained as __cause__.
    """

    def __init__(self, value: Any, target: str, pattern: str | None = None, reason: str | None = None) -> None:
        msg = f"Could not convert {value!r} to {target}"
        if pattern:
            msg += f" (expected format {pattern!r})"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
        self.value = value
        self.target = target
        self.pattern = pattern


class NotNormalizableValueError(ConversionError):
    pass


class EmptyValueError(NotNormalizableValueError):
    pass


class MalformedValueError(NotNormalizableValueError):
    pass


class InvalidArgumentError(CivilDateError, TypeError):
    pass
