"""Injectable sources of "now" and of timezone data."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import UnknownTimezoneError


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime:
        """Return the current instant as an aware datetime."""
        raise NotImplementedError


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


@dataclass(frozen=True)
class FixedClock(Clock):
    """Always returns the same instant (naive instants are read as UTC)."""

    instant: datetime

    def now(self) -> datetime:
        if self.instant.tzinfo is None:
            return self.instant.replace(tzinfo=timezone.utc)
        return self.instant


class TimezoneProvider:
    """Resolves IANA names to tzinfo objects (zoneinfo by default)."""

    def get(self, name: str) -> tzinfo:
        n = (name or "").strip()
        if n.upper() == "UTC":
            return timezone.utc
        try:
            return ZoneInfo(n)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise UnknownTimezoneError(n) from e


_clock: Clock = SystemClock()
_provider: TimezoneProvider = TimezoneProvider()


def get_clock() -> Clock:
    return _clock


def set_clock(clock: Clock) -> Clock:
    """Install a process-wide clock and return the previous one."""
    global _clock
    prev, _clock = _clock, clock
    return prev


def set_timezone_provider(provider: TimezoneProvider) -> TimezoneProvider:
    global _provider
    prev, _provider = _provider, provider
    return prev


def resolve_timezone(tz: tzinfo | str) -> tzinfo:
    if isinstance(tz, tzinfo):
        return tz
    return _provider.get(tz)
