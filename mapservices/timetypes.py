"""Time and duration values as exchanged with the web services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _total_microseconds(value: timedelta) -> int:
    return (value.days * 86400 + value.seconds) * 1_000_000 + value.microseconds


def _truncate_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // denominator
    return -quotient if numerator < 0 else quotient


def _zone_name(zone: tzinfo | None) -> str:
    if zone is None:
        return "Local"
    if isinstance(zone, ZoneInfo):
        return zone.key
    if zone is timezone.utc:
        return "UTC"
    return str(zone)


def _load_zone(name: str) -> tzinfo | None:
    if name in ("", "UTC"):
        return timezone.utc
    if name == "Local":
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def _rfc1123(value: datetime) -> str:
    return (
        f"{_DAYS[value.weekday()]}, {value.day:02d} {_MONTHS[value.month - 1]} "
        f"{value.year:04d} {value.hour:02d}:{value.minute:02d}:{value.second:02d} "
        f"{value.tzname() or ''}"
    )


@dataclass
class DateTime:
    """A point in time: seconds since the epoch, its zone and a text form."""

    text: str = ""
    time_zone: str = ""
    value: int = 0

    def to_datetime(self) -> datetime:
        """Return an aware datetime, in the named zone when it is known."""
        instant = datetime.fromtimestamp(self.value, timezone.utc)
        zone = _load_zone(self.time_zone)
        return instant.astimezone(zone) if zone is not None else instant.astimezone()

    @classmethod
    def from_datetime(cls, value: datetime | None) -> DateTime | None:
        """Build a DateTime from a datetime; ``None`` gives ``None``."""
        if value is None:
            return None
        zone_name = _zone_name(value.tzinfo)
        aware = value if value.tzinfo is not None else value.astimezone()
        seconds = _truncate_div(_total_microseconds(aware - _EPOCH), 1_000_000)
        return cls(text=_rfc1123(aware), time_zone=zone_name, value=seconds)


def _fraction(frac: int, digits: int) -> str:
    text = str(frac).rjust(digits, "0").rstrip("0")
    return f".{text}" if text else ""


def format_duration(value: timedelta) -> str:
    """Format a duration like ``2m13s``, ``1h0m0s``, ``1.5ms`` or ``0s``."""
    nanos = _total_microseconds(value) * 1000
    if nanos == 0:
        return "0s"
    sign = "-" if nanos < 0 else ""
    magnitude = abs(nanos)
    if magnitude < 1_000_000_000:
        if magnitude < 1000:
            return f"{sign}{magnitude}ns"
        if magnitude < 1_000_000:
            whole, frac = divmod(magnitude, 1000)
            return f"{sign}{whole}{_fraction(frac, 3)}µs"
        whole, frac = divmod(magnitude, 1_000_000)
        return f"{sign}{whole}{_fraction(frac, 6)}ms"
    whole, frac = divmod(magnitude, 1_000_000_000)
    minutes, seconds = divmod(whole, 60)
    text = f"{seconds}{_fraction(frac, 9)}s"
    if minutes:
        hours, minutes = divmod(minutes, 60)
        text = f"{minutes}m{text}"
        if hours:
            text = f"{hours}h{text}"
    return sign + text


@dataclass
class Duration:
    """A duration in whole seconds with a human-readable text."""

    value: int = 0
    text: str = ""

    def to_timedelta(self) -> timedelta:
        return timedelta(seconds=self.value)

    @classmethod
    def from_timedelta(cls, value: timedelta) -> Duration:
        if not value:
            return cls()
        seconds = _truncate_div(_total_microseconds(value), 1_000_000)
        return cls(value=seconds, text=format_duration(value))


@dataclass
class Location:
    """A point given with the long field names ``latitude`` and ``longitude``."""

    latitude: float = 0.0
    longitude: float = 0.0