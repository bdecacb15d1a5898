"""Date and date-time values with fixed JSON and database text forms."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_COMPACT = re.compile(r"(\d{4})(\d{2})(\d{2})", re.ASCII)
_TENTHS = re.compile(r"(\d{4})-(\d{2})-(\d{2}) (\d{1,2}):(\d{2}):(\d{2})\.(\d)", re.ASCII)
_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})", re.ASCII
)


def _fields(pattern: re.Pattern[str], text: str) -> list[str]:
    match = pattern.fullmatch(text)
    if match is None:
        raise ValueError(f"cannot parse {text!r}")
    return list(match.groups())


def _parse_compact_date(text: str) -> datetime:
    return datetime(*map(int, _fields(_COMPACT, text)), tzinfo=timezone.utc)


def _parse_tenths_datetime(text: str) -> datetime:
    *fields, tenths = map(int, _fields(_TENTHS, text))
    return datetime(*fields, tenths * 100_000, tzinfo=timezone.utc)


def _parse_rfc3339(text: str) -> datetime:
    *fields, fraction, zone = _fields(_RFC3339, text)
    tz = timezone.utc
    if zone != "Z":
        hours, minutes = int(zone[1:3]), int(zone[4:6])
        if hours >= 24 or minutes >= 60:
            raise ValueError(f"time zone offset out of range in {text!r}")
        offset = timedelta(hours=hours, minutes=minutes)
        tz = timezone(-offset if zone[0] == "-" else offset)
    micro = int((fraction or "0")[:6].ljust(6, "0"))
    return datetime(*map(int, fields), micro, tzinfo=tz)


def _scan_moment(name: str, value: Any, parse: Callable[[str], datetime]) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return _parse_rfc3339(value)
        except ValueError:
            return parse(value)
    raise TypeError(f"failed to unmarshal {name} value: {value!r}")


@dataclass(frozen=True)
class _Moment:
    moment: datetime = ZERO_TIME

    def __post_init__(self) -> None:
        if self.moment.tzinfo is None:
            object.__setattr__(self, "moment", self.moment.replace(tzinfo=timezone.utc))

    @property
    def is_zero(self) -> bool:
        """True for the zero instant, 0001-01-01 00:00:00 UTC."""
        return self.moment == ZERO_TIME

    def _database_text(self) -> str | None:
        if self.is_zero:
            return None
        text = self.moment.replace(microsecond=0).isoformat()
        return text[:-6] + "Z" if text.endswith("+00:00") else text


class DateFromInt(_Moment):
    """A date carried in JSON as an integer such as 20230107."""

    def to_json(self) -> str:
        """JSON text: the date as an unquoted YYYYMMDD number."""
        return self.moment.date().isoformat().replace("-", "")

    @classmethod
    def from_json(cls, data: str | bytes | bytearray) -> DateFromInt:
        """Parse raw JSON text holding a YYYYMMDD integer."""
        text = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
        if re.fullmatch(r"[+-]?[0-9]+", text) is None:
            raise ValueError(f"invalid integer {text!r}")
        return cls(_parse_compact_date(str(int(text))))

    @classmethod
    def scan(cls, value: Any) -> DateFromInt:
        """Build from a database value: a datetime, RFC 3339 or YYYYMMDD text."""
        return cls(_scan_moment(cls.__name__, value, _parse_compact_date))

    def value(self) -> str | None:
        """Database form: RFC 3339 text, or None for the zero instant."""
        return self._database_text()


class DateTimeFromDateTime(_Moment):
    """A date-time carried in JSON as "YYYY-MM-DD hh:mm:ss.f"."""

    def to_json(self) -> str:
        """JSON text: a quoted string with tenths of a second."""
        m = self.moment
        return f'"{m.date().isoformat()} {m:%H:%M:%S}.{m.microsecond // 100_000}"'

    @classmethod
    def from_json(cls, data: str | bytes | bytearray) -> DateTimeFromDateTime:
        """Parse raw JSON text; an empty string or null gives the zero instant."""

        def reject(name: str) -> Any:
            raise ValueError(f"invalid JSON value {name}")

        value = json.loads(data, parse_constant=reject)
        if value is None or value == "":
            return cls()
        if not isinstance(value, str):
            raise ValueError(f"expected a JSON string, got {value!r}")
        return cls(_parse_tenths_datetime(value))

    @classmethod
    def scan(cls, value: Any) -> DateTimeFromDateTime:
        """Build from another instance, a datetime, or RFC 3339 / layout text."""
        if isinstance(value, DateTimeFromDateTime):
            return cls(value.moment)
        return cls(_scan_moment(cls.__name__, value, _parse_tenths_datetime))

    def value(self) -> str | None:
        """Database form: RFC 3339 text, or None for the zero instant."""
        return self._database_text()