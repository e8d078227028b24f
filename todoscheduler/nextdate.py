"""Date arithmetic for repeating tasks."""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date, datetime, time, timedelta, timezone

DATE_FORMAT = "%Y%m%d"
MAX_INTERVAL = 400

_DATE_RE = re.compile(r"\d{8}")
_INT_RE = re.compile(r"[+-]?\d+")


class RepeatRuleError(ValueError):
    """Raised when a repeat rule cannot be applied."""


def parse_date(value: str) -> date:
    """Parse a date written as YYYYMMDD."""
    if not isinstance(value, str) or not _DATE_RE.fullmatch(value):
        raise ValueError(f"invalid date {value!r}: expected YYYYMMDD")
    try:
        return date(int(value[:4]), int(value[4:6]), int(value[6:]))
    except ValueError as exc:
        raise ValueError(f"invalid date {value!r}: {exc}") from exc


def format_date(value: date) -> str:
    """Format a date as YYYYMMDD."""
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


def _add_year(value: date) -> date:
    try:
        return value.replace(year=value.year + 1)
    except ValueError:
        # 29 February rolls over to 1 March of the next year.
        return date(value.year + 1, 3, 1)


def _parse_interval(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise RepeatRuleError(f"invalid interval {text!r}")
    interval = int(text)
    if interval > MAX_INTERVAL:
        raise RepeatRuleError("interval too large")
    if interval < 1:
        raise RepeatRuleError("interval must be positive")
    return interval


def _as_naive_datetime(now: date | datetime) -> datetime:
    if isinstance(now, datetime):
        if now.tzinfo is not None:
            return now.astimezone(timezone.utc).replace(tzinfo=None)
        return now
    return datetime.combine(now, time())


def next_date(now: date | datetime, dstart: str, repeat: str) -> str:
    """Return the first date after ``now`` reached from ``dstart`` by ``repeat``.

    Supported rules are ``d N`` (every N days), ``w N`` (every N weeks)
    and ``y`` (every year). The start date is always advanced at least once.
    """
    current = parse_date(dstart)
    if not repeat:
        raise RepeatRuleError("repeat is empty")

    parts = repeat.split(" ")
    kind = parts[0]
    advance: Callable[[date], date]
    if kind in ("d", "w"):
        if len(parts) < 2:
            name = "daily" if kind == "d" else "weekly"
            raise RepeatRuleError(f"invalid repeat format for {name} rule")
        interval = _parse_interval(parts[1])
        step = timedelta(days=interval * (7 if kind == "w" else 1))

        def advance(value: date) -> date:
            return value + step

    elif kind == "y":
        advance = _add_year
    else:
        raise RepeatRuleError("unsupported repeat format")

    limit = _as_naive_datetime(now)
    try:
        current = advance(current)
        while datetime.combine(current, time()) <= limit:
            current = advance(current)
    except OverflowError as exc:
        raise RepeatRuleError("date out of range") from exc
    return format_date(current)