"""Parser and scheduler for standard five-field crontab expressions."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

MONTH_NAMES = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}
DOW_NAMES = {"sun": 0, "mon": 1, "tue": 2, "wed": 3, "thu": 4, "fri": 5, "sat": 6}

_FIELDS = (
    (0, 59, None),
    (0, 23, None),
    (1, 31, None),
    (1, 12, MONTH_NAMES),
    (0, 6, DOW_NAMES),
)

_DESCRIPTORS = {
    "@yearly": "0 0 1 1 *",
    "@annually": "0 0 1 1 *",
    "@monthly": "0 0 1 * *",
    "@weekly": "0 0 * * 0",
    "@daily": "0 0 * * *",
    "@midnight": "0 0 * * *",
    "@hourly": "0 * * * *",
}

_UNITS = {
    "ns": 1e-9, "us": 1e-6, "µs": 1e-6, "μs": 1e-6,
    "ms": 1e-3, "s": 1.0, "m": 60.0, "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_SEARCH_YEARS = 5


class CronError(ValueError):
    """Raised for a crontab expression that cannot be parsed."""


@dataclass(frozen=True)
class CronSchedule:
    """A parsed schedule: field value sets, or a fixed delay for @every."""

    minutes: frozenset[int] = frozenset()
    hours: frozenset[int] = frozenset()
    days: frozenset[int] = frozenset()
    months: frozenset[int] = frozenset()
    weekdays: frozenset[int] = frozenset()
    dom_star: bool = False
    dow_star: bool = False
    every: timedelta | None = None
    location: tzinfo | None = None

    def _day_matches(self, moment: datetime) -> bool:
        dom = moment.day in self.days
        dow = (moment.weekday() + 1) % 7 in self.weekdays
        if self.dom_star or self.dow_star:
            return dom and dow
        return dom or dow

    def next(self, after: datetime) -> datetime | None:
        """Return the first activation strictly after `after`, or None if none within five years."""
        if self.location is not None:
            if after.tzinfo is None:
                after = after.replace(tzinfo=self.location)
            else:
                after = after.astimezone(self.location)

        if self.every is not None:
            return after + self.every - timedelta(microseconds=after.microsecond)

        moment = after.replace(second=0, microsecond=0) + timedelta(minutes=1)
        year_limit = moment.year + _SEARCH_YEARS
        while moment.year <= year_limit:
            if moment.month not in self.months:
                if moment.month == 12:
                    moment = moment.replace(year=moment.year + 1, month=1, day=1, hour=0, minute=0)
                else:
                    moment = moment.replace(month=moment.month + 1, day=1, hour=0, minute=0)
                continue
            if not self._day_matches(moment):
                moment = moment.replace(hour=0, minute=0) + timedelta(days=1)
                continue
            if moment.hour not in self.hours:
                moment = moment.replace(minute=0) + timedelta(hours=1)
                continue
            if moment.minute not in self.minutes:
                moment += timedelta(minutes=1)
                continue
            return moment
        return None


def _parse_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise CronError(f"failed to parse int from {text}") from None
    if value < 0:
        raise CronError(f"negative number ({value}) not allowed: {text}")
    return value


def _parse_value(text: str, names: dict[str, int] | None) -> int:
    if names is not None and text.lower() in names:
        return names[text.lower()]
    return _parse_int(text)


def _get_range(expr: str, low: int, high: int, names: dict[str, int] | None) -> tuple[set[int], bool]:
    range_and_step = expr.split("/")
    low_and_high = range_and_step[0].split("-")
    single = len(low_and_high) == 1
    star = False

    if low_and_high[0] in ("*", "?"):
        start, end = low, high
        star = True
    else:
        start = _parse_value(low_and_high[0], names)
        if len(low_and_high) == 1:
            end = start
        elif len(low_and_high) == 2:
            end = _parse_value(low_and_high[1], names)
        else:
            raise CronError(f"too many hyphens: {expr}")

    if len(range_and_step) == 1:
        step = 1
    elif len(range_and_step) == 2:
        step = _parse_int(range_and_step[1])
        if single:
            end = high
        if step > 1:
            star = False
    else:
        raise CronError(f"too many slashes: {expr}")

    if start < low:
        raise CronError(f"beginning of range ({start}) below minimum ({low}): {expr}")
    if end > high:
        raise CronError(f"end of range ({end}) above maximum ({high}): {expr}")
    if start > end:
        raise CronError(f"beginning of range ({start}) beyond end of range ({end}): {expr}")
    if step == 0:
        raise CronError(f"step of range should be a positive number: {expr}")
    return set(range(start, end + 1, step)), star


def _get_field(field: str, low: int, high: int, names: dict[str, int] | None) -> tuple[frozenset[int], bool]:
    values: set[int] = set()
    star = False
    for part in field.split(","):
        part_values, part_star = _get_range(part, low, high, names)
        values |= part_values
        star = star or part_star
    return frozenset(values), star


def _parse_duration(text: str) -> timedelta:
    body = text
    sign = 1
    if body[:1] in "+-" and body:
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if body == "0":
        return timedelta(0)
    if not body:
        raise CronError(f"invalid duration {text!r}")
    seconds = 0.0
    pos = 0
    while pos < len(body):
        match = _DURATION_PART.match(body, pos)
        if match is None:
            raise CronError(f"invalid duration {text!r}")
        seconds += float(match.group(1)) * _UNITS[match.group(2)]
        pos = match.end()
    return timedelta(seconds=sign * seconds)


def _parse_descriptor(spec: str, location: tzinfo | None) -> CronSchedule:
    if spec in _DESCRIPTORS:
        return _parse_fields(_DESCRIPTORS[spec], location)
    prefix = "@every "
    if spec.startswith(prefix):
        duration_text = spec[len(prefix):]
        try:
            delay = _parse_duration(duration_text)
        except CronError as exc:
            raise CronError(f"failed to parse duration {spec}: {exc}") from None
        delay = timedelta(seconds=int(delay.total_seconds()))
        if delay < timedelta(seconds=1):
            delay = timedelta(seconds=1)
        return CronSchedule(every=delay, location=location)
    raise CronError(f"unrecognized descriptor: {spec}")


def _parse_fields(spec: str, location: tzinfo | None) -> CronSchedule:
    fields = spec.split()
    if len(fields) != len(_FIELDS):
        raise CronError(f"expected exactly 5 fields, found {len(fields)}: {fields}")
    parsed = [_get_field(field, low, high, names) for field, (low, high, names) in zip(fields, _FIELDS)]
    (minutes, _), (hours, _), (days, dom_star), (months, _), (weekdays, dow_star) = parsed
    return CronSchedule(
        minutes=minutes,
        hours=hours,
        days=days,
        months=months,
        weekdays=weekdays,
        dom_star=dom_star,
        dow_star=dow_star,
        location=location,
    )


def parse_standard(expression: str) -> CronSchedule:
    """Parse a five-field crontab expression, a descriptor such as @daily, or @every <duration>.

    A leading TZ=<zone> or CRON_TZ=<zone> sets the schedule's time zone.
    """
    spec = expression.strip()
    if not spec:
        raise CronError("empty spec string")

    location: tzinfo | None = None
    if spec.startswith(("TZ=", "CRON_TZ=")):
        head, _, rest = spec.partition(" ")
        zone = head.split("=", 1)[1]
        try:
            location = ZoneInfo(zone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise CronError(f"provided bad location {zone}: {exc}") from None
        spec = rest.strip()

    if spec.startswith("@"):
        return _parse_descriptor(spec, location)
    return _parse_fields(spec, location)