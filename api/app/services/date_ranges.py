"""Calendar range matching for seasons and special days.

Pure calculation module. Recurring ranges are compared on (month, day) only
and may wrap across the year end (e.g. Nov 1 - Feb 28). Fixed ranges compare
full dates and never wrap.
"""

from datetime import date

from app.core.errors import ConfigurationError
from app.models.schedule import Season, SpecialDay

MonthDay = tuple[int, int]


def _ordinal(month: int, day: int) -> int:
    """Sortable month/day key: Mar 15 -> 315."""
    return month * 100 + day


def matches(day: date, start: MonthDay, end: MonthDay, is_recurring: bool = True) -> bool:
    """Return True if day's (month, day) falls inside [start, end] inclusive.

    start > end is a range that wraps the year end. Feb 29 is matched
    literally, so a range ending Feb 29 has no end day in non-leap years.
    is_recurring is part of the contract but month/day ranges carry no year,
    so they match every year either way.
    """
    start_val = _ordinal(*start)
    end_val = _ordinal(*end)
    day_val = _ordinal(day.month, day.day)

    if start_val <= end_val:
        return start_val <= day_val <= end_val
    # Wraps the year boundary
    return day_val >= start_val or day_val <= end_val


def matches_fixed(day: date, start_date: date, end_date: date) -> bool:
    """Inclusive full-date match. An inverted range matches nothing."""
    return start_date <= day <= end_date


def season_matches(season: Season, day: date) -> bool:
    return matches(
        day,
        (season.start_month, season.start_day),
        (season.end_month, season.end_day),
        season.is_recurring,
    )


def parse_special_day_date(value: str, is_recurring: bool) -> MonthDay | date:
    """Parse a special day bound: "MM-DD" when recurring, "YYYY-MM-DD" otherwise.

    Returns a (month, day) tuple for recurring days and a date for fixed ones.
    """
    parts = value.split("-") if isinstance(value, str) else []
    try:
        if is_recurring and len(parts) == 2:
            month, day_ = int(parts[0]), int(parts[1])
            # 2000 is a leap year, so Feb 29 is accepted
            date(2000, month, day_)
            return month, day_
        if not is_recurring and len(parts) == 3:
            return date.fromisoformat(value)
    except ValueError:
        pass

    expected = "MM-DD" if is_recurring else "YYYY-MM-DD"
    raise ConfigurationError(
        "invalid_special_day_date",
        f"Invalid special day date {value!r}. Expected {expected}.",
    )


def special_day_matches(special_day: SpecialDay, day: date) -> bool:
    start = parse_special_day_date(special_day.start_date, special_day.is_recurring)
    end = parse_special_day_date(special_day.end_date, special_day.is_recurring)
    if special_day.is_recurring:
        return matches(day, start, end, True)
    return matches_fixed(day, start, end)
