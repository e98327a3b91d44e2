"""Golf schedule configuration and derived tee-sheet value types.

BaseScheduleConfig = the weekly operating rules for one course.
Season = a month/day range with its own priority and optional overrides.
SpecialDay = a calendar-specific override (holiday, closure, custom hours).
EffectiveSchedule / TeeTimeSlot / PreviewResult = derived per date, never stored.

Everything here is an immutable value. Clock times are datetime.time with
minute precision; None on an override field means "inherit".
"""

import enum
from dataclasses import dataclass
from datetime import date, time

from app.core.errors import ConfigurationError


class BookingMode(enum.StrEnum):
    """How a tee time is started."""

    EIGHTEEN = "EIGHTEEN"  # single start at hole 1
    CROSS = "CROSS"  # dual start at holes 1 and 10


class TwilightMode(enum.StrEnum):
    FIXED = "FIXED"
    SUNSET = "SUNSET"


class ApplicableDays(enum.StrEnum):
    ALL = "ALL"
    WEEKDAY = "WEEKDAY"
    WEEKEND = "WEEKEND"


class DayKind(enum.StrEnum):
    WEEKDAY = "WEEKDAY"
    WEEKEND = "WEEKEND"


class SpecialDayType(enum.StrEnum):
    WEEKEND = "WEEKEND"  # adopt weekend hours
    HOLIDAY = "HOLIDAY"  # weekend hours, flagged for pricing
    CLOSED = "CLOSED"  # no tee times at all
    CUSTOM = "CUSTOM"  # explicit override hours


def parse_clock(value: str | time) -> time:
    """Parse an "HH:MM" string into a time. Raises ConfigurationError on bad input."""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    try:
        h, m = map(int, value.split(":"))
        return time(h, m)
    except (AttributeError, TypeError, ValueError):
        raise ConfigurationError("invalid_time", f"Invalid time {value!r}. Expected HH:MM.") from None


def format_clock(t: time) -> str:
    return t.strftime("%H:%M")


def to_minutes(t: time) -> int:
    """Minutes since midnight."""
    return t.hour * 60 + t.minute


def from_minutes(minutes: int) -> time:
    return time(minutes // 60, minutes % 60)


@dataclass(frozen=True)
class TimePeriod:
    """A band of the day with its own tee interval and prime-time flag.

    end_time=None means the period runs until the next period's start,
    or to the last tee if it is the final period.
    """

    name: str
    start_time: time
    end_time: time | None = None
    interval_minutes: int = 10
    is_prime_time: bool = False
    applicable_days: ApplicableDays = ApplicableDays.ALL
    sort_order: int = 0
    id: str | None = None

    def applies_to(self, day_kind: DayKind) -> bool:
        return self.applicable_days == ApplicableDays.ALL or self.applicable_days == day_kind


@dataclass(frozen=True)
class BaseScheduleConfig:
    """Weekly operating rules for a course. Replaced as a whole when edited."""

    weekday_first_tee: time
    weekday_last_tee: time
    weekend_first_tee: time
    weekend_last_tee: time
    weekday_booking_mode: BookingMode = BookingMode.EIGHTEEN
    weekend_booking_mode: BookingMode = BookingMode.EIGHTEEN
    twilight_mode: TwilightMode = TwilightMode.FIXED
    twilight_fixed_default: time = time(16, 0)
    twilight_minutes_before_sunset: int = 90
    default_booking_window_days: int = 7
    time_periods: tuple[TimePeriod, ...] = ()
    course_id: str | None = None

    # Club location for sunset-relative twilight
    club_latitude: float | None = None
    club_longitude: float | None = None
    timezone: str | None = None

    def first_tee_for(self, day_kind: DayKind) -> time:
        return self.weekend_first_tee if day_kind == DayKind.WEEKEND else self.weekday_first_tee

    def last_tee_for(self, day_kind: DayKind) -> time:
        return self.weekend_last_tee if day_kind == DayKind.WEEKEND else self.weekday_last_tee

    def booking_mode_for(self, day_kind: DayKind) -> BookingMode:
        return self.weekend_booking_mode if day_kind == DayKind.WEEKEND else self.weekday_booking_mode

    @property
    def has_location(self) -> bool:
        return self.club_latitude is not None and self.club_longitude is not None


@dataclass(frozen=True)
class Season:
    """A month/day range (may wrap the year end) ranked by priority, higher wins."""

    name: str
    start_month: int
    start_day: int
    end_month: int
    end_day: int
    is_recurring: bool = True
    priority: int = 0
    override_first_tee: time | None = None
    override_last_tee: time | None = None
    override_twilight_time: time | None = None
    override_booking_window: int | None = None
    weekday_booking_mode: BookingMode | None = None
    weekend_booking_mode: BookingMode | None = None
    override_time_periods: bool = False
    time_periods: tuple[TimePeriod, ...] = ()
    id: str | None = None

    def booking_mode_for(self, day_kind: DayKind) -> BookingMode | None:
        return self.weekend_booking_mode if day_kind == DayKind.WEEKEND else self.weekday_booking_mode


@dataclass(frozen=True)
class SpecialDay:
    """A calendar-specific override. Always outranks seasons and the base schedule.

    start_date/end_date are "MM-DD" when is_recurring, otherwise "YYYY-MM-DD".
    The custom_* fields and booking_mode only apply to CUSTOM days.
    """

    name: str
    start_date: str
    end_date: str
    type: SpecialDayType
    is_recurring: bool = True
    custom_first_tee: time | None = None
    custom_last_tee: time | None = None
    custom_twilight_time: time | None = None
    booking_mode: BookingMode | None = None
    custom_time_periods: bool = False
    time_periods: tuple[TimePeriod, ...] = ()
    notes: str | None = None
    id: str | None = None


@dataclass(frozen=True)
class EffectiveSchedule:
    """Operating rules for one concrete date after all overrides are applied."""

    date: date
    day_kind: DayKind
    calendar_day_kind: DayKind
    first_tee: time
    last_tee: time
    booking_mode: BookingMode
    twilight_mode: TwilightMode
    twilight_time: time
    booking_window_days: int
    time_periods: tuple[TimePeriod, ...] = ()
    active_season: Season | None = None
    active_special_day: SpecialDay | None = None
    is_closed: bool = False
    twilight_is_fallback: bool = False
    course_id: str | None = None

    @property
    def is_cross(self) -> bool:
        return self.booking_mode == BookingMode.CROSS

    @property
    def starting_holes(self) -> tuple[int, ...]:
        return (1, 10) if self.is_cross else (1,)


@dataclass(frozen=True)
class TeeTimeSlot:
    time: time
    period_name: str
    interval_minutes: int
    is_prime_time: bool = False
    is_twilight: bool = False


@dataclass(frozen=True)
class PreviewSummary:
    total_slots: int
    max_players: int
    prime_time_slots: int
    prime_time_percentage: int


@dataclass(frozen=True)
class PreviewResult:
    schedule: EffectiveSchedule
    slots: tuple[TeeTimeSlot, ...]
    summary: PreviewSummary

    @property
    def date(self) -> date:
        return self.schedule.date

    @property
    def is_closed(self) -> bool:
        return self.schedule.is_closed
