"""Pydantic schemas for API serialisation.

Request models only check types (HH:MM times, enum names); range and
consistency checks are schedule rules so they can be reported together by
the validate endpoint.
"""

from datetime import date, time
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer

from app.models.schedule import (
    ApplicableDays,
    BaseScheduleConfig,
    BookingMode,
    DayKind,
    Season,
    SpecialDay,
    SpecialDayType,
    TimePeriod,
    TwilightMode,
    parse_clock,
)

# "HH:MM" on the wire
ClockTime = Annotated[time, PlainSerializer(lambda t: t.strftime("%H:%M"), return_type=str)]


def _clock(t: time | None) -> time | None:
    return None if t is None else parse_clock(t)


# --- Configuration (in) ---


class TimePeriodIn(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str | None = None
    name: str
    start_time: ClockTime
    end_time: ClockTime | None = None
    interval_minutes: int
    is_prime_time: bool = False
    applicable_days: ApplicableDays = ApplicableDays.ALL
    sort_order: int | None = None  # defaults to list position

    def to_domain(self, position: int) -> TimePeriod:
        return TimePeriod(
            id=self.id,
            name=self.name,
            start_time=parse_clock(self.start_time),
            end_time=_clock(self.end_time),
            interval_minutes=self.interval_minutes,
            is_prime_time=self.is_prime_time,
            applicable_days=self.applicable_days,
            sort_order=position if self.sort_order is None else self.sort_order,
        )


def _periods(periods: list[TimePeriodIn]) -> tuple[TimePeriod, ...]:
    return tuple(p.to_domain(i) for i, p in enumerate(periods))


class ScheduleConfigIn(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    course_id: str | None = None
    weekday_first_tee: ClockTime
    weekday_last_tee: ClockTime
    weekday_booking_mode: BookingMode = BookingMode.EIGHTEEN
    weekend_first_tee: ClockTime
    weekend_last_tee: ClockTime
    weekend_booking_mode: BookingMode = BookingMode.EIGHTEEN
    twilight_mode: TwilightMode = TwilightMode.FIXED
    twilight_fixed_default: ClockTime = time(16, 0)
    twilight_minutes_before_sunset: int = 90
    default_booking_window_days: int = 7
    club_latitude: float | None = None
    club_longitude: float | None = None
    timezone: str | None = None
    time_periods: list[TimePeriodIn] = []

    def to_domain(self) -> BaseScheduleConfig:
        return BaseScheduleConfig(
            course_id=self.course_id,
            weekday_first_tee=parse_clock(self.weekday_first_tee),
            weekday_last_tee=parse_clock(self.weekday_last_tee),
            weekday_booking_mode=self.weekday_booking_mode,
            weekend_first_tee=parse_clock(self.weekend_first_tee),
            weekend_last_tee=parse_clock(self.weekend_last_tee),
            weekend_booking_mode=self.weekend_booking_mode,
            twilight_mode=self.twilight_mode,
            twilight_fixed_default=parse_clock(self.twilight_fixed_default),
            twilight_minutes_before_sunset=self.twilight_minutes_before_sunset,
            default_booking_window_days=self.default_booking_window_days,
            club_latitude=self.club_latitude,
            club_longitude=self.club_longitude,
            timezone=self.timezone,
            time_periods=_periods(self.time_periods),
        )


class SeasonIn(BaseModel):
    id: str | None = None
    name: str
    start_month: int
    start_day: int
    end_month: int
    end_day: int
    is_recurring: bool = True
    priority: int = 0
    override_first_tee: ClockTime | None = None
    override_last_tee: ClockTime | None = None
    override_twilight_time: ClockTime | None = None
    override_booking_window: int | None = None
    weekday_booking_mode: BookingMode | None = None
    weekend_booking_mode: BookingMode | None = None
    override_time_periods: bool = False
    time_periods: list[TimePeriodIn] = []

    def to_domain(self) -> Season:
        return Season(
            id=self.id,
            name=self.name,
            start_month=self.start_month,
            start_day=self.start_day,
            end_month=self.end_month,
            end_day=self.end_day,
            is_recurring=self.is_recurring,
            priority=self.priority,
            override_first_tee=_clock(self.override_first_tee),
            override_last_tee=_clock(self.override_last_tee),
            override_twilight_time=_clock(self.override_twilight_time),
            override_booking_window=self.override_booking_window,
            weekday_booking_mode=self.weekday_booking_mode,
            weekend_booking_mode=self.weekend_booking_mode,
            override_time_periods=self.override_time_periods,
            time_periods=_periods(self.time_periods),
        )


class SpecialDayIn(BaseModel):
    id: str | None = None
    name: str
    start_date: str  # "MM-DD" when recurring, else "YYYY-MM-DD"
    end_date: str
    type: SpecialDayType
    is_recurring: bool = True
    custom_first_tee: ClockTime | None = None
    custom_last_tee: ClockTime | None = None
    custom_twilight_time: ClockTime | None = None
    booking_mode: BookingMode | None = None
    custom_time_periods: bool = False
    time_periods: list[TimePeriodIn] = []
    notes: str | None = None

    def to_domain(self) -> SpecialDay:
        return SpecialDay(
            id=self.id,
            name=self.name,
            start_date=self.start_date,
            end_date=self.end_date,
            type=self.type,
            is_recurring=self.is_recurring,
            custom_first_tee=_clock(self.custom_first_tee),
            custom_last_tee=_clock(self.custom_last_tee),
            custom_twilight_time=_clock(self.custom_twilight_time),
            booking_mode=self.booking_mode,
            custom_time_periods=self.custom_time_periods,
            time_periods=_periods(self.time_periods),
            notes=self.notes,
        )


class ScheduleRequest(BaseModel):
    """Everything the engine needs for one course; persisted elsewhere."""

    config: ScheduleConfigIn
    seasons: list[SeasonIn] = []
    special_days: list[SpecialDayIn] = []

    def to_domain(self) -> tuple[BaseScheduleConfig, list[Season], list[SpecialDay]]:
        return (
            self.config.to_domain(),
            [s.to_domain() for s in self.seasons],
            [d.to_domain() for d in self.special_days],
        )


# --- Resolved schedule (out) ---


class TimePeriodOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str | None
    name: str
    start_time: ClockTime
    end_time: ClockTime | None
    interval_minutes: int
    is_prime_time: bool
    applicable_days: ApplicableDays
    sort_order: int


class ScheduleConfigOut(ScheduleConfigIn):
    time_periods: list[TimePeriodOut] = []


class ActiveSeasonOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str | None
    name: str
    priority: int


class ActiveSpecialDayOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str | None
    name: str
    type: SpecialDayType


class EffectiveScheduleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    course_id: str | None
    date: date
    day_kind: DayKind
    calendar_day_kind: DayKind
    first_tee: ClockTime
    last_tee: ClockTime
    booking_mode: BookingMode
    starting_holes: list[int]
    twilight_mode: TwilightMode
    twilight_time: ClockTime
    twilight_is_fallback: bool
    booking_window_days: int
    time_periods: list[TimePeriodOut]
    active_season: ActiveSeasonOut | None
    active_special_day: ActiveSpecialDayOut | None
    is_closed: bool


class TeeTimeSlotOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    time: ClockTime
    period_name: str
    interval_minutes: int
    is_prime_time: bool
    is_twilight: bool


class SlotsOut(BaseModel):
    schedule: EffectiveScheduleOut
    slots: list[TeeTimeSlotOut]


class PreviewSummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_slots: int
    max_players: int
    prime_time_slots: int
    prime_time_percentage: int


class PreviewOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    schedule: EffectiveScheduleOut
    slots: list[TeeTimeSlotOut]
    summary: PreviewSummaryOut


# --- Validation ---


class ViolationOut(BaseModel):
    rule: str
    message: str


class ValidationOut(BaseModel):
    valid: bool
    violations: list[ViolationOut]
