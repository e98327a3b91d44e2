"""Schedule value types, re-exported for convenience."""

from app.models.schedule import (
    ApplicableDays,
    BaseScheduleConfig,
    BookingMode,
    DayKind,
    EffectiveSchedule,
    PreviewResult,
    PreviewSummary,
    Season,
    SpecialDay,
    SpecialDayType,
    TeeTimeSlot,
    TimePeriod,
    TwilightMode,
)

__all__ = [
    "ApplicableDays",
    "BaseScheduleConfig",
    "BookingMode",
    "DayKind",
    "EffectiveSchedule",
    "PreviewResult",
    "PreviewSummary",
    "Season",
    "SpecialDay",
    "SpecialDayType",
    "TeeTimeSlot",
    "TimePeriod",
    "TwilightMode",
]
