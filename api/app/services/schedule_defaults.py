"""Default schedule for a course that has no configuration yet."""

from datetime import time

from app.models.schedule import (
    ApplicableDays,
    BaseScheduleConfig,
    BookingMode,
    TimePeriod,
    TwilightMode,
)

DEFAULT_TIME_PERIODS: tuple[TimePeriod, ...] = (
    TimePeriod("Early Bird", time(6, 0), time(7, 0), 12, False, ApplicableDays.ALL, 0),
    TimePeriod("Prime AM", time(7, 0), time(11, 0), 8, True, ApplicableDays.ALL, 1),
    TimePeriod("Midday", time(11, 0), time(14, 0), 10, False, ApplicableDays.ALL, 2),
    TimePeriod("Prime PM", time(14, 0), time(16, 0), 8, True, ApplicableDays.ALL, 3),
    TimePeriod("Twilight", time(16, 0), None, 12, False, ApplicableDays.ALL, 4),
)


def default_schedule_config(course_id: str | None = None) -> BaseScheduleConfig:
    return BaseScheduleConfig(
        course_id=course_id,
        weekday_first_tee=time(6, 0),
        weekday_last_tee=time(17, 0),
        weekday_booking_mode=BookingMode.EIGHTEEN,
        weekend_first_tee=time(5, 30),
        weekend_last_tee=time(17, 30),
        weekend_booking_mode=BookingMode.EIGHTEEN,
        twilight_mode=TwilightMode.FIXED,
        twilight_fixed_default=time(16, 0),
        twilight_minutes_before_sunset=90,
        default_booking_window_days=7,
        time_periods=DEFAULT_TIME_PERIODS,
    )
