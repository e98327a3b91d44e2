"""Tee-time slot generation from an effective schedule.

Pure calculation module: no database, no async, no FastAPI dependencies.

Each minute between first tee and last tee (inclusive) is owned by exactly one
time period. Periods are laid down in sort order, so a later period wins any
minutes it overlaps with an earlier one. Minutes no period covers belong to a
10-minute "Standard" period. Every run of minutes with the same owner is then
walked from its first minute in steps of the owner's interval.
"""

from app.models.schedule import (
    EffectiveSchedule,
    TeeTimeSlot,
    TimePeriod,
    from_minutes,
    to_minutes,
)
from app.services.schedule_rules import check_interval, check_open_ends, check_operating_hours

STANDARD_PERIOD = TimePeriod(name="Standard", start_time=from_minutes(0), interval_minutes=10)


def _period_spans(periods: tuple[TimePeriod, ...], last_tee_min: int) -> list[tuple[int, int, TimePeriod]]:
    """(start, end exclusive, period) per period, resolving open end times.

    An open end runs to the next period's start, or through the last tee for
    the final period.
    """
    spans = []
    for i, period in enumerate(periods):
        start = to_minutes(period.start_time)
        if period.end_time is not None:
            end = to_minutes(period.end_time)
        elif i + 1 < len(periods):
            end = to_minutes(periods[i + 1].start_time)
        else:
            end = last_tee_min + 1
        spans.append((start, end, period))
    return spans


def _owner_runs(schedule: EffectiveSchedule) -> list[tuple[int, int, TimePeriod]]:
    """Maximal (first minute, last minute, period) runs between first and last tee."""
    first = to_minutes(schedule.first_tee)
    last = to_minutes(schedule.last_tee)

    # owners[i] is the index of the period owning minute first + i, None = uncovered
    owners: list[int | None] = [None] * (last - first + 1)
    spans = _period_spans(schedule.time_periods, last)
    for idx, (start, end, _) in enumerate(spans):
        for minute in range(max(start, first), min(end, last + 1)):
            owners[minute - first] = idx

    runs = []
    run_start = 0
    for i in range(1, len(owners) + 1):
        if i == len(owners) or owners[i] != owners[run_start]:
            owner = owners[run_start]
            period = STANDARD_PERIOD if owner is None else spans[owner][2]
            runs.append((first + run_start, first + i - 1, period))
            run_start = i
    return runs


def generate_slots(schedule: EffectiveSchedule) -> list[TeeTimeSlot]:
    """Generate every tee time for the schedule's date, in strictly increasing order.

    A closed day has no slots. CROSS mode doesn't add slots: each clock time
    already stands for both starting holes.
    """
    if schedule.is_closed:
        return []

    # Same checks the resolver applies, for hand-built schedules
    v = check_operating_hours(schedule.first_tee, schedule.last_tee, "Effective schedule")
    if v:
        raise v
    for period in schedule.time_periods:
        v = check_interval(period)
        if v:
            raise v
    v = check_open_ends(schedule.time_periods)
    if v:
        raise v

    slots: list[TeeTimeSlot] = []
    for run_first, run_last, period in _owner_runs(schedule):
        minute = run_first
        while minute <= run_last:
            slot_time = from_minutes(minute)
            slots.append(
                TeeTimeSlot(
                    time=slot_time,
                    period_name=period.name,
                    interval_minutes=period.interval_minutes,
                    is_prime_time=period.is_prime_time,
                    is_twilight=slot_time >= schedule.twilight_time,
                )
            )
            minute += period.interval_minutes

    return slots
