"""Schedule configuration rules.

All configuration validation lives here, separate from resolution and slot
generation. Each rule returns a ConfigurationError or None if the rule passes.
validate_schedule_config() runs every rule and collects the violations, which
is what the management screens call before saving. The resolver calls the
period and operating-hours rules itself on whatever it ends up using.
"""

from datetime import date, time, timedelta

from app.core.errors import ConfigurationError
from app.models.schedule import (
    ApplicableDays,
    BaseScheduleConfig,
    DayKind,
    Season,
    SpecialDay,
    SpecialDayType,
    TimePeriod,
    format_clock,
    to_minutes,
)
from app.services.date_ranges import parse_special_day_date, season_matches

MIN_INTERVAL_MINUTES = 5
MAX_INTERVAL_MINUTES = 20
MAX_MINUTES_BEFORE_SUNSET = 180
MIN_BOOKING_WINDOW_DAYS = 1
MAX_BOOKING_WINDOW_DAYS = 365

# Leap year so Feb 29 seasons are representable
_REFERENCE_YEAR = 2000
_END_OF_DAY = 24 * 60


def _inherit(override: time | None, base: time) -> time:
    return base if override is None else override


def check_operating_hours(first_tee: time, last_tee: time, context: str) -> ConfigurationError | None:
    """First tee must be strictly before last tee."""
    if first_tee >= last_tee:
        return ConfigurationError(
            "operating_hours",
            f"{context}: first tee {format_clock(first_tee)} must be before last tee {format_clock(last_tee)}.",
        )
    return None


def check_interval(period: TimePeriod) -> ConfigurationError | None:
    if not MIN_INTERVAL_MINUTES <= period.interval_minutes <= MAX_INTERVAL_MINUTES:
        return ConfigurationError(
            "interval",
            f"Period '{period.name}': interval {period.interval_minutes} minutes is outside "
            f"{MIN_INTERVAL_MINUTES}-{MAX_INTERVAL_MINUTES} minutes.",
        )
    return None


def check_period_bounds(period: TimePeriod) -> ConfigurationError | None:
    if period.end_time is not None and period.end_time <= period.start_time:
        return ConfigurationError(
            "period_bounds",
            f"Period '{period.name}': end {format_clock(period.end_time)} must be after "
            f"start {format_clock(period.start_time)}.",
        )
    return None


def _days_overlap(a: ApplicableDays, b: ApplicableDays) -> bool:
    return a == ApplicableDays.ALL or b == ApplicableDays.ALL or a == b


def _span(period: TimePeriod) -> tuple[int, int]:
    """Minute span of a period; an open end is treated as running to midnight."""
    end = to_minutes(period.end_time) if period.end_time is not None else _END_OF_DAY
    return to_minutes(period.start_time), end


def check_period_ambiguity(periods: tuple[TimePeriod, ...] | list[TimePeriod]) -> ConfigurationError | None:
    """Overlapping periods that share a sort order have no defined winner.

    Overlaps with distinct sort orders are allowed (the later one wins).
    """
    for i, a in enumerate(periods):
        for b in periods[i + 1 :]:
            if a.sort_order != b.sort_order or not _days_overlap(a.applicable_days, b.applicable_days):
                continue
            a_start, a_end = _span(a)
            b_start, b_end = _span(b)
            if a_start < b_end and b_start < a_end:
                return ConfigurationError(
                    "period_ambiguity",
                    f"Periods '{a.name}' and '{b.name}' overlap and share sort order {a.sort_order}.",
                )
    return None


def check_open_ends(ordered: tuple[TimePeriod, ...] | list[TimePeriod]) -> ConfigurationError | None:
    """An open-ended period runs to the next period's start, which must be after its own."""
    for period, following in zip(ordered, ordered[1:]):
        if period.end_time is None and following.start_time <= period.start_time:
            return ConfigurationError(
                "period_order",
                f"Period '{period.name}' has no end time but the next period '{following.name}' "
                f"starts at {format_clock(following.start_time)}, not after {format_clock(period.start_time)}. "
                f"Set an end time or fix the sort order.",
            )
    return None


def check_period_order(periods: tuple[TimePeriod, ...] | list[TimePeriod]) -> ConfigurationError | None:
    """check_open_ends on the sorted periods active for each day kind."""
    ordered = sorted(periods, key=lambda p: (p.sort_order, p.start_time))
    for day_kind in DayKind:
        v = check_open_ends([p for p in ordered if p.applies_to(day_kind)])
        if v:
            return v
    return None


def validate_periods(periods: tuple[TimePeriod, ...] | list[TimePeriod]) -> list[ConfigurationError]:
    """Run the per-period rules plus the ambiguity and ordering rules over one period list."""
    violations: list[ConfigurationError] = []
    for period in periods:
        for rule in (check_interval, check_period_bounds):
            v = rule(period)
            if v:
                violations.append(v)

    for rule in (check_period_ambiguity, check_period_order):
        v = rule(periods)
        if v:
            violations.append(v)
    return violations


def check_season_dates(season: Season) -> ConfigurationError | None:
    """Season bounds must be real month/day pairs (Feb 29 allowed)."""
    for month, day in ((season.start_month, season.start_day), (season.end_month, season.end_day)):
        try:
            date(_REFERENCE_YEAR, month, day)
        except ValueError:
            return ConfigurationError(
                "season_dates",
                f"Season '{season.name}': {month:02d}-{day:02d} is not a valid month/day.",
            )
    return None


def _season_days(season: Season) -> set[date]:
    start = date(_REFERENCE_YEAR, 1, 1)
    days = (start + timedelta(days=n) for n in range(366))
    return {d for d in days if season_matches(season, d)}


def check_season_priority_conflict(a: Season, b: Season) -> ConfigurationError | None:
    """Two seasons with the same priority must not share any day."""
    if a.priority != b.priority:
        return None
    shared = _season_days(a) & _season_days(b)
    if shared:
        first = min(shared)
        return ConfigurationError(
            "season_priority_conflict",
            f"Seasons '{a.name}' and '{b.name}' both have priority {a.priority} "
            f"and both cover {first.strftime('%b %d')}. Give one a higher priority.",
        )
    return None


def check_special_day_dates(special_day: SpecialDay) -> ConfigurationError | None:
    """Dates must parse for the recurring flag; fixed ranges must not be inverted."""
    try:
        start = parse_special_day_date(special_day.start_date, special_day.is_recurring)
        end = parse_special_day_date(special_day.end_date, special_day.is_recurring)
    except ConfigurationError as e:
        return ConfigurationError(e.rule, f"Special day '{special_day.name}': {e.message}")

    if not special_day.is_recurring and start > end:
        return ConfigurationError(
            "special_day_range",
            f"Special day '{special_day.name}': start {special_day.start_date} is after end {special_day.end_date}.",
        )
    return None


def check_twilight_offset(config: BaseScheduleConfig) -> ConfigurationError | None:
    if not 0 <= config.twilight_minutes_before_sunset <= MAX_MINUTES_BEFORE_SUNSET:
        return ConfigurationError(
            "twilight_offset",
            f"Minutes before sunset must be 0-{MAX_MINUTES_BEFORE_SUNSET}, "
            f"got {config.twilight_minutes_before_sunset}.",
        )
    return None


def check_booking_window(days: int | None, context: str) -> ConfigurationError | None:
    if days is not None and not MIN_BOOKING_WINDOW_DAYS <= days <= MAX_BOOKING_WINDOW_DAYS:
        return ConfigurationError(
            "booking_window",
            f"{context}: booking window must be {MIN_BOOKING_WINDOW_DAYS}-{MAX_BOOKING_WINDOW_DAYS} days, got {days}.",
        )
    return None


def validate_schedule_config(
    config: BaseScheduleConfig,
    seasons: list[Season] | tuple[Season, ...] = (),
    special_days: list[SpecialDay] | tuple[SpecialDay, ...] = (),
) -> list[ConfigurationError]:
    """Run all configuration rules and return a list of violations (empty = valid)."""
    violations: list[ConfigurationError] = []

    def add(v: ConfigurationError | None) -> None:
        if v:
            violations.append(v)

    # 1. Base operating hours and periods
    add(check_operating_hours(config.weekday_first_tee, config.weekday_last_tee, "Weekday hours"))
    add(check_operating_hours(config.weekend_first_tee, config.weekend_last_tee, "Weekend hours"))
    add(check_twilight_offset(config))
    add(check_booking_window(config.default_booking_window_days, "Base schedule"))
    violations.extend(validate_periods(config.time_periods))

    # 2. Seasons
    for season in seasons:
        add(check_season_dates(season))
        add(check_booking_window(season.override_booking_window, f"Season '{season.name}'"))
        for label, first, last in (
            ("weekday", config.weekday_first_tee, config.weekday_last_tee),
            ("weekend", config.weekend_first_tee, config.weekend_last_tee),
        ):
            add(
                check_operating_hours(
                    _inherit(season.override_first_tee, first),
                    _inherit(season.override_last_tee, last),
                    f"Season '{season.name}' ({label})",
                )
            )
        violations.extend(validate_periods(season.time_periods))

    # 3. Equal-priority seasons sharing a day (only once dates are known good)
    dated = [s for s in seasons if check_season_dates(s) is None]
    for i, a in enumerate(dated):
        for b in dated[i + 1 :]:
            add(check_season_priority_conflict(a, b))

    # 4. Special days
    for special_day in special_days:
        add(check_special_day_dates(special_day))
        if special_day.type == SpecialDayType.CUSTOM:
            for label, first, last in (
                ("weekday", config.weekday_first_tee, config.weekday_last_tee),
                ("weekend", config.weekend_first_tee, config.weekend_last_tee),
            ):
                add(
                    check_operating_hours(
                        _inherit(special_day.custom_first_tee, first),
                        _inherit(special_day.custom_last_tee, last),
                        f"Special day '{special_day.name}' ({label})",
                    )
                )
            violations.extend(validate_periods(special_day.time_periods))

    return violations


def ensure_valid(
    config: BaseScheduleConfig,
    seasons: list[Season] | tuple[Season, ...] = (),
    special_days: list[SpecialDay] | tuple[SpecialDay, ...] = (),
) -> None:
    """Raise the first violation, if any."""
    violations = validate_schedule_config(config, seasons, special_days)
    if violations:
        raise violations[0]
