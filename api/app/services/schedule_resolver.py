"""Effective schedule resolution for a single date.

Layers, lowest to highest precedence:
  1. Base weekly schedule (weekday or weekend values)
  2. The matching season with the highest priority
  3. A matching special day (CLOSED, WEEKEND/HOLIDAY promotion, or CUSTOM hours)

Pure calculation module: no database, no FastAPI, no shared state. The only
external call is the sunset provider used for sunset-relative twilight.
"""

import logging
from datetime import date, time

from app.core.errors import ConfigurationError
from app.models.schedule import (
    BaseScheduleConfig,
    DayKind,
    EffectiveSchedule,
    Season,
    SpecialDay,
    SpecialDayType,
    TimePeriod,
)
from app.services.date_ranges import season_matches, special_day_matches
from app.services.schedule_rules import check_operating_hours, check_twilight_offset, validate_periods
from app.services.twilight import AstralSunsetProvider, SunsetProvider, resolve_twilight

logger = logging.getLogger(__name__)


def day_kind_for(day: date) -> DayKind:
    """Saturday and Sunday are weekend days (weekday() is 0=Mon)."""
    return DayKind.WEEKEND if day.weekday() >= 5 else DayKind.WEEKDAY


def find_special_day(special_days: list[SpecialDay] | tuple[SpecialDay, ...], day: date) -> SpecialDay | None:
    """Pick the special day that applies to day.

    A CLOSED match always wins; otherwise the first match in input order.
    """
    matched = [sd for sd in special_days if special_day_matches(sd, day)]
    if not matched:
        return None
    for special_day in matched:
        if special_day.type == SpecialDayType.CLOSED:
            return special_day
    if len(matched) > 1:
        logger.debug(
            "%d special days match %s, using '%s' (first in order)", len(matched), day, matched[0].name
        )
    return matched[0]


def find_season(seasons: list[Season] | tuple[Season, ...], day: date) -> Season | None:
    """Pick the highest-priority season covering day.

    Raises ConfigurationError if more than one season shares the top priority,
    since there is no deterministic winner.
    """
    matched = [s for s in seasons if season_matches(s, day)]
    if not matched:
        return None

    top = max(s.priority for s in matched)
    winners = [s for s in matched if s.priority == top]
    if len(winners) > 1:
        names = ", ".join(f"'{s.name}'" for s in winners)
        raise ConfigurationError(
            "season_ambiguity",
            f"Seasons {names} all cover {day.isoformat()} with priority {top}.",
        )
    return winners[0]


def _active_periods(periods: tuple[TimePeriod, ...] | list[TimePeriod], day_kind: DayKind) -> tuple[TimePeriod, ...]:
    """Validate, order by sort_order (then start) and keep those that apply to day_kind."""
    violations = validate_periods(periods)
    if violations:
        raise violations[0]
    ordered = sorted(periods, key=lambda p: (p.sort_order, p.start_time))
    return tuple(p for p in ordered if p.applies_to(day_kind))


def _pick(override, base):
    """None on an override means inherit."""
    return base if override is None else override


def _default_sunset_provider(config: BaseScheduleConfig) -> SunsetProvider | None:
    if not config.has_location:
        return None
    return AstralSunsetProvider(config.club_latitude, config.club_longitude, config.timezone)


def resolve_effective_schedule(
    config: BaseScheduleConfig,
    seasons: list[Season] | tuple[Season, ...],
    special_days: list[SpecialDay] | tuple[SpecialDay, ...],
    day: date,
    sunset_provider: SunsetProvider | None = None,
) -> EffectiveSchedule:
    """Combine base schedule, seasons and special days into the rules for day."""
    calendar_kind = day_kind_for(day)
    day_kind = calendar_kind

    special_day = find_special_day(special_days, day)

    if special_day is not None and special_day.type == SpecialDayType.CLOSED:
        logger.debug("Course closed on %s (%s)", day, special_day.name)
        return EffectiveSchedule(
            date=day,
            day_kind=day_kind,
            calendar_day_kind=calendar_kind,
            first_tee=config.first_tee_for(day_kind),
            last_tee=config.last_tee_for(day_kind),
            booking_mode=config.booking_mode_for(day_kind),
            twilight_mode=config.twilight_mode,
            twilight_time=config.twilight_fixed_default,
            booking_window_days=config.default_booking_window_days,
            active_special_day=special_day,
            is_closed=True,
            course_id=config.course_id,
        )

    if special_day is not None and special_day.type in (SpecialDayType.WEEKEND, SpecialDayType.HOLIDAY):
        day_kind = DayKind.WEEKEND

    # Base values for the (possibly promoted) day kind
    first_tee: time = config.first_tee_for(day_kind)
    last_tee: time = config.last_tee_for(day_kind)
    booking_mode = config.booking_mode_for(day_kind)
    booking_window_days = config.default_booking_window_days
    periods = config.time_periods
    season_twilight: time | None = None
    special_day_twilight: time | None = None
    season: Season | None = None
    context = f"{day_kind.value.title()} hours"

    if special_day is not None and special_day.type == SpecialDayType.CUSTOM:
        # CUSTOM replaces everything it sets; seasons are not consulted
        first_tee = _pick(special_day.custom_first_tee, first_tee)
        last_tee = _pick(special_day.custom_last_tee, last_tee)
        booking_mode = _pick(special_day.booking_mode, booking_mode)
        special_day_twilight = special_day.custom_twilight_time
        if special_day.custom_time_periods and special_day.time_periods:
            periods = special_day.time_periods
        context = f"Special day '{special_day.name}'"
    else:
        season = find_season(seasons, day)
        if season is not None:
            first_tee = _pick(season.override_first_tee, first_tee)
            last_tee = _pick(season.override_last_tee, last_tee)
            booking_mode = _pick(season.booking_mode_for(day_kind), booking_mode)
            booking_window_days = _pick(season.override_booking_window, booking_window_days)
            season_twilight = season.override_twilight_time
            if season.override_time_periods and season.time_periods:
                periods = season.time_periods
            context = f"Season '{season.name}'"

    v = check_operating_hours(first_tee, last_tee, context)
    if v:
        raise v
    v = check_twilight_offset(config)
    if v:
        raise v

    if sunset_provider is None:
        sunset_provider = _default_sunset_provider(config)

    twilight = resolve_twilight(
        day,
        config.twilight_mode,
        config.twilight_fixed_default,
        config.twilight_minutes_before_sunset,
        season_override=season_twilight,
        special_day_override=special_day_twilight,
        sunset_provider=sunset_provider,
    )
    logger.debug(
        "Resolved course %s on %s: %s %s-%s mode=%s twilight=%s (%s) season=%s special_day=%s",
        config.course_id,
        day,
        day_kind,
        first_tee,
        last_tee,
        booking_mode,
        twilight.time,
        twilight.source,
        season.name if season else None,
        special_day.name if special_day else None,
    )

    return EffectiveSchedule(
        date=day,
        day_kind=day_kind,
        calendar_day_kind=calendar_kind,
        first_tee=first_tee,
        last_tee=last_tee,
        booking_mode=booking_mode,
        twilight_mode=config.twilight_mode,
        twilight_time=twilight.time,
        twilight_is_fallback=twilight.is_fallback,
        booking_window_days=booking_window_days,
        time_periods=_active_periods(periods, day_kind),
        active_season=season,
        active_special_day=special_day,
        is_closed=False,
        course_id=config.course_id,
    )
