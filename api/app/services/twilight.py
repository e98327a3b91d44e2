"""Twilight start time resolution.

Pure calculation apart from the injected sunset provider. The default provider
uses the astral library to compute local sunset for the club's location.
A provider failure never propagates: the fixed default is used instead.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from astral import LocationInfo
from astral.sun import sunset

from app.core.config import settings
from app.models.schedule import TwilightMode

logger = logging.getLogger(__name__)

# Any callable returning the local sunset clock time for a date (or None if unknown)
SunsetProvider = Callable[[date], time | None]

SOURCE_SPECIAL_DAY = "special_day"
SOURCE_SEASON = "season"
SOURCE_FIXED = "fixed"
SOURCE_SUNSET = "sunset"
SOURCE_FALLBACK = "fallback"


@dataclass(frozen=True)
class TwilightResult:
    time: time
    is_fallback: bool = False
    source: str = SOURCE_FIXED


class AstralSunsetProvider:
    """Sunset lookup for a fixed club location via astral."""

    def __init__(self, latitude: float, longitude: float, timezone: str | None = None, name: str = "Club"):
        self.timezone = timezone or settings.default_timezone
        self.location = LocationInfo(name, "", self.timezone, latitude=latitude, longitude=longitude)

    def __call__(self, day: date) -> time:
        # astral raises ValueError when the sun never sets (polar summer/winter)
        sun_set = sunset(self.location.observer, date=day, tzinfo=self.location.tzinfo)
        return sun_set.replace(second=0, microsecond=0).time()

    def __repr__(self) -> str:
        return f"<AstralSunsetProvider {self.location.latitude},{self.location.longitude} {self.timezone}>"


def _sunset_twilight(day: date, minutes_before_sunset: int, provider: SunsetProvider | None) -> time | None:
    """Sunset minus the offset, or None if the provider can't give an answer."""
    if provider is None:
        logger.warning("No sunset provider for %s, using fixed twilight", day)
        return None

    try:
        sun_set = provider(day)
    except Exception:
        logger.warning("Sunset lookup failed for %s, using fixed twilight", day, exc_info=True)
        return None

    if sun_set is None:
        logger.warning("Sunset provider returned no value for %s, using fixed twilight", day)
        return None

    twilight_dt = datetime.combine(day, sun_set.replace(tzinfo=None)) - timedelta(minutes=minutes_before_sunset)
    if twilight_dt.date() != day:
        logger.warning("Twilight offset %d min crosses midnight on %s, using fixed twilight", minutes_before_sunset, day)
        return None
    return twilight_dt.time().replace(second=0, microsecond=0)


def resolve_twilight(
    day: date,
    mode: TwilightMode,
    fixed_default: time,
    minutes_before_sunset: int = 0,
    season_override: time | None = None,
    special_day_override: time | None = None,
    sunset_provider: SunsetProvider | None = None,
) -> TwilightResult:
    """Return the twilight start time for day.

    Priority: special day override (CUSTOM days only; the caller passes None
    otherwise) > season override > mode default. SUNSET mode subtracts
    minutes_before_sunset from the provider's sunset and falls back to
    fixed_default, flagged is_fallback, if the lookup fails.
    """
    if special_day_override is not None:
        return TwilightResult(special_day_override, source=SOURCE_SPECIAL_DAY)
    if season_override is not None:
        return TwilightResult(season_override, source=SOURCE_SEASON)

    if mode == TwilightMode.FIXED:
        return TwilightResult(fixed_default, source=SOURCE_FIXED)

    twilight = _sunset_twilight(day, minutes_before_sunset, sunset_provider)
    if twilight is None:
        return TwilightResult(fixed_default, is_fallback=True, source=SOURCE_FALLBACK)
    return TwilightResult(twilight, source=SOURCE_SUNSET)
