"""Schedule preview: resolved schedule, tee times and summary statistics.

This is the unit consumed by the schedule preview panel and the availability
API. It wraps resolve_effective_schedule() and generate_slots() and adds
capacity and prime-time figures.
"""

from datetime import date, timedelta

from app.core.config import settings
from app.core.errors import ConfigurationError
from app.models.schedule import (
    BaseScheduleConfig,
    BookingMode,
    PreviewResult,
    PreviewSummary,
    Season,
    SpecialDay,
    TeeTimeSlot,
)
from app.services.schedule_resolver import resolve_effective_schedule
from app.services.slot_generator import generate_slots
from app.services.twilight import SunsetProvider


def _percentage(part: int, whole: int) -> int:
    """Whole-number percentage rounded half up; 0 when whole is 0."""
    if whole == 0:
        return 0
    return (200 * part + whole) // (2 * whole)


def summarise_slots(slots: list[TeeTimeSlot], booking_mode: BookingMode, max_players_per_slot: int) -> PreviewSummary:
    """Slot counts and player capacity. CROSS mode doubles capacity (holes 1 and 10)."""
    total = len(slots)
    prime = sum(1 for s in slots if s.is_prime_time)
    starts = 2 if booking_mode == BookingMode.CROSS else 1
    return PreviewSummary(
        total_slots=total,
        max_players=total * max_players_per_slot * starts,
        prime_time_slots=prime,
        prime_time_percentage=_percentage(prime, total),
    )


def assemble_preview(
    config: BaseScheduleConfig,
    seasons: list[Season] | tuple[Season, ...],
    special_days: list[SpecialDay] | tuple[SpecialDay, ...],
    day: date,
    max_players_per_slot: int | None = None,
    sunset_provider: SunsetProvider | None = None,
) -> PreviewResult:
    """Resolve the schedule for day, generate its tee times and summarise them."""
    if max_players_per_slot is None:
        max_players_per_slot = settings.default_max_players_per_slot
    if max_players_per_slot <= 0:
        raise ConfigurationError("max_players", f"Players per slot must be positive, got {max_players_per_slot}.")

    schedule = resolve_effective_schedule(config, seasons, special_days, day, sunset_provider)
    slots = generate_slots(schedule)

    return PreviewResult(
        schedule=schedule,
        slots=tuple(slots),
        summary=summarise_slots(slots, schedule.booking_mode, max_players_per_slot),
    )


def assemble_previews(
    config: BaseScheduleConfig,
    seasons: list[Season] | tuple[Season, ...],
    special_days: list[SpecialDay] | tuple[SpecialDay, ...],
    start: date,
    days: int = 7,
    max_players_per_slot: int | None = None,
    sunset_provider: SunsetProvider | None = None,
) -> list[PreviewResult]:
    """One preview per consecutive date starting at start (the tee sheet week view)."""
    if not 1 <= days <= settings.max_preview_days:
        raise ConfigurationError("preview_days", f"Preview range must be 1-{settings.max_preview_days} days, got {days}.")

    return [
        assemble_preview(config, seasons, special_days, start + timedelta(days=n), max_players_per_slot, sunset_provider)
        for n in range(days)
    ]
