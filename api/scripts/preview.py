"""Print the tee sheet for one or more dates from a schedule configuration.

Usage:
    python -m scripts.preview --date 2026-12-25
    python -m scripts.preview data/schedule.json --date 2026-12-21 --days 7 [--players 4] [--slots]

The JSON file has the same shape as the API request body:
{"config": {...}, "seasons": [...], "special_days": [...]}. Without a file the
default course configuration is used.
"""

import argparse
import sys
from datetime import date
from pathlib import Path

from app.core.errors import ConfigurationError
from app.models.schedule import PreviewResult, format_clock
from app.schemas import ScheduleRequest
from app.services.schedule_defaults import default_schedule_config
from app.services.schedule_preview import assemble_previews


def _load(path: Path | None):
    if path is None:
        return default_schedule_config("default"), [], []
    request = ScheduleRequest.model_validate_json(path.read_text())
    return request.to_domain()


def _print_preview(preview: PreviewResult, show_slots: bool) -> None:
    s = preview.schedule
    header = f"{s.date.isoformat()} {s.date.strftime('%a')} [{s.day_kind}]"
    if s.active_special_day:
        header += f" special day: {s.active_special_day.name} ({s.active_special_day.type})"
    if s.active_season:
        header += f" season: {s.active_season.name}"
    print(header)

    if preview.is_closed:
        print("  CLOSED")
        return

    twilight = format_clock(s.twilight_time) + (" (fallback)" if s.twilight_is_fallback else "")
    print(
        f"  {format_clock(s.first_tee)}-{format_clock(s.last_tee)} mode={s.booking_mode} twilight={twilight} "
        f"window={s.booking_window_days}d"
    )
    summary = preview.summary
    print(
        f"  {summary.total_slots} slots, {summary.max_players} players max, "
        f"{summary.prime_time_slots} prime ({summary.prime_time_percentage}%)"
    )

    if show_slots:
        for slot in preview.slots:
            flags = "".join(("P" if slot.is_prime_time else "-", "T" if slot.is_twilight else "-"))
            print(f"    {format_clock(slot.time)} {flags} {slot.period_name} ({slot.interval_minutes} min)")


def main() -> None:
    parser = argparse.ArgumentParser(description="Preview a course tee sheet")
    parser.add_argument("config", nargs="?", type=Path, help="Path to schedule JSON")
    parser.add_argument("--date", type=date.fromisoformat, default=date.today(), help="First date (YYYY-MM-DD)")
    parser.add_argument("--days", type=int, default=1, help="Number of consecutive dates")
    parser.add_argument("--players", type=int, default=None, help="Max players per slot")
    parser.add_argument("--slots", action="store_true", help="List every tee time")
    args = parser.parse_args()

    try:
        config, seasons, special_days = _load(args.config)
        previews = assemble_previews(config, seasons, special_days, args.date, args.days, args.players)
    except ConfigurationError as e:
        print(f"Configuration error [{e.rule}]: {e.message}", file=sys.stderr)
        sys.exit(1)

    for preview in previews:
        _print_preview(preview, args.slots)


if __name__ == "__main__":
    main()
