"""Tee sheet schedule routes: defaults, validation, effective schedule, slots, preview.

Stateless: the caller posts the course's schedule configuration with each
request and gets the resolved result back. Nothing is stored.
"""

import logging
from datetime import date

from fastapi import APIRouter, HTTPException, Query, status

from app.core.config import settings
from app.core.errors import ConfigurationError, configuration_errors_to_http
from app.schemas import (
    EffectiveScheduleOut,
    PreviewOut,
    ScheduleConfigOut,
    ScheduleRequest,
    SlotsOut,
    TeeTimeSlotOut,
    ValidationOut,
    ViolationOut,
)
from app.services.schedule_defaults import default_schedule_config
from app.services.schedule_preview import assemble_preview, assemble_previews
from app.services.schedule_resolver import resolve_effective_schedule
from app.services.schedule_rules import validate_schedule_config
from app.services.slot_generator import generate_slots

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schedule", tags=["schedule"])


@router.get("/defaults", response_model=ScheduleConfigOut)
async def get_default_schedule(course_id: str | None = Query(None)):
    """The configuration a new course starts with."""
    return ScheduleConfigOut.model_validate(default_schedule_config(course_id))


@router.post("/validate", response_model=ValidationOut)
async def validate_schedule(body: ScheduleRequest):
    """Run every configuration rule and report all violations at once."""
    try:
        config, seasons, special_days = body.to_domain()
    except ConfigurationError as e:
        return ValidationOut(valid=False, violations=[ViolationOut(**e.as_detail())])

    violations = validate_schedule_config(config, seasons, special_days)
    return ValidationOut(
        valid=not violations,
        violations=[ViolationOut(**v.as_detail()) for v in violations],
    )


@router.post("/effective", response_model=EffectiveScheduleOut)
async def get_effective_schedule(
    body: ScheduleRequest,
    query_date: date = Query(..., alias="date", description="Date in YYYY-MM-DD format"),
):
    """Operating rules for one date after seasons and special days are applied."""
    try:
        config, seasons, special_days = body.to_domain()
        schedule = resolve_effective_schedule(config, seasons, special_days, query_date)
    except ConfigurationError as e:
        logger.info("Rejected schedule for course %s: %s", body.config.course_id, e.message)
        raise configuration_errors_to_http([e])
    return EffectiveScheduleOut.model_validate(schedule)


@router.post("/slots", response_model=SlotsOut)
async def get_slots(
    body: ScheduleRequest,
    query_date: date = Query(..., alias="date", description="Date in YYYY-MM-DD format"),
):
    """Every tee time for a date. Closed days return an empty slot list."""
    try:
        config, seasons, special_days = body.to_domain()
        schedule = resolve_effective_schedule(config, seasons, special_days, query_date)
        slots = generate_slots(schedule)
    except ConfigurationError as e:
        logger.info("Rejected schedule for course %s: %s", body.config.course_id, e.message)
        raise configuration_errors_to_http([e])

    return SlotsOut(
        schedule=EffectiveScheduleOut.model_validate(schedule),
        slots=[TeeTimeSlotOut.model_validate(s) for s in slots],
    )


@router.post("/preview", response_model=PreviewOut)
async def preview_schedule(
    body: ScheduleRequest,
    query_date: date = Query(..., alias="date", description="Date in YYYY-MM-DD format"),
    max_players_per_slot: int = Query(settings.default_max_players_per_slot, ge=1),
):
    """Resolved schedule, tee times and capacity summary for one date."""
    try:
        config, seasons, special_days = body.to_domain()
        preview = assemble_preview(config, seasons, special_days, query_date, max_players_per_slot)
    except ConfigurationError as e:
        logger.info("Rejected schedule for course %s: %s", body.config.course_id, e.message)
        raise configuration_errors_to_http([e])
    return PreviewOut.model_validate(preview)


@router.post("/preview/range", response_model=list[PreviewOut])
async def preview_schedule_range(
    body: ScheduleRequest,
    start: date = Query(..., description="First date in YYYY-MM-DD format"),
    days: int = Query(7, ge=1),
    max_players_per_slot: int = Query(settings.default_max_players_per_slot, ge=1),
):
    """Previews for consecutive dates, e.g. a week view of the tee sheet."""
    if days > settings.max_preview_days:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot preview more than {settings.max_preview_days} days",
        )

    try:
        config, seasons, special_days = body.to_domain()
        previews = assemble_previews(config, seasons, special_days, start, days, max_players_per_slot)
    except ConfigurationError as e:
        logger.info("Rejected schedule for course %s: %s", body.config.course_id, e.message)
        raise configuration_errors_to_http([e])
    return [PreviewOut.model_validate(p) for p in previews]
