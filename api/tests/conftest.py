"""Shared test fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app


@pytest.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def schedule_body():
    """Request body for the default course schedule (what GET /schedule/defaults returns)."""
    return {
        "config": {
            "course_id": "test-course",
            "weekday_first_tee": "06:00",
            "weekday_last_tee": "17:00",
            "weekend_first_tee": "05:30",
            "weekend_last_tee": "17:30",
            "twilight_fixed_default": "16:00",
            "time_periods": [
                {"name": "Early Bird", "start_time": "06:00", "end_time": "07:00", "interval_minutes": 12},
                {"name": "Prime AM", "start_time": "07:00", "end_time": "11:00", "interval_minutes": 8, "is_prime_time": True},
                {"name": "Midday", "start_time": "11:00", "end_time": "14:00", "interval_minutes": 10},
                {"name": "Prime PM", "start_time": "14:00", "end_time": "16:00", "interval_minutes": 8, "is_prime_time": True},
                {"name": "Twilight", "start_time": "16:00", "interval_minutes": 12},
            ],
        },
        "seasons": [],
        "special_days": [],
    }
