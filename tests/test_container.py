"""Tests for container wiring."""

import asyncio

from goutcare.config import parse_timezone
from goutcare.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.analysis_service is not None
    assert container.history_service.cap == 50
    assert container.meal_log_service.timezone.key == "UTC"
    asyncio.run(container.close_resources())


def test_parse_timezone_falls_back_to_utc() -> None:
    assert parse_timezone("Asia/Seoul").key == "Asia/Seoul"
    assert parse_timezone("Not/AZone").key == "UTC"
    assert parse_timezone(None).key == "UTC"
