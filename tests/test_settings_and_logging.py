# tests/test_settings_and_logging.py

from __future__ import annotations

import json
import logging
from datetime import time

import pytest
from pydantic import ValidationError

from care_scheduler.modules.care_management.domain.services.date_normalizer import DateNormalizer
from care_scheduler.shared.config.settings import Settings
from care_scheduler.shared.utils.logging import JSONFormatter, get_logger, log_context


def _settings(**values) -> Settings:
    return Settings(_env_file=None, **values)


def test_scheduling_defaults() -> None:
    settings = _settings()

    assert settings.RECURRENCE_COUNT == 3
    assert settings.default_due_time == time(8, 0)
    assert settings.reference_zone.key == settings.REFERENCE_TIMEZONE


def test_database_url_prefers_explicit_value() -> None:
    assert _settings(DATABASE_URL="sqlite+aiosqlite:///care.db").database_url == "sqlite+aiosqlite:///care.db"
    assert _settings(DATABASE_URL=None, DB_USER="u", DB_PASSWORD="p", DB_HOST="db", DB_NAME="care").database_url == (
        "postgresql+asyncpg://u:p@db:5432/care"
    )


@pytest.mark.parametrize(
    "field, value",
    [
        ("REFERENCE_TIMEZONE", "Mars/Olympus_Mons"),
        ("DEFAULT_DUE_TIME", "8 o'clock"),
        ("ENVIRONMENT", "qa"),
        ("LOG_FORMAT", "xml"),
        ("RECURRENCE_COUNT", 0),
    ],
)
def test_invalid_settings_are_rejected(field: str, value) -> None:
    with pytest.raises(ValidationError):
        _settings(**{field: value})


def test_normalizer_from_settings() -> None:
    normalizer = DateNormalizer.from_settings(
        _settings(REFERENCE_TIMEZONE="America/New_York", DEFAULT_DUE_TIME="07:15")
    )

    assert str(normalizer.reference_zone) == "America/New_York"
    assert normalizer.default_due_time == time(7, 15)


def test_json_log_records_carry_context_and_extras() -> None:
    formatter = JSONFormatter()
    logger = get_logger("tests.json")
    captured: list[logging.LogRecord] = []

    class Capture(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            captured.append(record)

    handler = Capture()
    logger.logger.addHandler(handler)
    logger.logger.setLevel(logging.INFO)
    try:
        with log_context(request_id="req-1", correlation_id="corr-1"):
            logger.info("Sweep finished", extra={"tasks_created": 4})
            payload = json.loads(formatter.format(captured[0]))
    finally:
        logger.logger.removeHandler(handler)

    assert payload["message"] == "Sweep finished"
    assert payload["level"] == "INFO"
    assert payload["request_id"] == "req-1"
    assert payload["correlation_id"] == "corr-1"
    assert payload["extra"] == {"tasks_created": 4}
    assert payload["service"] == "care-scheduler"
