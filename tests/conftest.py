# tests/conftest.py

from __future__ import annotations

import os

# Settings are cached on first use; pin the test environment before any import reads them.
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("REFERENCE_TIMEZONE", "Europe/Paris")
os.environ.setdefault("DEBUG", "false")

from datetime import time  # noqa: E402

import pytest  # noqa: E402

from care_scheduler.modules.care_management.domain.services.date_normalizer import DateNormalizer  # noqa: E402
from care_scheduler.modules.care_management.domain.services.recurrence_generator import (  # noqa: E402
    PlantLockRegistry,
    RecurrenceGenerator,
)
from care_scheduler.shared.events.publisher import EventPublisher  # noqa: E402

from .fakes import InMemoryPlantDirectory, InMemoryTaskStore, RecordingSubscriber  # noqa: E402


@pytest.fixture()
def normalizer() -> DateNormalizer:
    """Paris reference calendar, 08:00 default due time."""
    return DateNormalizer("Europe/Paris", time(8, 0))


@pytest.fixture()
def utc_normalizer() -> DateNormalizer:
    return DateNormalizer("UTC", time(8, 0))


@pytest.fixture()
def task_store(normalizer: DateNormalizer) -> InMemoryTaskStore:
    return InMemoryTaskStore(normalizer)


@pytest.fixture()
def plant_directory() -> InMemoryPlantDirectory:
    return InMemoryPlantDirectory()


@pytest.fixture()
def publisher() -> EventPublisher:
    return EventPublisher()


@pytest.fixture()
def recorder(publisher: EventPublisher) -> RecordingSubscriber:
    subscriber = RecordingSubscriber()
    publisher.subscribe("*", subscriber)
    return subscriber


@pytest.fixture()
def generator(
    task_store: InMemoryTaskStore,
    plant_directory: InMemoryPlantDirectory,
    normalizer: DateNormalizer,
    publisher: EventPublisher,
) -> RecurrenceGenerator:
    return RecurrenceGenerator(
        task_store,
        plant_directory,
        normalizer,
        recurrence_count=3,
        sweep_concurrency=4,
        event_publisher=publisher,
        locks=PlantLockRegistry(),
    )
