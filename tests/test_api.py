# tests/test_api.py

from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from care_scheduler.main import create_application
from care_scheduler.modules.care_management.domain.events.task_events import TaskCompleted
from care_scheduler.modules.care_management.presentation.dependencies import (
    get_plant_directory,
    get_publisher,
    get_task_store,
)
from care_scheduler.shared.events.publisher import EventPublisher

from .fakes import InMemoryPlantDirectory, InMemoryTaskStore, make_plant


@pytest.fixture()
def client(
    task_store: InMemoryTaskStore,
    plant_directory: InMemoryPlantDirectory,
    publisher: EventPublisher,
) -> TestClient:
    app = create_application()
    app.dependency_overrides[get_task_store] = lambda: task_store
    app.dependency_overrides[get_plant_directory] = lambda: plant_directory
    app.dependency_overrides[get_publisher] = lambda: publisher
    # Not used as a context manager: the lifespan would open the real database
    return TestClient(app)


def _create(client: TestClient, **overrides) -> dict:
    payload = {"plant_id": 1, "type": "water", "description": "Water the monstera", "due_date": "2025-04-06"}
    payload.update(overrides)
    response = client.post("/api/v1/tasks", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_task_with_recurrence(client: TestClient, plant_directory: InMemoryPlantDirectory) -> None:
    plant_directory.put(make_plant(1, frequency=7))

    body = _create(client, due_date="2025-04-01", schedule_future=True)

    assert body["created"]["due_day"] == "2025-04-01"
    assert body["created"]["icon"] == "opacity"
    assert body["created"]["background"] == "bg-blue-100"
    assert [task["due_day"] for task in body["recurrences"]] == ["2025-04-08", "2025-04-15", "2025-04-22"]


def test_invalid_date_is_rejected(
    client: TestClient,
    plant_directory: InMemoryPlantDirectory,
    task_store: InMemoryTaskStore,
) -> None:
    plant_directory.put(make_plant(1))

    response = client.post(
        "/api/v1/tasks",
        json={"plant_id": 1, "type": "water", "description": "Water", "due_date": "2025-02-30"},
    )

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "INVALID_DATE"
    assert error["details"]["field"] == "due_date"
    assert response.headers["X-Request-ID"]
    assert task_store.tasks == {}


def test_unknown_plant_is_404(client: TestClient) -> None:
    response = client.post(
        "/api/v1/tasks",
        json={"plant_id": 77, "type": "water", "description": "Water", "due_date": "2025-04-06"},
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_recurrence_without_frequency_is_rejected(
    client: TestClient,
    plant_directory: InMemoryPlantDirectory,
) -> None:
    plant_directory.put(make_plant(1, frequency=None))

    response = client.post(
        "/api/v1/tasks",
        json={
            "plant_id": 1,
            "type": "water",
            "description": "Water",
            "due_date": "2025-04-06",
            "schedule_future": True,
        },
    )

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "BUSINESS_RULE_VIOLATION"
    assert error["details"]["conflict"] == "missing_watering_frequency"


def test_unknown_task_type_fails_request_validation(client: TestClient) -> None:
    response = client.post(
        "/api/v1/tasks",
        json={"plant_id": 1, "type": "prune", "description": "Prune", "due_date": "2025-04-06"},
    )
    assert response.status_code == 422


def test_tasks_and_dot_for_day(client: TestClient, plant_directory: InMemoryPlantDirectory) -> None:
    plant_directory.put(make_plant(1))
    plant_directory.put(make_plant(2))
    _create(client, plant_id=1, due_date="2025-04-06T19:00:00+02:00")
    _create(client, plant_id=2, type="fertilize", description="Feed", due_date="2025-04-06T07:00:00+02:00")
    _create(client, plant_id=1, type="light", description="Move", due_date="2025-04-07")

    day = client.get("/api/v1/tasks/day/2025-04-06", params={"order_by": "due_time"}).json()
    assert day["day"] == "2025-04-06"
    assert day["total"] == 2
    assert [task["type"] for task in day["tasks"]] == ["fertilize", "water"]

    only_plant_one = client.get("/api/v1/tasks/day/2025-04-06", params={"plant_id": 1}).json()
    assert [task["plant_id"] for task in only_plant_one["tasks"]] == [1]

    assert client.get("/api/v1/tasks/day/2025-04-06/dot").json() == {
        "day": "2025-04-06",
        "dot": "urgent",
        "css_class": "bg-alert",
    }
    assert client.get("/api/v1/tasks/day/2025-04-07/dot").json()["dot"] == "normal"
    assert client.get("/api/v1/tasks/day/2025-04-08/dot").json()["css_class"] is None


def test_bad_day_in_path(client: TestClient) -> None:
    response = client.get("/api/v1/tasks/day/tomorrow")

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "INVALID_DATE"


def test_unsupported_ordering_fails_request_validation(client: TestClient) -> None:
    response = client.get("/api/v1/tasks/day/2025-04-06", params={"order_by": "priority"})
    assert response.status_code == 422


def test_calendar_month(client: TestClient, plant_directory: InMemoryPlantDirectory) -> None:
    plant_directory.put(make_plant(1))
    _create(client, due_date="2025-04-10")

    body = client.get("/api/v1/tasks/calendar/2025/4").json()

    assert (body["year"], body["month"]) == (2025, 4)
    assert len(body["days"]) == 30
    dots = {day["day"]: day["dot"] for day in body["days"]}
    assert dots["2025-04-10"] == "urgent"
    assert dots["2025-04-11"] == "none"

    assert client.get("/api/v1/tasks/calendar/2025/13").status_code == 422


def test_complete_and_pending(
    client: TestClient,
    plant_directory: InMemoryPlantDirectory,
    publisher: EventPublisher,
) -> None:
    plant_directory.put(make_plant(1, frequency=5))
    created = _create(client)["created"]

    response = client.patch(f"/api/v1/tasks/{created['id']}/complete", json={"schedule_future": True})
    assert response.status_code == 200
    body = response.json()
    assert body["completed"]["completed"] is True
    assert [task["due_day"] for task in body["recurrences"]] == ["2025-04-11", "2025-04-16", "2025-04-21"]

    again = client.patch(f"/api/v1/tasks/{created['id']}/complete")
    assert again.status_code == 200
    assert again.json()["recurrences"] == []
    assert len(publisher.get_history(TaskCompleted.EVENT_TYPE)) == 1

    pending = client.get("/api/v1/tasks/pending").json()
    assert pending["total"] == 3
    assert all(task["completed"] is False for task in pending["tasks"])


def test_complete_unknown_task(client: TestClient) -> None:
    response = client.patch("/api/v1/tasks/123/complete")
    assert response.status_code == 404


def test_delete_task(client: TestClient, plant_directory: InMemoryPlantDirectory) -> None:
    plant_directory.put(make_plant(1))
    created = _create(client)["created"]

    response = client.delete(f"/api/v1/tasks/{created['id']}")
    assert response.status_code == 200
    assert response.json()["deleted"]["id"] == created["id"]

    assert client.delete(f"/api/v1/tasks/{created['id']}").status_code == 404


def test_task_type_styles(client: TestClient) -> None:
    styles = {item["type"]: item for item in client.get("/api/v1/tasks/types").json()}

    assert set(styles) == {"water", "fertilize", "repot", "light", "other"}
    assert styles["light"]["icon"] == "wb_sunny"
    assert styles["light"]["background"] == "bg-yellow-100"


def test_plant_tasks(client: TestClient, plant_directory: InMemoryPlantDirectory) -> None:
    plant_directory.put(make_plant(1))
    plant_directory.put(make_plant(2))
    _create(client, plant_id=1)
    _create(client, plant_id=2)

    body = client.get("/api/v1/plants/1/tasks").json()
    assert body["total"] == 1
    assert body["tasks"][0]["plant_id"] == 1

    assert client.get("/api/v1/plants/9/tasks").status_code == 404


def test_auto_watering_sweep_endpoint(client: TestClient, plant_directory: InMemoryPlantDirectory) -> None:
    plant_directory.put(make_plant(1, frequency=3, last_watered=date(2025, 4, 1)))
    plant_directory.put(make_plant(2, frequency=3))

    first = client.post("/api/v1/tasks/generate-auto-watering").json()
    second = client.post("/api/v1/tasks/generate-auto-watering").json()

    assert first["plants_considered"] == 2
    assert first["tasks_created"] == 2
    assert first["partial_failure"] is None
    assert second["tasks_created"] == 0
    assert second["tasks_skipped"] == 2


def test_auto_watering_sweep_reports_partial_failure(
    client: TestClient,
    plant_directory: InMemoryPlantDirectory,
    task_store: InMemoryTaskStore,
) -> None:
    for plant_id in range(1, 6):
        plant_directory.put(make_plant(plant_id, frequency=2))
    task_store.fail_create_for.add(4)

    response = client.post("/api/v1/tasks/generate-auto-watering")

    assert response.status_code == 200
    body = response.json()
    assert body["partial_failure"] == "4 created, 1 failed"
    assert [failure["plant_id"] for failure in body["failures"]] == [4]


def test_health_without_database(client: TestClient) -> None:
    response = client.get("/api/v1/health")

    assert response.status_code == 503
    assert response.json()["components"]["database"]["status"] == "unhealthy"
    assert client.get("/api/v1/health/live").status_code == 200
