import time

import pytest
from fastapi.testclient import TestClient

from hiring_ai.api.main import create_app
from hiring_ai.configs.job_queue import QueueSettings
from hiring_ai.container import Container
from hiring_ai.core.processing import PipelineSettings
from hiring_ai.models.common import ErrorResponse

JOB_POSTING = {
    "type": "job_posting_embedding",
    "job_id": "job-42",
    "title": "Senior Go Engineer",
    "description": "Build distributed systems in Go.",
    "skills": ["Go", "Kubernetes"],
    "location": "Berlin",
}


@pytest.fixture
def client(container):
    with TestClient(create_app(container)) as client:
        yield client


@pytest.fixture
def idle_client(test_settings, fake_gateway):
    """Client whose worker pool is never started, so jobs stay queued."""
    settings = test_settings.model_copy(update={"job_queue": QueueSettings(capacity=1)})
    container = Container(settings=settings, gateway=fake_gateway, pipeline_settings=PipelineSettings())
    return TestClient(create_app(container))


def _wait_until_terminal(client, job_id, timeout=3.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        data = client.get(f"/api/v1/jobs/{job_id}").json()
        if data["status"] in ("completed", "failed", "cancelled"):
            return data
        time.sleep(0.02)
    raise AssertionError(f"Job {job_id} did not finish")


def test_submit_job_and_poll_result(client):
    response = client.post("/api/v1/jobs", json={"payload": JOB_POSTING, "priority": "low"})

    assert response.status_code == 202
    job_id = response.json()["job_id"]
    assert response.json()["status"] == "queued"

    job = _wait_until_terminal(client, job_id)
    assert job["status"] == "completed"
    assert job["type"] == "job_posting_embedding"
    assert job["priority"] == "low"
    assert job["result"]["indexed"] is True


def test_submit_job_with_caller_id(client):
    response = client.post("/api/v1/jobs", json={"payload": JOB_POSTING, "job_id": "my-job"})

    assert response.status_code == 202
    assert response.json()["job_id"] == "my-job"


def test_submit_job_rejects_unknown_type(client):
    response = client.post("/api/v1/jobs", json={"payload": {"type": "unknown"}})
    assert response.status_code == 422


def test_get_job_not_found(client):
    response = client.get("/api/v1/jobs/does-not-exist")

    assert response.status_code == 404
    error = ErrorResponse.model_validate(response.json())
    assert error.detail.type == "JobNotFoundError"
    assert error.detail.category == "invalid_input"


def test_cancel_finished_job_conflicts(client):
    job_id = client.post("/api/v1/jobs", json={"payload": JOB_POSTING}).json()["job_id"]
    _wait_until_terminal(client, job_id)

    response = client.delete(f"/api/v1/jobs/{job_id}")

    assert response.status_code == 409


def test_cancel_queued_job(idle_client):
    job_id = idle_client.post("/api/v1/jobs", json={"payload": JOB_POSTING}).json()["job_id"]

    response = idle_client.delete(f"/api/v1/jobs/{job_id}")

    assert response.status_code == 200
    assert response.json()["status"] == "cancelled"


def test_full_queue_returns_503_with_retry_after(idle_client):
    first = idle_client.post("/api/v1/jobs", json={"payload": JOB_POSTING})
    second = idle_client.post("/api/v1/jobs", json={"payload": JOB_POSTING})

    assert first.status_code == 202
    assert second.status_code == 503
    assert second.headers["Retry-After"] == "5"
    assert second.json()["detail"]["type"] == "QueueCapacityError"


def test_queue_stats(idle_client):
    idle_client.post("/api/v1/jobs", json={"payload": JOB_POSTING, "priority": "high"})

    response = idle_client.get("/api/v1/jobs/stats")

    assert response.status_code == 200
    data = response.json()
    assert data["queued_by_priority"] == {"high": 1, "medium": 0, "low": 0}
    assert data["capacity"] == 1
