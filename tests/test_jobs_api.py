import os
from unittest.mock import MagicMock, patch

import pytest
from httpx import AsyncClient

from assethub.config import settings
from assethub.core.exceptions import JobExecutionError
from assethub.services.job_service import JobResult, JobTrigger
from assethub.workers.tasks.job_tasks import task_run_job
from tests.conftest import FakeRunner


@pytest.mark.asyncio
async def test_run_job(client: AsyncClient, job_storage, use_runner, scratch_dir):
    runner = FakeRunner(JobResult(exit_code=0, duration_seconds=1.5))
    use_runner(runner)

    response = await client.get("/api/v1/runJob")
    assert response.status_code == 200
    data = response.json()
    assert (data["bucket"], data["key"]) == job_storage
    assert data["exit_code"] == 0
    assert data["duration_seconds"] == 1.5
    assert runner.contents == [b"<transformation/>"]
    assert os.listdir(scratch_dir) == []


@pytest.mark.asyncio
async def test_run_job_failure(client: AsyncClient, job_storage, use_runner, scratch_dir):
    use_runner(FakeRunner(error=JobExecutionError("Job exited with code 1", cause="exit code 1")))

    response = await client.get("/api/v1/runJob")
    assert response.status_code == 500
    detail = response.json()["detail"]
    assert detail["cause"] == "exit code 1"
    assert detail["message"] == "Job exited with code 1"
    assert os.listdir(scratch_dir) == []


@pytest.mark.asyncio
async def test_run_job_runner_crash(client: AsyncClient, job_storage, use_runner, scratch_dir):
    use_runner(FakeRunner(error=RuntimeError("kettle engine crashed")))

    response = await client.get("/api/v1/runJob")
    assert response.status_code == 500
    detail = response.json()["detail"]
    assert detail["message"] == "Job runner failed"
    assert detail["cause"] == "kettle engine crashed"
    assert os.listdir(scratch_dir) == []


@pytest.mark.asyncio
async def test_run_job_timeout(client: AsyncClient, job_storage, use_runner):
    use_runner(FakeRunner(delay=5), timeout=0.05)

    response = await client.get("/api/v1/runJob")
    assert response.status_code == 500
    assert response.json()["detail"]["cause"] == "timeout"


@pytest.mark.asyncio
async def test_run_job_missing_definition(client: AsyncClient, job_storage, use_runner, monkeypatch):
    monkeypatch.setattr(settings, "JOB_OBJECT_KEY", "does/not/exist.ktr")
    use_runner(FakeRunner())

    response = await client.get("/api/v1/runJob")
    assert response.status_code == 502


@pytest.mark.asyncio
async def test_run_job_not_configured(client: AsyncClient, use_runner):
    use_runner(FakeRunner())
    response = await client.get("/api/v1/runJob")
    assert response.status_code == 503


@pytest.mark.asyncio
async def test_queue_job_without_worker(client: AsyncClient, job_storage):
    response = await client.post("/api/v1/jobs/run")
    assert response.status_code == 503


@pytest.mark.asyncio
async def test_queue_job(client: AsyncClient, job_storage, monkeypatch):
    bucket, key = job_storage
    monkeypatch.setattr(settings, "REDIS_URL", "redis://localhost:6379")

    with patch.object(task_run_job, "delay", return_value=MagicMock(id="task-123")) as mock_delay:
        response = await client.post("/api/v1/jobs/run")

    assert response.status_code == 202
    assert response.json() == {"task_id": "task-123", "status": "queued"}
    mock_delay.assert_called_once_with(bucket, key)


def test_task_run_job_reports_result(job_storage, scratch_dir):
    bucket, key = job_storage
    runner = FakeRunner(JobResult(exit_code=0, duration_seconds=2.0))

    with patch.object(JobTrigger, "from_settings", return_value=JobTrigger(runner)):
        result = task_run_job(None, bucket, key)

    assert result == {"bucket": bucket, "key": key, "exit_code": 0, "duration_seconds": 2.0}
    assert os.listdir(scratch_dir) == []
