import logging

from fastapi import APIRouter, Depends

from assethub.config import settings
from assethub.core.dependencies import get_job_trigger
from assethub.core.exceptions import ServiceUnavailableError
from assethub.schemas.job import JobResultResponse, TaskStatusResponse
from assethub.services.job_service import JobReference, JobTrigger
from assethub.workers.tasks.job_tasks import task_run_job

logger = logging.getLogger(__name__)

router = APIRouter(tags=["jobs"])


@router.get("/runJob", response_model=JobResultResponse)
async def run_job(trigger: JobTrigger = Depends(get_job_trigger)):
    """Fetch the configured job definition and run it, returning once it finishes."""
    job_ref = JobReference.from_settings()
    result = await trigger.run(job_ref)
    return JobResultResponse(
        bucket=job_ref.bucket,
        key=job_ref.key,
        exit_code=result.exit_code,
        duration_seconds=result.duration_seconds,
    )


@router.post("/jobs/run", response_model=TaskStatusResponse, status_code=202)
async def queue_job():
    """Hand the configured job to the background worker instead of waiting on it."""
    if not settings.redis_enabled:
        raise ServiceUnavailableError("Background worker not configured (set REDIS_URL)")
    job_ref = JobReference.from_settings()
    result = task_run_job.delay(job_ref.bucket, job_ref.key)
    logger.info("Queued job %s/%s as task %s", job_ref.bucket, job_ref.key, result.id)
    return TaskStatusResponse(task_id=result.id, status="queued")
