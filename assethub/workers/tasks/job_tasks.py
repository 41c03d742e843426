import asyncio

from assethub.workers.celery_app import celery_app


def _run_async(coro):
    """Run an async function from a sync celery task."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@celery_app.task(name="task_run_job", bind=True)
def task_run_job(self, bucket: str, key: str):
    """Fetch the job definition and run it on the worker, returning the outcome."""
    from assethub.services.job_service import JobReference, JobTrigger

    async def _run():
        result = await JobTrigger.from_settings().run(JobReference(bucket=bucket, key=key))
        return {
            "bucket": bucket,
            "key": key,
            "exit_code": result.exit_code,
            "duration_seconds": result.duration_seconds,
        }

    return _run_async(_run())
