from assethub.config import settings


class _NoOpCelery:
    """Stand-in when Redis is not configured: tasks stay plain functions and never dispatch."""

    def task(self, *args, **kwargs):
        def decorator(func):
            func.delay = lambda *a, **k: None
            func.apply_async = lambda *a, **k: None
            return func
        return decorator

    def autodiscover_tasks(self, *args, **kwargs):
        pass


if settings.redis_enabled:
    from celery import Celery

    celery_app = Celery(
        "assethub",
        broker=settings.CELERY_BROKER_URL,
        backend=settings.CELERY_RESULT_BACKEND,
    )

    celery_app.conf.update(
        task_serializer="json",
        accept_content=["json"],
        result_serializer="json",
        timezone="UTC",
        enable_utc=True,
        task_track_started=True,
        task_routes={
            "assethub.workers.tasks.job_tasks.*": {"queue": "jobs"},
        },
        # One long-running job per worker process at a time
        worker_prefetch_multiplier=1,
        task_acks_late=True,
    )

    celery_app.autodiscover_tasks(["assethub.workers.tasks"])
else:
    celery_app = _NoOpCelery()
