"""Start the Celery worker for background job runs."""
import sys

from assethub.config import settings

if not settings.redis_enabled:
    print("ERROR: REDIS_URL not set. Cannot start Celery worker without Redis.")
    sys.exit(1)

from assethub.workers.celery_app import celery_app

if __name__ == "__main__":
    celery_app.worker_main([
        "worker",
        "--loglevel=info",
        "--queues=jobs",
        "--concurrency=1",
    ])
