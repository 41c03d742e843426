"""Fetch an externally stored job definition and run it to completion.

The definition (e.g. a Pentaho ``.ktr`` transformation) lives in object
storage under a bucket/key taken from settings. It is downloaded into a
temporary file that is removed on every exit path, then handed to an
``ExternalJobRunner``. ``JobTrigger.run`` awaits the runner, so the caller
only sees the finished result or an error.
"""
import abc
import asyncio
import logging
import os
import tempfile
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from assethub.config import settings
from assethub.core.exceptions import (
    JobExecutionError,
    JobFetchError,
    JobTimeoutError,
    ServiceUnavailableError,
)
from assethub.services.storage_service import download_file

logger = logging.getLogger(__name__)

PATH_PLACEHOLDER = "{path}"
OUTPUT_TAIL_CHARS = 500


@dataclass(frozen=True)
class JobReference:
    bucket: str
    key: str

    @classmethod
    def from_settings(cls) -> "JobReference":
        if not settings.job_configured:
            raise ServiceUnavailableError("No job configured (set JOB_BUCKET_NAME and JOB_OBJECT_KEY)")
        return cls(bucket=settings.JOB_BUCKET_NAME, key=settings.JOB_OBJECT_KEY)


@dataclass
class JobResult:
    exit_code: int
    duration_seconds: float
    output: str = ""


def _write_bytes(path: str, data: bytes) -> None:
    with open(path, "wb") as f:
        f.write(data)


@asynccontextmanager
async def fetch(job_ref: JobReference) -> AsyncIterator[str]:
    """Download ``job_ref`` into a temporary file and yield its path."""
    suffix = os.path.splitext(job_ref.key)[1] or ".job"
    with tempfile.NamedTemporaryFile(suffix=suffix, delete=False) as tmp:
        tmp_path = tmp.name

    try:
        try:
            data = await download_file(job_ref.bucket, job_ref.key)
        except Exception as exc:
            raise JobFetchError(f"Could not fetch {job_ref.bucket}/{job_ref.key}: {exc}") from exc
        await asyncio.to_thread(_write_bytes, tmp_path, data)
        yield tmp_path
    finally:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)


class ExternalJobRunner(abc.ABC):
    @abc.abstractmethod
    async def run(self, path: str) -> JobResult:
        """Execute the job definition at ``path`` and return once it has finished."""


class SubprocessJobRunner(ExternalJobRunner):
    """Runs the job through an external launcher such as Pentaho's ``pan.sh``."""

    def __init__(self, command: str, args: list[str] | None = None):
        self.command = command
        self.args = list(args) if args is not None else [PATH_PLACEHOLDER]

    @classmethod
    def from_settings(cls) -> "SubprocessJobRunner":
        return cls(settings.JOB_RUNNER_COMMAND, settings.JOB_RUNNER_ARGS)

    def build_command(self, path: str) -> list[str]:
        args = [arg.replace(PATH_PLACEHOLDER, path) for arg in self.args]
        if not any(PATH_PLACEHOLDER in arg for arg in self.args):
            args.append(path)
        return [self.command, *args]

    async def run(self, path: str) -> JobResult:
        cmd = self.build_command(path)
        start = time.monotonic()
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise JobExecutionError(f"Could not start {self.command}", cause=str(exc)) from exc

        try:
            stdout, stderr = await proc.communicate()
        except asyncio.CancelledError:
            # Cancelled by a timeout or a dropped request: don't leave the job running
            proc.kill()
            await proc.wait()
            raise

        duration = time.monotonic() - start
        if proc.returncode != 0:
            tail = stderr.decode(errors="replace")[-OUTPUT_TAIL_CHARS:].strip()
            cause = f"exit code {proc.returncode}"
            if tail:
                cause = f"{cause}: {tail}"
            raise JobExecutionError(f"Job exited with code {proc.returncode}", cause=cause)

        return JobResult(
            exit_code=proc.returncode,
            duration_seconds=duration,
            output=stdout.decode(errors="replace")[-OUTPUT_TAIL_CHARS:],
        )


class JobTrigger:
    def __init__(self, runner: ExternalJobRunner, timeout: float | None = None):
        self.runner = runner
        self.timeout = timeout

    @classmethod
    def from_settings(cls) -> "JobTrigger":
        return cls(SubprocessJobRunner.from_settings(), timeout=settings.JOB_TIMEOUT_SECONDS)

    async def run(self, job_ref: JobReference) -> JobResult:
        logger.info("Running job %s/%s", job_ref.bucket, job_ref.key)
        async with fetch(job_ref) as path:
            try:
                if self.timeout is not None:
                    result = await asyncio.wait_for(self.runner.run(path), self.timeout)
                else:
                    result = await self.runner.run(path)
            except asyncio.TimeoutError as exc:
                logger.error("Job %s/%s timed out after %ss", job_ref.bucket, job_ref.key, self.timeout)
                raise JobTimeoutError(self.timeout) from exc
            except JobExecutionError as exc:
                logger.error("Job %s/%s failed: %s", job_ref.bucket, job_ref.key, exc.cause)
                raise
            except Exception as exc:
                logger.exception("Job %s/%s runner crashed", job_ref.bucket, job_ref.key)
                raise JobExecutionError("Job runner failed", cause=str(exc)) from exc

        logger.info(
            "Job %s/%s finished in %.2fs", job_ref.bucket, job_ref.key, result.duration_seconds,
        )
        return result
