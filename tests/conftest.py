import os
import tempfile
from collections.abc import AsyncIterator

# Settings are read at import time; pin them before anything from assethub loads
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["REDIS_URL"] = ""
os.environ["S3_ACCESS_KEY"] = ""
os.environ["S3_SECRET_KEY"] = ""
os.environ["JOB_BUCKET_NAME"] = ""
os.environ["JOB_OBJECT_KEY"] = ""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from assethub.config import settings
from assethub.core.dependencies import get_job_trigger
from assethub.db.base import Base
from assethub.db.session import get_db
from assethub.main import create_app
from assethub.services.job_service import ExternalJobRunner, JobResult, JobTrigger


class FakeRunner(ExternalJobRunner):
    """Records the path it was given and whether the file existed while running."""

    def __init__(self, result: JobResult | None = None, error: Exception | None = None, delay: float = 0):
        self.result = result or JobResult(exit_code=0, duration_seconds=0.01)
        self.error = error
        self.delay = delay
        self.paths: list[str] = []
        self.contents: list[bytes] = []

    async def run(self, path: str) -> JobResult:
        import asyncio

        self.paths.append(path)
        with open(path, "rb") as f:
            self.contents.append(f.read())
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.result


@pytest_asyncio.fixture
async def db_session(tmp_path) -> AsyncIterator[AsyncSession]:
    # Import all models
    import assethub.models  # noqa: F401

    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/test.db", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def app():
    return create_app()


@pytest_asyncio.fixture
async def client(app, db_session: AsyncSession) -> AsyncIterator[AsyncClient]:
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def scratch_dir(tmp_path, monkeypatch) -> str:
    """Point tempfile at an empty directory so leftover temp files are visible."""
    path = tmp_path / "scratch"
    path.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(path))
    return str(path)


@pytest.fixture
def job_storage(tmp_path, monkeypatch):
    """Configure a job definition in local storage and return (bucket, key)."""
    storage = tmp_path / "storage"
    bucket, key = "etl", "transformations/transformation1.ktr"
    target = storage / bucket / key
    target.parent.mkdir(parents=True)
    target.write_bytes(b"<transformation/>")

    monkeypatch.setattr(settings, "LOCAL_STORAGE_DIR", str(storage))
    monkeypatch.setattr(settings, "JOB_BUCKET_NAME", bucket)
    monkeypatch.setattr(settings, "JOB_OBJECT_KEY", key)
    return bucket, key


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def use_runner(app):
    """Install a runner behind the /runJob dependency."""

    def _install(runner: ExternalJobRunner, timeout: float | None = None) -> None:
        app.dependency_overrides[get_job_trigger] = lambda: JobTrigger(runner, timeout=timeout)

    return _install
