from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from assethub.db.session import get_db
from assethub.services.asset_service import AssetService
from assethub.services.asset_store import SqlAssetStore
from assethub.services.job_service import JobTrigger


async def get_asset_service(db: AsyncSession = Depends(get_db)) -> AssetService:
    return AssetService(SqlAssetStore(db))


def get_job_trigger() -> JobTrigger:
    return JobTrigger.from_settings()
