"""Persistence contract for assets.

``AssetStore`` is the only thing the service layer talks to. ``SqlAssetStore``
runs against the ``assets`` table through an async SQLAlchemy session;
``InMemoryAssetStore`` keeps records in a dict and honours the same contract.
"""
import abc
import itertools
import logging

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from assethub.core.exceptions import InvalidArgumentError, NotFoundError
from assethub.models.asset import Asset
from assethub.schemas.asset import AssetPayload, AssetResponse

logger = logging.getLogger(__name__)


def _check_page_size(page_size: int) -> None:
    if page_size <= 0:
        raise InvalidArgumentError(f"Page size must be positive, got {page_size}")


class AssetStore(abc.ABC):
    @abc.abstractmethod
    async def create(self, asset: AssetPayload) -> AssetResponse:
        """Persist a new asset and assign its id. Fails if ``asset.id`` is set."""

    @abc.abstractmethod
    async def update(self, asset: AssetPayload) -> AssetResponse:
        """Replace every field of the stored record matching ``asset.id``."""

    @abc.abstractmethod
    async def get(self, asset_id: int) -> AssetResponse:
        ...

    @abc.abstractmethod
    async def list(self, page_number: int, page_size: int) -> tuple[list[AssetResponse], int]:
        """Return one page ordered by id plus the total number of records."""

    @abc.abstractmethod
    async def delete(self, asset_id: int) -> None:
        ...


class SqlAssetStore(AssetStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, asset: AssetPayload) -> AssetResponse:
        if asset.id is not None:
            raise InvalidArgumentError(f"A new asset cannot already have an id ({asset.id})")
        record = Asset(**asset.model_dump(exclude={"id"}))
        self.db.add(record)
        await self.db.flush()
        await self.db.refresh(record)
        logger.info("Asset %s created", record.id)
        return AssetResponse.model_validate(record)

    async def update(self, asset: AssetPayload) -> AssetResponse:
        if asset.id is None:
            raise NotFoundError("Asset without an id cannot be updated")
        # Single statement: a row removed since the caller last read it yields rowcount 0
        result = await self.db.execute(
            update(Asset)
            .where(Asset.id == asset.id)
            .values({getattr(Asset, field): value for field, value in asset.model_dump(exclude={"id"}).items()})
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFoundError(f"Asset {asset.id} not found")
        await self.db.flush()
        return await self.get(asset.id)

    async def get(self, asset_id: int) -> AssetResponse:
        result = await self.db.execute(
            select(Asset).where(Asset.id == asset_id).execution_options(populate_existing=True)
        )
        record = result.scalar_one_or_none()
        if not record:
            raise NotFoundError(f"Asset {asset_id} not found")
        return AssetResponse.model_validate(record)

    async def list(self, page_number: int, page_size: int) -> tuple[list[AssetResponse], int]:
        _check_page_size(page_size)
        count_result = await self.db.execute(select(func.count(Asset.id)))
        total = count_result.scalar() or 0
        # Pages before the first are empty, like pages past the last
        if page_number < 0:
            return [], total

        result = await self.db.execute(
            select(Asset)
            .order_by(Asset.id)
            .offset(page_number * page_size)
            .limit(page_size)
        )
        items = [AssetResponse.model_validate(record) for record in result.scalars().all()]
        return items, total

    async def delete(self, asset_id: int) -> None:
        result = await self.db.execute(
            delete(Asset).where(Asset.id == asset_id).execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFoundError(f"Asset {asset_id} not found")
        await self.db.flush()
        logger.info("Asset %s deleted", asset_id)


class InMemoryAssetStore(AssetStore):
    def __init__(self):
        self._records: dict[int, AssetResponse] = {}
        self._ids = itertools.count(1)

    async def create(self, asset: AssetPayload) -> AssetResponse:
        if asset.id is not None:
            raise InvalidArgumentError(f"A new asset cannot already have an id ({asset.id})")
        record = AssetResponse(id=next(self._ids), **asset.model_dump(exclude={"id"}))
        self._records[record.id] = record
        return record.model_copy()

    async def update(self, asset: AssetPayload) -> AssetResponse:
        if asset.id is None or asset.id not in self._records:
            raise NotFoundError(f"Asset {asset.id} not found")
        record = AssetResponse(**asset.model_dump())
        self._records[record.id] = record
        return record.model_copy()

    async def get(self, asset_id: int) -> AssetResponse:
        record = self._records.get(asset_id)
        if record is None:
            raise NotFoundError(f"Asset {asset_id} not found")
        return record.model_copy()

    async def list(self, page_number: int, page_size: int) -> tuple[list[AssetResponse], int]:
        _check_page_size(page_size)
        ordered = [self._records[k] for k in sorted(self._records)]
        if page_number < 0:
            return [], len(ordered)
        start = page_number * page_size
        page = ordered[start:start + page_size]
        return [r.model_copy() for r in page], len(ordered)

    async def delete(self, asset_id: int) -> None:
        if self._records.pop(asset_id, None) is None:
            raise NotFoundError(f"Asset {asset_id} not found")
