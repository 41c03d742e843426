import logging

from assethub.config import settings
from assethub.core.exceptions import InvalidRequestError, NotFoundError
from assethub.schemas.asset import AssetPage, AssetPayload, AssetResponse
from assethub.services.asset_store import AssetStore

logger = logging.getLogger(__name__)


class AssetService:
    """HTTP-facing asset operations over an ``AssetStore``.

    Store errors are not caught here except in ``handle_get``, which reports a
    missing asset as ``None`` so callers can map it without exception handling.
    """

    def __init__(self, store: AssetStore, allow_update_without_id: bool | None = None):
        self.store = store
        if allow_update_without_id is None:
            allow_update_without_id = settings.ALLOW_UPDATE_WITHOUT_ID
        self.allow_update_without_id = allow_update_without_id

    async def handle_create(self, asset: AssetPayload) -> AssetResponse:
        logger.debug("Request to save Asset: %s", asset)
        if asset.id is not None:
            raise InvalidRequestError(
                "A new asset cannot already have an ID",
                headers={"X-Assethub-Error": "error.idexists", "X-Assethub-Params": "asset"},
            )
        return await self.store.create(asset)

    async def handle_update(self, asset: AssetPayload) -> AssetResponse:
        logger.debug("Request to update Asset: %s", asset)
        if asset.id is None:
            if not self.allow_update_without_id:
                raise InvalidRequestError("An asset to update must have an ID")
            return await self.handle_create(asset)
        return await self.store.update(asset)

    async def handle_list(self, page_number: int, page_size: int) -> AssetPage:
        logger.debug("Request to get page %d (size %d) of Assets", page_number, page_size)
        items, total = await self.store.list(page_number, page_size)
        return AssetPage(items=items, total=total, page=page_number, size=page_size)

    async def handle_get(self, asset_id: int) -> AssetResponse | None:
        logger.debug("Request to get Asset: %s", asset_id)
        try:
            return await self.store.get(asset_id)
        except NotFoundError:
            return None

    async def handle_delete(self, asset_id: int) -> None:
        logger.debug("Request to delete Asset: %s", asset_id)
        await self.store.delete(asset_id)
