import logging

from fastapi import APIRouter, Depends, Query, Request, Response

from assethub.config import settings
from assethub.core.dependencies import get_asset_service
from assethub.core.exceptions import NotFoundError
from assethub.core.headers import entity_alert, pagination_headers
from assethub.schemas.asset import AssetPayload, AssetResponse
from assethub.services.asset_service import AssetService

logger = logging.getLogger(__name__)

ENTITY_NAME = "asset"

router = APIRouter(prefix="/assets", tags=["assets"])


def _location(request: Request, asset_id: int) -> str:
    return f"{request.url.path.rstrip('/')}/{asset_id}"


@router.post("", response_model=AssetResponse, status_code=201)
async def create(
    body: AssetPayload,
    request: Request,
    response: Response,
    service: AssetService = Depends(get_asset_service),
):
    asset = await service.handle_create(body)
    response.headers["Location"] = _location(request, asset.id)
    response.headers.update(entity_alert("created", ENTITY_NAME, str(asset.id)))
    return asset


@router.put("", response_model=AssetResponse)
async def update(
    body: AssetPayload,
    request: Request,
    response: Response,
    service: AssetService = Depends(get_asset_service),
):
    creating = body.id is None
    asset = await service.handle_update(body)
    if creating:
        response.status_code = 201
        response.headers["Location"] = _location(request, asset.id)
        response.headers.update(entity_alert("created", ENTITY_NAME, str(asset.id)))
    else:
        response.headers.update(entity_alert("updated", ENTITY_NAME, str(asset.id)))
    return asset


@router.get("", response_model=list[AssetResponse])
async def list_all(
    request: Request,
    response: Response,
    page: int = Query(0, ge=0),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    service: AssetService = Depends(get_asset_service),
):
    result = await service.handle_list(page, size)
    response.headers.update(
        pagination_headers(request.url.path, result.page, result.size, result.total)
    )
    return result.items


@router.get("/{asset_id}", response_model=AssetResponse)
async def get_one(asset_id: int, service: AssetService = Depends(get_asset_service)):
    asset = await service.handle_get(asset_id)
    if asset is None:
        raise NotFoundError(f"Asset {asset_id} not found")
    return asset


@router.delete("/{asset_id}")
async def delete(asset_id: int, service: AssetService = Depends(get_asset_service)):
    await service.handle_delete(asset_id)
    return Response(status_code=200, headers=entity_alert("deleted", ENTITY_NAME, str(asset_id)))
