from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AssetFields(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    name: str
    name_short: str | None = None
    description: str | None = None
    domain: str | None = None
    last_modified_by: str | None = None
    status: str | None = None


class AssetPayload(AssetFields):
    """Request body for POST/PUT. ``id`` must be absent on create and present on update."""

    id: int | None = None


class AssetResponse(AssetFields):
    id: int


class AssetPage(BaseModel):
    items: list[AssetResponse]
    total: int
    page: int
    size: int
