# Schemas package
from assethub.schemas.asset import AssetFields, AssetPage, AssetPayload, AssetResponse
from assethub.schemas.job import JobResultResponse, TaskStatusResponse

__all__ = [
    "AssetFields",
    "AssetPage",
    "AssetPayload",
    "AssetResponse",
    "JobResultResponse",
    "TaskStatusResponse",
]
