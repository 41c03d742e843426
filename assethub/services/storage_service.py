import asyncio
import logging
import os

from assethub.config import settings

logger = logging.getLogger(__name__)


def local_object_path(bucket: str, key: str) -> str:
    return os.path.join(settings.LOCAL_STORAGE_DIR, bucket, key)


def _read_bytes(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


async def download_file(bucket: str, key: str) -> bytes:
    if settings.s3_enabled:
        import aioboto3
        session = aioboto3.Session()
        async with session.client(
            "s3",
            endpoint_url=settings.S3_ENDPOINT_URL or None,
            aws_access_key_id=settings.S3_ACCESS_KEY,
            aws_secret_access_key=settings.S3_SECRET_KEY,
            region_name=settings.S3_REGION,
        ) as s3:
            response = await s3.get_object(Bucket=bucket, Key=key)
            data = await response["Body"].read()
    else:
        data = await asyncio.to_thread(_read_bytes, local_object_path(bucket, key))
    logger.info("Downloaded %s/%s (%d bytes)", bucket, key, len(data))
    return data
