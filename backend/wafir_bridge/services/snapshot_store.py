"""Screenshot uploads to S3 ("SnapStore")."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Optional

import boto3
from starlette.concurrency import run_in_threadpool

from wafir_bridge.config import Settings

logger = logging.getLogger(__name__)


class SnapshotStore:
    def __init__(self, bucket_name: str, region: Optional[str] = None, client: Any = None) -> None:
        self.bucket_name = bucket_name
        self.region = region
        self._s3 = client or boto3.client("s3", region_name=region)

    def public_url(self, key: str) -> str:
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{key}"

    def _put(self, key: str, data: bytes, content_type: str) -> None:
        self._s3.put_object(
            Bucket=self.bucket_name,
            Key=key,
            Body=data,
            ContentType=content_type,
        )

    async def upload(self, data: bytes, content_type: str = "image/png") -> str:
        """Upload a screenshot and return its public URL."""
        key = f"snapshots/{uuid.uuid4()}.png"
        await run_in_threadpool(self._put, key, data, content_type)
        logger.info(f"Uploaded screenshot to s3://{self.bucket_name}/{key}")
        return self.public_url(key)


def build_snapshot_store(config: Settings) -> Optional[SnapshotStore]:
    if not config.S3_BUCKET_NAME:
        logger.warning("S3_BUCKET_NAME not set, screenshots will not be uploaded")
        return None
    return SnapshotStore(bucket_name=config.S3_BUCKET_NAME, region=config.AWS_REGION)
