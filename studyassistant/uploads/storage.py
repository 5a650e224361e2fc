"""
Object storage for uploaded lecture files.

Two interchangeable backends selected by STORAGE_BACKEND:
- local: files under UPLOAD_DIR, served back as file:// urls
- s3: boto3 put_object/delete_object against S3_BUCKET
"""

import logging
import os
import secrets
import time
from dataclasses import dataclass
from pathlib import Path

import boto3
from botocore.exceptions import ClientError

from studyassistant.config import Settings

logger = logging.getLogger(__name__)


@dataclass
class StoredFile:
    key: str
    url: str
    resource_type: str


def _resource_type(content_type: str) -> str:
    return "image" if (content_type or "").startswith("image/") else "raw"


def _unique_name(filename: str) -> str:
    ext = os.path.splitext(filename or "")[1].lower()
    return f"{int(time.time() * 1000)}-{secrets.token_hex(16)}{ext}"


class LocalStorage:
    def __init__(self, root: str | Path, folder: str = "lectures"):
        self.root = Path(root)
        self.folder = folder

    def save(self, data: bytes, filename: str, content_type: str) -> StoredFile:
        key = f"{self.folder}/{_unique_name(filename)}"
        path = self.root / key
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.info(f"Stored upload locally: {key} ({len(data)} bytes)")
        return StoredFile(key=key, url=path.resolve().as_uri(), resource_type=_resource_type(content_type))

    def delete(self, key: str) -> None:
        path = self.root / key
        if path.exists():
            path.unlink()
            logger.info(f"Deleted stored file: {key}")
        else:
            logger.info(f"File not found or already deleted: {key}")


class S3Storage:
    def __init__(self, bucket: str, region: str, prefix: str = "lectures", client=None):
        self.bucket = bucket
        self.region = region
        self.prefix = prefix
        self.client = client or boto3.client("s3", region_name=region)

    def _url(self, key: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def save(self, data: bytes, filename: str, content_type: str) -> StoredFile:
        key = f"{self.prefix}/{_unique_name(filename)}"
        self.client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=data,
            ContentType=content_type or "application/octet-stream",
        )
        logger.info(f"S3 upload success: {key} ({len(data)} bytes)")
        return StoredFile(key=key, url=self._url(key), resource_type=_resource_type(content_type))

    def delete(self, key: str) -> None:
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
            logger.info(f"Deleted S3 object: {key}")
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("404", "NoSuchKey"):
                logger.info(f"S3 object not found or already deleted: {key}")
                return
            raise


def build_storage(settings: Settings):
    backend = (settings.storage_backend or "local").lower()
    if backend == "s3":
        if not settings.s3_bucket:
            raise ValueError("STORAGE_BACKEND=s3 requires S3_BUCKET")
        return S3Storage(settings.s3_bucket, settings.s3_region, settings.s3_prefix)
    if backend == "local":
        return LocalStorage(settings.upload_dir)
    raise ValueError(f"Unknown STORAGE_BACKEND '{settings.storage_backend}'")
