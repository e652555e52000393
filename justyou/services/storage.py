# justyou/services/storage.py
"""
File storage for story images and uploaded resumes.

S3-compatible object storage (Cloudflare R2, or MinIO in development) when
configured, otherwise the local filesystem under LOCAL_UPLOAD_DIR. Keys have
the shape ``<prefix>/<uuid><ext>`` in both cases.
"""
import logging
import uuid
from pathlib import Path
from typing import Optional

import aiofiles
import boto3
from botocore.client import Config
from botocore.exceptions import ClientError
from fastapi import UploadFile

from justyou.core.config import settings

logger = logging.getLogger(__name__)

# S3v4 presigned URLs are capped at seven days
MAX_PRESIGN_SECONDS = 7 * 24 * 3600


def _local_path(key: str) -> Path:
    root = Path(settings.LOCAL_UPLOAD_DIR).resolve()
    path = (root / key).resolve()
    if root not in path.parents:
        raise ValueError(f"Invalid storage key: {key}")
    return path


def _get_s3_client():
    """
    Return a boto3 S3 client configured for Cloudflare R2 or MinIO.
    If no endpoint or credentials are configured, returns None.
    """
    endpoint = settings.S3_ENDPOINT
    access_key = settings.S3_ACCESS_KEY
    secret_key = settings.S3_SECRET_KEY

    # If we have MinIO specific env set and S3 provider is minio, prefer that
    if settings.S3_PROVIDER and settings.S3_PROVIDER.lower() == "minio" and settings.MINIO_ENDPOINT:
        endpoint = settings.MINIO_ENDPOINT
        access_key = settings.MINIO_ACCESS_KEY
        secret_key = settings.MINIO_SECRET_KEY

    if not endpoint or not access_key or not secret_key:
        return None

    # Use signature s3v4 for compatibility (Cloudflare R2 & MinIO)
    return boto3.client(
        "s3",
        endpoint_url=str(endpoint),
        aws_access_key_id=access_key,
        aws_secret_access_key=secret_key,
        config=Config(signature_version="s3v4"),
        region_name=(settings.S3_REGION or None),
    )


def ensure_bucket(client, bucket: str) -> bool:
    """
    Ensure the bucket exists. For MinIO this may be necessary in dev.
    Returns True if bucket exists or was created successfully.
    """
    if client is None:
        return False
    try:
        client.head_bucket(Bucket=bucket)
        return True
    except ClientError:
        # R2 buckets are created in the Cloudflare dashboard; MinIO accepts this
        try:
            client.create_bucket(Bucket=bucket)
            return True
        except ClientError:
            return False


def make_key(filename: Optional[str], prefix: str = "") -> str:
    ext = Path(filename or "").suffix.lower()
    name = f"{uuid.uuid4().hex}{ext}"
    prefix = prefix.strip("/")
    return f"{prefix}/{name}" if prefix else name


async def store_file(
    file: UploadFile,
    prefix: str = "",
    bucket: Optional[str] = None,
    contents: Optional[bytes] = None,
) -> str:
    """
    Store an upload in object storage, falling back to the local filesystem.
    Pass ``contents`` when the caller has already read the upload.
    Returns the storage key.
    """
    if contents is None:
        contents = await file.read()
    key = make_key(file.filename, prefix)
    bucket = bucket or settings.S3_BUCKET

    s3 = _get_s3_client()
    if s3 and bucket:
        try:
            ensure_bucket(s3, bucket)
            s3.put_object(Bucket=bucket, Key=key, Body=contents, ContentType=file.content_type or "application/octet-stream")
            return key
        except Exception:
            logger.warning("S3 upload of %s failed, falling back to local storage", key, exc_info=True)

    local_path = _local_path(key)
    local_path.parent.mkdir(parents=True, exist_ok=True)
    async with aiofiles.open(local_path, "wb") as out:
        await out.write(contents)
    return key


def generate_presigned_url(key: str, expires_in: int = 3600, bucket: Optional[str] = None) -> Optional[str]:
    """
    Presigned GET URL for S3-compatible providers, file:// URL for local files.
    """
    bucket = bucket or settings.S3_BUCKET
    expires_in = min(expires_in, MAX_PRESIGN_SECONDS)
    s3 = _get_s3_client()
    if s3 and bucket:
        try:
            return s3.generate_presigned_url(
                "get_object",
                Params={"Bucket": bucket, "Key": key},
                ExpiresIn=expires_in,
            )
        except Exception:
            logger.warning("generate_presigned_url failed for %s", key, exc_info=True)
            return None

    p = _local_path(key)
    if p.exists():
        return p.as_uri()
    return None


def delete_object(key: str, bucket: Optional[str] = None) -> bool:
    """
    Delete object from S3 (or local file). Returns True on success.
    """
    bucket = bucket or settings.S3_BUCKET
    s3 = _get_s3_client()
    if s3 and bucket:
        try:
            s3.delete_object(Bucket=bucket, Key=key)
            return True
        except Exception:
            logger.warning("S3 delete failed for %s", key, exc_info=True)
            return False

    try:
        _local_path(key).unlink(missing_ok=True)
        return True
    except (OSError, ValueError):
        logger.warning("Local delete failed for %s", key, exc_info=True)
        return False
