# app/core/storage.py

import uuid
from typing import Dict, Optional

from fastapi import UploadFile
from loguru import logger
from supabase import create_client, Client

from app.core.config import settings
from app.core.constants import MAX_UPLOAD_SIZE
from app.core.exceptions import PortalError, ValidationError


class StorageUnavailableError(PortalError):
    status_code = 503
    code = "STORAGE_UNAVAILABLE"


# Client is created lazily so the API boots without storage credentials
_client: Optional[Client] = None


def get_storage_client() -> Optional[Client]:
    global _client
    if _client is None and settings.SUPABASE_URL and settings.SUPABASE_KEY:
        try:
            _client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
        except Exception as e:
            logger.error(f"Supabase init failed: {e}")
            _client = None
    return _client


async def upload_file(
    file: UploadFile,
    folder: str,
    allowed_types: Dict[str, str],
) -> str:
    """
    Uploads a file to the storage bucket and returns its internal path.
    - Content type must be one of allowed_types (maps MIME type -> extension).
    - The caller's filename is ignored; a UUID name is generated.
    Only this path is persisted; the bytes never touch the database.
    """
    if file.content_type not in allowed_types:
        allowed = ", ".join(sorted(allowed_types))
        raise ValidationError(f"Unsupported file type '{file.content_type}'. Allowed: {allowed}")

    content = await file.read()
    if len(content) > MAX_UPLOAD_SIZE:
        raise ValidationError(
            f"File too large. Maximum size is {MAX_UPLOAD_SIZE // (1024 * 1024)}MB."
        )
    await file.seek(0)

    client = get_storage_client()
    if client is None:
        logger.error("Storage credentials missing (SUPABASE_URL / SUPABASE_KEY)")
        raise StorageUnavailableError("Storage service unavailable.")

    file_path = f"{folder}/{uuid.uuid4()}.{allowed_types[file.content_type]}"

    try:
        client.storage.from_(settings.STORAGE_BUCKET).upload(
            path=file_path,
            file=content,
            file_options={"content-type": file.content_type, "upsert": "true"},
        )
    except Exception as e:
        logger.exception(f"Storage upload failed for {file_path}: {e}")
        raise StorageUnavailableError("Failed to upload file to cloud storage.")

    logger.info(f"Uploaded {file_path} ({len(content)} bytes)")
    return file_path


def get_signed_url(file_path: str, expiration: int = 3600) -> Optional[str]:
    """Temporary link for a private object. None when unavailable."""
    client = get_storage_client()
    if not file_path or client is None:
        return None

    try:
        response = client.storage.from_(settings.STORAGE_BUCKET).create_signed_url(
            file_path, expiration
        )
    except Exception as e:
        logger.warning(f"Failed to sign URL for {file_path}: {e}")
        return None

    # SDK versions differ in the key casing
    if isinstance(response, dict):
        return response.get("signedURL") or response.get("signedUrl")
    return getattr(response, "signedURL", None) or str(response)


def require_signed_url(file_path: str, expiration: int = 3600) -> str:
    """Like get_signed_url, but a missing link is a 503 for the caller."""
    url = get_signed_url(file_path, expiration)
    if not url:
        raise StorageUnavailableError("Storage service unavailable.")
    return url
