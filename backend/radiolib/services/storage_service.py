"""Audio upload to Backblaze B2 (native API), with a local-disk fallback.

Two phases, no retries: fetch an upload URL + token for the bucket, then
POST the raw bytes to that URL with the file's SHA-1. A failure in either
phase aborts the upload and the caller starts over.
"""
import hashlib
import logging
import os
import uuid
from urllib.parse import quote

import httpx

from radiolib.config import settings
from radiolib.core.exceptions import BadRequestError, UploadError

logger = logging.getLogger(__name__)

MP3_CONTENT_TYPE = "audio/mpeg"


def is_mp3(filename: str | None, content_type: str | None) -> bool:
    return MP3_CONTENT_TYPE in (content_type or "") or (filename or "").lower().endswith(".mp3")


def sha1_hex(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()


async def get_upload_link() -> dict:
    """Authorize the account and request an upload URL for the configured bucket."""
    if not settings.b2_enabled:
        raise UploadError("Missing Backblaze configuration")

    async with httpx.AsyncClient(timeout=30.0) as client:
        auth_resp = await client.get(
            f"{settings.B2_API_URL}/b2api/v2/b2_authorize_account",
            auth=(settings.B2_ACCOUNT_ID, settings.B2_APP_KEY),
        )
        if auth_resp.status_code >= 400:
            logger.warning("B2 authorization failed (%d): %s", auth_resp.status_code, auth_resp.text[:200])
            raise UploadError(f"Auth failed: {auth_resp.text}")
        auth_data = auth_resp.json()

        upload_resp = await client.post(
            f"{auth_data['apiUrl']}/b2api/v2/b2_get_upload_url",
            headers={"Authorization": auth_data["authorizationToken"]},
            json={"bucketId": settings.B2_BUCKET_ID},
        )
        if upload_resp.status_code >= 400:
            logger.warning("B2 get_upload_url failed (%d): %s", upload_resp.status_code, upload_resp.text[:200])
            raise UploadError(f"Failed to get upload URL: {upload_resp.text}")
        upload_data = upload_resp.json()

    return {
        "upload_url": upload_data["uploadUrl"],
        "authorization_token": upload_data["authorizationToken"],
        "download_url": auth_data.get("downloadUrl", ""),
    }


def public_file_url(file_name: str, download_url: str = "") -> str:
    base = settings.B2_DOWNLOAD_URL or download_url
    return f"{base.rstrip('/')}/file/{settings.B2_BUCKET_NAME}/{quote(file_name)}"


async def _b2_upload(data: bytes, file_name: str, content_type: str, content_sha1: str) -> dict:
    link = await get_upload_link()
    headers = {
        "Authorization": link["authorization_token"],
        "X-Bz-File-Name": quote(file_name),
        "X-Bz-Content-Sha1": content_sha1,
        "Content-Type": content_type or "application/octet-stream",
    }
    async with httpx.AsyncClient(timeout=60.0) as client:
        resp = await client.post(link["upload_url"], content=data, headers=headers)
    if resp.status_code >= 400:
        logger.warning("B2 upload of %s failed (%d): %s", file_name, resp.status_code, resp.text[:200])
        raise UploadError("File upload failed")
    body = resp.json()
    stored_name = body.get("fileName", file_name)
    logger.info("Uploaded %s to B2 (%d bytes)", stored_name, len(data))
    return {
        "file_id": body["fileId"],
        "file_name": stored_name,
        "file_url": public_file_url(stored_name, link["download_url"]),
    }


def _local_upload(data: bytes, file_name: str) -> dict:
    key = f"recordings/{uuid.uuid4()}/{file_name}"
    path = os.path.join(settings.UPLOAD_DIR, key)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(data)
    logger.info("Stored %s locally (%d bytes)", path, len(data))
    return {"file_id": key, "file_name": file_name, "file_url": f"/{settings.UPLOAD_DIR}/{key}"}


async def upload_audio(data: bytes, filename: str, content_type: str | None = None) -> dict:
    if not is_mp3(filename, content_type):
        raise BadRequestError("Please choose an MP3 file")
    if not data:
        raise BadRequestError("Uploaded file is empty")

    content_sha1 = sha1_hex(data)
    file_name = os.path.basename(filename)
    if settings.b2_enabled:
        stored = await _b2_upload(data, file_name, content_type or MP3_CONTENT_TYPE, content_sha1)
    else:
        stored = _local_upload(data, file_name)
    stored["content_sha1"] = content_sha1
    return stored
