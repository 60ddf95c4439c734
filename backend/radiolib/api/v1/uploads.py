import logging

from fastapi import APIRouter, Depends, File, UploadFile

from radiolib.config import settings
from radiolib.core.dependencies import get_current_user
from radiolib.core.exceptions import BadRequestError
from radiolib.models.user import User
from radiolib.schemas.upload import UploadLinkResponse, UploadResponse
from radiolib.services.media_service import read_duration
from radiolib.services.storage_service import get_upload_link, upload_audio

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.get("/link", response_model=UploadLinkResponse)
async def upload_link(_user: User = Depends(get_current_user)):
    """Upload URL and token for a direct client-side upload to the bucket."""
    return await get_upload_link()


@router.post("", response_model=UploadResponse, status_code=201)
async def upload(
    file: UploadFile = File(...),
    _user: User = Depends(get_current_user),
):
    data = await file.read()
    if len(data) > settings.UPLOAD_MAX_BYTES:
        raise BadRequestError("File too large")

    stored = await upload_audio(data, file.filename or "upload.mp3", file.content_type)
    stored["duration"] = await read_duration(data)
    logger.info("Upload %s done, duration %ss", stored["file_name"], stored["duration"])
    return stored
