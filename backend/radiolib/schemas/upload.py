from pydantic import BaseModel


class UploadLinkResponse(BaseModel):
    upload_url: str
    authorization_token: str


class UploadResponse(BaseModel):
    file_id: str
    file_name: str
    file_url: str
    content_sha1: str
    duration: int = 0
