import hashlib
import os
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from httpx import AsyncClient

from radiolib.config import settings
from radiolib.core.exceptions import BadRequestError, UploadError
from radiolib.services.storage_service import get_upload_link, is_mp3, upload_audio

MP3_BYTES = b"ID3\x04\x00\x00\x00\x00\x00\x00fake-frames"


class FakeB2Client:
    """Stands in for httpx.AsyncClient; replays canned responses in order."""

    def __init__(self, responses: list[httpx.Response]):
        self.responses = responses
        self.calls: list[tuple[str, str, dict]] = []

    def __call__(self, *args, **kwargs):
        return self

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def get(self, url, **kwargs):
        self.calls.append(("GET", url, kwargs))
        return self.responses.pop(0)

    async def post(self, url, **kwargs):
        self.calls.append(("POST", url, kwargs))
        return self.responses.pop(0)


@pytest.fixture
def b2_settings(monkeypatch):
    monkeypatch.setattr(settings, "B2_ACCOUNT_ID", "account")
    monkeypatch.setattr(settings, "B2_APP_KEY", "secret")
    monkeypatch.setattr(settings, "B2_BUCKET_ID", "bucket-id")
    monkeypatch.setattr(settings, "B2_BUCKET_NAME", "radio-files")
    monkeypatch.setattr(settings, "B2_DOWNLOAD_URL", "")


def _auth_ok() -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "apiUrl": "https://api001.example.com",
            "authorizationToken": "account-token",
            "downloadUrl": "https://f001.example.com",
        },
    )


def _upload_url_ok() -> httpx.Response:
    return httpx.Response(
        200,
        json={"uploadUrl": "https://pod-001.example.com/upload", "authorizationToken": "upload-token"},
    )


def test_is_mp3():
    assert is_mp3("show.MP3", None)
    assert is_mp3("blob", "audio/mpeg")
    assert not is_mp3("show.wav", "audio/wav")


@pytest.mark.asyncio
async def test_upload_link_requires_configuration(monkeypatch):
    monkeypatch.setattr(settings, "B2_ACCOUNT_ID", "")
    with pytest.raises(UploadError):
        await get_upload_link()


@pytest.mark.asyncio
async def test_upload_link_two_calls(b2_settings):
    fake = FakeB2Client([_auth_ok(), _upload_url_ok()])
    with patch("radiolib.services.storage_service.httpx.AsyncClient", fake):
        link = await get_upload_link()

    assert link["upload_url"] == "https://pod-001.example.com/upload"
    assert link["authorization_token"] == "upload-token"

    method, url, kwargs = fake.calls[0]
    assert (method, url) == ("GET", "https://api.backblazeb2.com/b2api/v2/b2_authorize_account")
    assert kwargs["auth"] == ("account", "secret")

    method, url, kwargs = fake.calls[1]
    assert url == "https://api001.example.com/b2api/v2/b2_get_upload_url"
    assert kwargs["headers"] == {"Authorization": "account-token"}
    assert kwargs["json"] == {"bucketId": "bucket-id"}


@pytest.mark.asyncio
async def test_upload_link_auth_failure_carries_response_text(b2_settings):
    fake = FakeB2Client([httpx.Response(401, text="bad_auth_token")])
    with patch("radiolib.services.storage_service.httpx.AsyncClient", fake):
        with pytest.raises(UploadError) as exc_info:
            await get_upload_link()
    assert "bad_auth_token" in exc_info.value.detail
    assert len(fake.calls) == 1


@pytest.mark.asyncio
async def test_upload_audio_posts_bytes_with_sha1(b2_settings):
    fake = FakeB2Client([
        _auth_ok(),
        _upload_url_ok(),
        httpx.Response(200, json={"fileId": "4_z123", "fileName": "my show.mp3"}),
    ])
    with patch("radiolib.services.storage_service.httpx.AsyncClient", fake):
        stored = await upload_audio(MP3_BYTES, "my show.mp3", "audio/mpeg")

    method, url, kwargs = fake.calls[2]
    assert url == "https://pod-001.example.com/upload"
    assert kwargs["content"] == MP3_BYTES
    assert kwargs["headers"]["Authorization"] == "upload-token"
    assert kwargs["headers"]["X-Bz-File-Name"] == "my%20show.mp3"
    assert kwargs["headers"]["X-Bz-Content-Sha1"] == hashlib.sha1(MP3_BYTES).hexdigest()
    assert kwargs["headers"]["Content-Type"] == "audio/mpeg"

    assert stored["file_id"] == "4_z123"
    assert stored["file_url"] == "https://f001.example.com/file/radio-files/my%20show.mp3"
    assert stored["content_sha1"] == hashlib.sha1(MP3_BYTES).hexdigest()


@pytest.mark.asyncio
async def test_upload_audio_failure_is_not_retried(b2_settings):
    fake = FakeB2Client([_auth_ok(), _upload_url_ok(), httpx.Response(503, text="service_unavailable")])
    with patch("radiolib.services.storage_service.httpx.AsyncClient", fake):
        with pytest.raises(UploadError):
            await upload_audio(MP3_BYTES, "show.mp3", "audio/mpeg")
    assert len(fake.calls) == 3


@pytest.mark.asyncio
async def test_upload_audio_rejects_non_mp3():
    with pytest.raises(BadRequestError):
        await upload_audio(b"RIFF....", "show.wav", "audio/wav")


@pytest.mark.asyncio
async def test_upload_audio_local_fallback(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "B2_ACCOUNT_ID", "")
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))

    stored = await upload_audio(MP3_BYTES, "show.mp3", "audio/mpeg")

    assert stored["file_name"] == "show.mp3"
    path = os.path.join(str(tmp_path), stored["file_id"])
    with open(path, "rb") as f:
        assert f.read() == MP3_BYTES


@pytest.mark.asyncio
async def test_upload_endpoint(client: AsyncClient, auth_headers: dict, monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "B2_ACCOUNT_ID", "")
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))

    with patch("radiolib.api.v1.uploads.read_duration", new=AsyncMock(return_value=181)):
        response = await client.post(
            "/api/v1/uploads",
            files={"file": ("show.mp3", MP3_BYTES, "audio/mpeg")},
            headers=auth_headers,
        )
    assert response.status_code == 201
    data = response.json()
    assert data["file_name"] == "show.mp3"
    assert data["duration"] == 181
    assert data["content_sha1"] == hashlib.sha1(MP3_BYTES).hexdigest()


@pytest.mark.asyncio
async def test_upload_endpoint_rejects_non_mp3(client: AsyncClient, auth_headers: dict):
    response = await client.post(
        "/api/v1/uploads",
        files={"file": ("show.wav", b"RIFF....", "audio/wav")},
        headers=auth_headers,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_upload_link_endpoint_without_configuration(client: AsyncClient, auth_headers: dict, monkeypatch):
    monkeypatch.setattr(settings, "B2_ACCOUNT_ID", "")
    response = await client.get("/api/v1/uploads/link", headers=auth_headers)
    assert response.status_code == 502
