import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_genre_crud(client: AsyncClient, auth_headers: dict):
    response = await client.post("/api/v1/genres", json={"name": "Jazz"}, headers=auth_headers)
    assert response.status_code == 201
    genre_id = response.json()["id"]

    response = await client.patch(f"/api/v1/genres/{genre_id}", json={"name": "Smooth Jazz"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "Smooth Jazz"

    response = await client.get(f"/api/v1/genres/{genre_id}", headers=auth_headers)
    assert response.json()["name"] == "Smooth Jazz"

    response = await client.delete(f"/api/v1/genres/{genre_id}", headers=auth_headers)
    assert response.status_code == 204

    response = await client.get(f"/api/v1/genres/{genre_id}", headers=auth_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_genres_sorted_and_searched(client: AsyncClient, auth_headers: dict):
    for name in ["Рок", "Ambient", "Джаз"]:
        await client.post("/api/v1/genres", json={"name": name}, headers=auth_headers)

    response = await client.get("/api/v1/genres", headers=auth_headers)
    data = response.json()
    assert data["total"] == 3
    assert [g["name"] for g in data["genres"]] == ["Ambient", "Джаз", "Рок"]

    await client.patch("/api/v1/filters", json={"searchQuery": "джа"}, headers=auth_headers)
    response = await client.get("/api/v1/genres", headers=auth_headers)
    assert [g["name"] for g in response.json()["genres"]] == ["Джаз"]


@pytest.mark.asyncio
async def test_regular_user_cannot_delete_genre(client: AsyncClient, user_headers: dict):
    genre_id = (await client.post("/api/v1/genres", json={"name": "Jazz"}, headers=user_headers)).json()["id"]
    response = await client.delete(f"/api/v1/genres/{genre_id}", headers=user_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_deleting_genre_detaches_recordings(client: AsyncClient, auth_headers: dict):
    program = (await client.post("/api/v1/programs", json={"name": "Jazz Hour"}, headers=auth_headers)).json()
    genre = (await client.post("/api/v1/genres", json={"name": "Jazz"}, headers=auth_headers)).json()
    created = await client.post(
        "/api/v1/recordings",
        json={
            "program_id": program["id"],
            "episode_title": "Episode 1",
            "release_date": "2024-03-01",
            "file_url": "https://files.example.com/ep1.mp3",
            "genre_ids": [genre["id"]],
        },
        headers=auth_headers,
    )
    recording_id = created.json()["id"]

    await client.delete(f"/api/v1/genres/{genre['id']}", headers=auth_headers)

    form = (await client.get(f"/api/v1/recordings/{recording_id}", headers=auth_headers)).json()
    assert form["genre_ids"] == []
