import pytest
from httpx import AsyncClient


async def _create_program(client: AsyncClient, headers: dict, **body) -> dict:
    response = await client.post("/api/v1/programs", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_program_derives_slug(client: AsyncClient, auth_headers: dict):
    program = await _create_program(client, auth_headers, name="Утренний Кофе")
    assert program["slug"] == "utrenniy-kofe"
    assert program["host"] is None


@pytest.mark.asyncio
async def test_create_program_cleans_given_slug(client: AsyncClient, auth_headers: dict):
    program = await _create_program(client, auth_headers, name="Morning", slug="  My Custom Slug!! ")
    assert program["slug"] == "my-custom-slug"


@pytest.mark.asyncio
async def test_create_program_with_unusable_name(client: AsyncClient, auth_headers: dict):
    response = await client.post("/api/v1/programs", json={"name": "!!!"}, headers=auth_headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_create_program_with_host(client: AsyncClient, auth_headers: dict):
    person = (await client.post("/api/v1/people", json={"name": "Anna"}, headers=auth_headers)).json()
    program = await _create_program(client, auth_headers, name="Night Talk", host_id=person["id"])
    assert program["host_id"] == person["id"]
    assert program["host"]["name"] == "Anna"
    assert program["host_name"] == "Anna"


@pytest.mark.asyncio
async def test_create_program_with_unknown_host(client: AsyncClient, auth_headers: dict):
    response = await client.post(
        "/api/v1/programs",
        json={"name": "Night Talk", "host_id": "00000000-0000-0000-0000-000000000000"},
        headers=auth_headers,
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_get_program_by_slug(client: AsyncClient, auth_headers: dict):
    program = await _create_program(client, auth_headers, name="Jazz Hour")
    response = await client.get("/api/v1/programs/by-slug/jazz-hour", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["id"] == program["id"]

    response = await client.get("/api/v1/programs/by-slug/nothing-here", headers=auth_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_rename_program_keeps_slug(client: AsyncClient, auth_headers: dict):
    program = await _create_program(client, auth_headers, name="Jazz Hour")
    response = await client.patch(
        f"/api/v1/programs/{program['id']}",
        json={"name": "Blues Hour"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Blues Hour"
    assert response.json()["slug"] == "jazz-hour"

    response = await client.patch(
        f"/api/v1/programs/{program['id']}",
        json={"description": "Late night"},
        headers=auth_headers,
    )
    assert response.json()["description"] == "Late night"
    assert response.json()["name"] == "Blues Hour"


@pytest.mark.asyncio
async def test_blank_slug_on_update_is_derived_from_name(client: AsyncClient, auth_headers: dict):
    program = await _create_program(client, auth_headers, name="Jazz Hour")
    response = await client.patch(
        f"/api/v1/programs/{program['id']}",
        json={"name": "Blues Hour", "slug": ""},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["slug"] == "blues-hour"


@pytest.mark.asyncio
async def test_programs_host_filter(client: AsyncClient, auth_headers: dict):
    person = (await client.post("/api/v1/people", json={"name": "Anna"}, headers=auth_headers)).json()
    await _create_program(client, auth_headers, name="Hosted", host_id=person["id"])
    await _create_program(client, auth_headers, name="Unhosted")

    response = await client.get("/api/v1/programs", headers=auth_headers)
    assert response.json()["matched"] == 2

    await client.patch("/api/v1/filters", json={"programsWithHost": True}, headers=auth_headers)
    response = await client.get("/api/v1/programs", headers=auth_headers)
    assert [p["name"] for p in response.json()["programs"]] == ["Hosted"]

    await client.patch(
        "/api/v1/filters",
        json={"programsWithHost": False, "programsWithoutHost": True},
        headers=auth_headers,
    )
    response = await client.get("/api/v1/programs", headers=auth_headers)
    assert [p["name"] for p in response.json()["programs"]] == ["Unhosted"]


@pytest.mark.asyncio
async def test_programs_search_by_host_name(client: AsyncClient, auth_headers: dict):
    person = (await client.post("/api/v1/people", json={"name": "Пётр"}, headers=auth_headers)).json()
    await _create_program(client, auth_headers, name="Evening", host_id=person["id"])
    await _create_program(client, auth_headers, name="Morning")

    await client.patch("/api/v1/filters", json={"searchQuery": "петр"}, headers=auth_headers)
    response = await client.get("/api/v1/programs", headers=auth_headers)
    data = response.json()
    assert data["total"] == 2
    assert [p["name"] for p in data["programs"]] == ["Evening"]


@pytest.mark.asyncio
async def test_delete_program(client: AsyncClient, auth_headers: dict):
    program = await _create_program(client, auth_headers, name="Jazz Hour")
    response = await client.delete(f"/api/v1/programs/{program['id']}", headers=auth_headers)
    assert response.status_code == 204

    response = await client.get(f"/api/v1/programs/{program['id']}", headers=auth_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_program_with_recordings_conflicts(client: AsyncClient, auth_headers: dict):
    program = await _create_program(client, auth_headers, name="Jazz Hour")
    await client.post(
        "/api/v1/recordings",
        json={
            "program_id": program["id"],
            "episode_title": "Episode 1",
            "release_date": "2024-03-01",
            "file_url": "https://files.example.com/ep1.mp3",
        },
        headers=auth_headers,
    )

    response = await client.delete(f"/api/v1/programs/{program['id']}", headers=auth_headers)
    assert response.status_code == 409
