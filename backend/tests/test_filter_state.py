import uuid

import pytest
from httpx import AsyncClient

from radiolib.schemas.filters import FilterState
from radiolib.services.filter_state import (
    DEFAULT_FILTERS,
    ResetFilters,
    UpdateFilters,
    dump_filter_state,
    load_filter_state,
    reduce_filters,
)


def test_load_empty_gives_defaults():
    assert load_filter_state(None) == DEFAULT_FILTERS
    assert load_filter_state({}) == DEFAULT_FILTERS


def test_load_accepts_camel_case_and_drops_unknown_keys():
    state = load_filter_state({"searchQuery": "jazz", "sortBy": "name-asc", "legacyOption": True})
    assert state.search_query == "jazz"
    assert state.sort_by == "name-asc"


def test_load_replaces_invalid_values_field_by_field():
    state = load_filter_state({"sortBy": "random", "recordingType": "podcast", "selectedGenres": 12})
    assert state.sort_by == "date-desc"
    assert state.recording_type == "podcast"
    assert state.selected_genres == ()


def test_dump_round_trips_through_load():
    state = FilterState(search_query="утро", people_with_telegram=True, selected_programs=("a", "b"))
    dumped = dump_filter_state(state)
    assert dumped["searchQuery"] == "утро"
    assert dumped["selectedPrograms"] == ["a", "b"]
    assert load_filter_state(dumped) == state


def test_reduce_update_merges_without_mutating():
    state = FilterState(search_query="jazz")
    new_state = reduce_filters(state, UpdateFilters({"sortBy": "name-desc"}))
    assert new_state.search_query == "jazz"
    assert new_state.sort_by == "name-desc"
    assert state.sort_by == "date-desc"


def test_reduce_reset_restores_defaults():
    state = FilterState(search_query="jazz", recording_status="hidden")
    assert reduce_filters(state, ResetFilters()) == DEFAULT_FILTERS


def test_reduce_rejects_unknown_action():
    with pytest.raises(TypeError):
        reduce_filters(DEFAULT_FILTERS, object())


@pytest.mark.asyncio
async def test_filters_api_round_trip(client: AsyncClient, auth_headers: dict):
    response = await client.get("/api/v1/filters", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["sortBy"] == "date-desc"
    assert response.json()["peopleWithTelegram"] is False

    genre_id = str(uuid.uuid4())
    response = await client.patch(
        "/api/v1/filters",
        json={"searchQuery": "утро", "selectedGenres": [genre_id]},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["searchQuery"] == "утро"

    response = await client.get("/api/v1/filters", headers=auth_headers)
    assert response.json()["selectedGenres"] == [genre_id]

    response = await client.delete("/api/v1/filters", headers=auth_headers)
    assert response.json()["searchQuery"] == ""
    assert response.json()["selectedGenres"] == []


@pytest.mark.asyncio
async def test_filters_are_per_user(client: AsyncClient, auth_headers: dict, user_headers: dict):
    await client.patch("/api/v1/filters", json={"searchQuery": "jazz"}, headers=auth_headers)

    response = await client.get("/api/v1/filters", headers=user_headers)
    assert response.json()["searchQuery"] == ""


@pytest.mark.asyncio
async def test_filters_reject_invalid_sort(client: AsyncClient, auth_headers: dict):
    response = await client.patch("/api/v1/filters", json={"sortBy": "random"}, headers=auth_headers)
    assert response.status_code == 422
