from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

SortOption = Literal["name-asc", "name-desc", "date-asc", "date-desc"]
RecordingTypeFilter = Literal["all", "live", "podcast"]
RecordingStatusFilter = Literal["all", "published", "hidden"]


class FilterState(BaseModel):
    """Shared search/filter/sort state for every list view.

    Serialized with camelCase keys (``searchQuery``, ``sortBy``...) so state
    saved by the web client round-trips unchanged.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    search_query: str = ""
    sort_by: SortOption = "date-desc"

    programs_with_host: bool = False
    programs_without_host: bool = False

    people_with_telegram: bool = False
    people_without_telegram: bool = False

    recording_type: RecordingTypeFilter = "all"
    recording_status: RecordingStatusFilter = "all"
    selected_genres: tuple[str, ...] = ()
    selected_programs: tuple[str, ...] = ()


class FilterStateUpdate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    search_query: str | None = None
    sort_by: SortOption | None = None
    programs_with_host: bool | None = None
    programs_without_host: bool | None = None
    people_with_telegram: bool | None = None
    people_without_telegram: bool | None = None
    recording_type: RecordingTypeFilter | None = None
    recording_status: RecordingStatusFilter | None = None
    selected_genres: list[str] | None = None
    selected_programs: list[str] | None = None
