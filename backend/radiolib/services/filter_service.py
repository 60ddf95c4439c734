"""Search, categorical filters and sorting for the admin list views.

Every function here is pure: the input list is copied, filtered and sorted,
never modified. The same ``FilterState`` drives all four entity kinds; each
kind only reads the fields that concern it.
"""
import re
from collections.abc import Callable, Iterable, Sequence
from datetime import date, datetime
from typing import Any, Literal

from radiolib.schemas.filters import FilterState

EntityKind = Literal["people", "programs", "genres", "recordings"]

_CYRILLIC = re.compile(r"[а-яё]", re.IGNORECASE)
_NOT_CYRILLIC_LETTER = re.compile(r"[^а-я]")


def _has_cyrillic(text: str) -> bool:
    return bool(_CYRILLIC.search(text))


def normalize_search_text(text: str, cyrillic: bool) -> str:
    """Lowercase; in Cyrillic mode also fold ё to е and drop everything but а-я."""
    text = text.lower()
    if cyrillic:
        text = _NOT_CYRILLIC_LETTER.sub("", text.replace("ё", "е"))
    return text


def collation_key(text: str | None) -> tuple[str, str]:
    # Russian collation puts ё with е; casefold for case-insensitive ordering
    value = text or ""
    return value.casefold().replace("ё", "е"), value


def _search_fields(kind: EntityKind, item: Any) -> list[str | None]:
    if kind == "people":
        return [item.name, item.telegram_account]
    if kind == "programs":
        return [item.name, item.description, item.host_name, item.slug]
    if kind == "genres":
        return [item.name]
    return [
        item.episode_title,
        item.description,
        item.program_name,
        item.keywords,
        item.people_names,
    ]


def _display_name(kind: EntityKind, item: Any) -> str:
    if kind == "recordings":
        return item.episode_title
    return item.name


def _timestamp(kind: EntityKind, item: Any) -> float | None:
    value: date | datetime | None
    if kind == "recordings":
        value = item.release_date
    elif kind == "genres":
        return None
    else:
        value = item.created_at
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.timestamp()
    return float(value.toordinal())


def matches_search(kind: EntityKind, item: Any, query: str) -> bool:
    cyrillic = _has_cyrillic(query)
    needle = normalize_search_text(query, cyrillic)
    for value in _search_fields(kind, item):
        if value and needle in normalize_search_text(value, cyrillic):
            return True
    return False


def _people_filter(state: FilterState) -> Callable[[Any], bool]:
    def keep(person: Any) -> bool:
        has_telegram = bool(person.telegram_account)
        # Both flags off hides everyone; both on shows everyone
        if has_telegram:
            return state.people_with_telegram
        return state.people_without_telegram

    return keep


def _programs_filter(state: FilterState) -> Callable[[Any], bool] | None:
    if state.programs_with_host == state.programs_without_host:
        return None
    want_host = state.programs_with_host
    return lambda program: (program.host_id is not None) == want_host


def _recordings_filter(state: FilterState) -> Callable[[Any], bool]:
    programs = set(state.selected_programs)
    genres = set(state.selected_genres)

    def keep(recording: Any) -> bool:
        if state.recording_type != "all" and _enum_value(recording.type) != state.recording_type:
            return False
        if state.recording_status != "all" and _enum_value(recording.status) != state.recording_status:
            return False
        if programs and str(recording.program_id) not in programs:
            return False
        if genres and not genres.intersection(str(g) for g in recording.genre_ids):
            return False
        return True

    return keep


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


def _categorical_filter(kind: EntityKind, state: FilterState) -> Callable[[Any], bool] | None:
    if kind == "people":
        return _people_filter(state)
    if kind == "programs":
        return _programs_filter(state)
    if kind == "recordings":
        return _recordings_filter(state)
    return None


def sort_items(kind: EntityKind, items: Iterable[Any], sort_by: str) -> list[Any]:
    """Stable sort; items with equal keys keep their input order in both directions."""
    items = list(items)
    if sort_by.startswith("date") and kind != "genres":
        # Missing dates sort as oldest
        def date_key(item: Any) -> float:
            ts = _timestamp(kind, item)
            return float("-inf") if ts is None else ts

        return sorted(items, key=date_key, reverse=sort_by == "date-desc")

    descending = sort_by == "name-desc"
    return sorted(items, key=lambda item: collation_key(_display_name(kind, item)), reverse=descending)


def apply_filters(kind: EntityKind, items: Sequence[Any], state: FilterState) -> list[Any]:
    result = list(items)

    if state.search_query:
        result = [item for item in result if matches_search(kind, item, state.search_query)]

    keep = _categorical_filter(kind, state)
    if keep is not None:
        result = [item for item in result if keep(item)]

    return sort_items(kind, result, state.sort_by)


def summarize(kind: EntityKind, items: Sequence[Any], state: FilterState) -> dict:
    matched = apply_filters(kind, items, state)
    return {"total": len(items), "matched": len(matched), "items": matched}
