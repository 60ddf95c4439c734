"""Per-user persisted filter state.

The stored JSON may come from an older client or schema version, so loading
merges it field by field over the defaults: unknown keys are dropped and a
field with an invalid value falls back to its default instead of failing
the whole state.
"""
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from radiolib.models.user_preference import UserPreference
from radiolib.schemas.filters import FilterState

logger = logging.getLogger(__name__)

DEFAULT_FILTERS = FilterState()


@dataclass(frozen=True)
class UpdateFilters:
    updates: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ResetFilters:
    pass


FilterAction = UpdateFilters | ResetFilters


def _field_by_key() -> dict[str, str]:
    keys = {}
    for name, info in FilterState.model_fields.items():
        keys[name] = name
        if info.alias:
            keys[info.alias] = name
    return keys


def load_filter_state(raw: dict | None) -> FilterState:
    if not raw:
        return DEFAULT_FILTERS

    keys = _field_by_key()
    accepted: dict[str, Any] = {}
    for key, value in raw.items():
        name = keys.get(key)
        if name is None:
            continue
        try:
            FilterState.model_validate({name: value})
        except ValidationError:
            logger.info("Dropping invalid stored filter value %s=%r", key, value)
            continue
        accepted[name] = value
    return FilterState.model_validate(accepted)


def dump_filter_state(state: FilterState) -> dict:
    return state.model_dump(mode="json", by_alias=True)


def reduce_filters(state: FilterState, action: FilterAction) -> FilterState:
    """Return the state after ``action``; ``state`` itself is never modified."""
    if isinstance(action, ResetFilters):
        return DEFAULT_FILTERS
    if isinstance(action, UpdateFilters):
        merged = state.model_dump()
        keys = _field_by_key()
        for key, value in action.updates.items():
            name = keys.get(key)
            if name is not None:
                merged[name] = value
        return FilterState.model_validate(merged)
    raise TypeError(f"Unknown filter action: {action!r}")


async def _get_preference(db: AsyncSession, user_id: uuid.UUID) -> UserPreference | None:
    result = await db.execute(select(UserPreference).where(UserPreference.user_id == user_id))
    return result.scalar_one_or_none()


async def get_filter_state(db: AsyncSession, user_id: uuid.UUID) -> FilterState:
    pref = await _get_preference(db, user_id)
    return load_filter_state(pref.filter_state if pref else None)


async def dispatch_filter_action(db: AsyncSession, user_id: uuid.UUID, action: FilterAction) -> FilterState:
    pref = await _get_preference(db, user_id)
    current = load_filter_state(pref.filter_state if pref else None)
    new_state = reduce_filters(current, action)

    if not pref:
        pref = UserPreference(user_id=user_id)
        db.add(pref)
    pref.filter_state = dump_filter_state(new_state)
    await db.flush()
    return new_state
