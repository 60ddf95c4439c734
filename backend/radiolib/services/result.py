"""Two-shape result returned by workflow services.

Routes turn a failed result into an HTTP error; services never raise for
expected failures (validation, missing rows, database errors).
"""
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    PERSISTENCE = "persistence"


@dataclass(frozen=True)
class ActionResult(Generic[T]):
    success: bool
    data: T | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None

    @classmethod
    def ok(cls, data: T | None = None) -> "ActionResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, kind: ErrorKind = ErrorKind.PERSISTENCE) -> "ActionResult[T]":
        return cls(success=False, error=error, error_kind=kind)
