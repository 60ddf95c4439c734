from radiolib.models.user import User, UserRole
from radiolib.models.person import Person
from radiolib.models.program import Program
from radiolib.models.genre import Genre
from radiolib.models.recording import (
    PersonRole,
    Recording,
    RecordingGenre,
    RecordingPerson,
    RecordingStatus,
    RecordingType,
)
from radiolib.models.user_preference import UserPreference

__all__ = [
    "User", "UserRole",
    "Person",
    "Program",
    "Genre",
    "Recording", "RecordingType", "RecordingStatus",
    "RecordingGenre",
    "RecordingPerson", "PersonRole",
    "UserPreference",
]
