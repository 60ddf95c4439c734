from fastapi import APIRouter

from radiolib.api.v1.auth import router as auth_router
from radiolib.api.v1.filters import router as filters_router
from radiolib.api.v1.genres import router as genres_router
from radiolib.api.v1.people import router as people_router
from radiolib.api.v1.programs import router as programs_router
from radiolib.api.v1.recordings import router as recordings_router
from radiolib.api.v1.uploads import router as uploads_router
from radiolib.api.v1.users import router as users_router

router = APIRouter()
router.include_router(auth_router)
router.include_router(users_router)
router.include_router(people_router)
router.include_router(programs_router)
router.include_router(genres_router)
router.include_router(recordings_router)
router.include_router(filters_router)
router.include_router(uploads_router)
