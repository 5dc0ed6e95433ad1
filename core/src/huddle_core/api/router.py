from __future__ import annotations

from fastapi import APIRouter

from huddle_core.api.auth import router as auth_router
from huddle_core.api.token import router as token_router

router = APIRouter(prefix="/api")

router.include_router(auth_router)
router.include_router(token_router)
