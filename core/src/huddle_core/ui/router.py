from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from huddle_core.api.deps import get_config
from huddle_core.config import CoreConfig

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["ui"])

DEFAULT_ROOM = "quickstart-room"
DEFAULT_USERNAME = "quickstart-user"


@router.get("/login", response_class=HTMLResponse)
async def ui_login(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(request, "login.html", {"title": "Login • Huddle"})


@router.get("/", response_class=HTMLResponse)
async def ui_room(
    request: Request,
    config: CoreConfig = Depends(get_config),  # noqa: B008
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "room.html",
        {
            "title": "Rooms • Huddle",
            "livekit_url": config.livekit.browser_url,
            "default_room": request.query_params.get("room") or DEFAULT_ROOM,
            "default_username": request.query_params.get("username") or DEFAULT_USERNAME,
        },
    )
