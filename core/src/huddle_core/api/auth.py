from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from huddle_core.api.deps import get_config
from huddle_core.api.models import AuthRequest, AuthResult
from huddle_core.auth import clear_session_cookie, set_session_cookie, verify_password
from huddle_core.config import CoreConfig
from huddle_core.errors import BadRequest, HuddleError, InternalConfig, InternalError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


async def _read_auth_request(request: Request) -> AuthRequest:
    try:
        payload = await request.json()
    except ValueError:
        payload = None
    if not isinstance(payload, dict):
        raise BadRequest("Password is required")
    return AuthRequest.model_validate(payload)


@router.post("", response_model=AuthResult)
async def authenticate(
    request: Request,
    config: CoreConfig = Depends(get_config),  # noqa: B008
) -> JSONResponse:
    try:
        body = await _read_auth_request(request)
        verify_password(body.password, config.auth.app_password)
    except InternalConfig:
        logger.error("APP_PASSWORD is not configured")
        raise
    except HuddleError:
        raise
    except Exception as e:
        logger.exception("Auth API error")
        raise InternalError("Internal server error") from e

    response = JSONResponse(
        status_code=200,
        content=AuthResult(success=True, message="Authentication successful").model_dump(),
    )
    set_session_cookie(response, secure=config.is_production)
    return response


@router.post("/logout", response_model=AuthResult)
async def logout(config: CoreConfig = Depends(get_config)) -> JSONResponse:  # noqa: B008
    response = JSONResponse(
        status_code=200,
        content=AuthResult(success=True, message="Logged out").model_dump(),
    )
    clear_session_cookie(response, secure=config.is_production)
    return response
