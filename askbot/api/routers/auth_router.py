"""Admin login routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel

from askbot.api.dependencies import AUTH_COOKIE, get_auth_service, get_store
from askbot.api.services import AuthService
from askbot.shared.repositories.config_store import ConfigStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


class LoginRequest(BaseModel):
    key: str


@router.post("/login")
async def login(
    body: LoginRequest,
    response: Response,
    store: ConfigStore = Depends(get_store),
    auth_service: AuthService = Depends(get_auth_service),
) -> dict:
    expected = store.read(lambda bc: bc.key)
    if not auth_service.check_key(body.key, expected):
        logger.warning("Admin login rejected")
        raise HTTPException(status_code=403, detail="Forbidden")

    token = auth_service.create_access_token()
    response.set_cookie(
        key=AUTH_COOKIE,
        value=token,
        httponly=True,
        samesite="strict",
        max_age=auth_service.expire_days * 86400,
    )
    logger.info("Admin logged in")
    return {"status": "ok"}


@router.post("/logout")
async def logout(response: Response) -> dict:
    response.delete_cookie(AUTH_COOKIE)
    return {"status": "ok"}
