"""Dependency injection utilities for FastAPI"""

import logging

from fastapi import Cookie, Depends, HTTPException, Request

from askbot.api.services import AuthService, TagService
from askbot.shared.repositories.config_store import ConfigStore

logger = logging.getLogger(__name__)

AUTH_COOKIE = "auth_token"


def get_store(request: Request) -> ConfigStore:
    return request.app.state.store


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_tag_service(store: ConfigStore = Depends(get_store)) -> TagService:
    return TagService(store)


async def require_login(
    auth_token: str | None = Cookie(None),
    auth_service: AuthService = Depends(get_auth_service),
) -> None:
    """Reject requests without a valid session cookie"""
    if not auth_token:
        raise HTTPException(status_code=401, detail="Not logged in")

    if not auth_service.verify_token(auth_token):
        raise HTTPException(status_code=401, detail="Invalid or expired token")
