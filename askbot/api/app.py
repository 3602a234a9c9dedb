"""FastAPI application factory"""

import logging
import time

from fastapi import FastAPI

from askbot.api.routers import auth_router, responses_router, tags_router
from askbot.api.services import AuthService
from askbot.core.config import Settings
from askbot.shared.repositories.config_store import ConfigStore

logger = logging.getLogger(__name__)


def create_app(store: ConfigStore, settings: Settings) -> FastAPI:
    """Create the admin app over the relay's configuration store"""
    app = FastAPI(
        title="Askbot Admin",
        description="Manage relay tags and chat responses",
        version="1.2.0",
    )
    app.state.store = store
    app.state.auth_service = AuthService(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expire_days=settings.jwt_expire_days,
    )
    start_time = time.time()

    app.include_router(auth_router.router)
    app.include_router(tags_router.router)
    app.include_router(responses_router.router)

    @app.get("/")
    async def root():
        """Root endpoint - minimal service info"""
        return {"service": "askbot-admin", "status": "running"}

    @app.get("/health")
    async def health():
        """Liveness check"""
        return {"status": "healthy", "uptime_seconds": int(time.time() - start_time)}

    logger.info("Admin application configured")
    return app
