"""Process settings"""

import logging
import secrets
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.json"


class Settings(BaseSettings):
    """Askbot settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Twitch application
    client_id: str = Field(default="", description="Twitch OAuth Client ID")
    client_secret: str = Field(default="", description="Twitch OAuth Client Secret")
    bot_id: str = Field(default="", description="Bot User ID")
    bot_refresh_token: str = Field(default="", description="Refresh token for the bot user")

    # Admin panel
    admin_enabled: bool = Field(default=False, description="Serve the tag admin panel")
    admin_host: str = Field(default="127.0.0.1", description="Admin panel host")
    admin_port: int = Field(default=8000, description="Admin panel port")
    jwt_secret_key: str = Field(
        default="", validate_default=True, description="Secret for admin session tokens"
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    jwt_expire_days: int = Field(default=1, description="Admin session lifetime in days")

    # Thread titles
    youtube_api_key: str = Field(default="", description="YouTube Data API key (optional)")

    # Audit log
    audit_username: str = Field(default="Askbot", description="Sender name for audit messages")

    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            logger.warning(f"Invalid log level '{v}', defaulting to INFO")
            return "INFO"
        return v_upper

    @field_validator("jwt_secret_key")
    @classmethod
    def default_jwt_secret(cls, v: str) -> str:
        # Sessions do not survive a restart without an explicit key
        return v or secrets.token_urlsafe(32)

    def missing_twitch_credentials(self) -> list[str]:
        return [
            name.upper()
            for name in ("client_id", "client_secret", "bot_id")
            if not getattr(self, name).strip()
        ]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
