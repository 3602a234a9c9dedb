"""JWT session tokens for the admin panel"""

import hmac
import logging
from datetime import UTC, datetime, timedelta

import jwt

logger = logging.getLogger(__name__)


class AuthService:
    """Check the admin key and handle session token creation and validation"""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_days: int = 1):
        if not secret_key:
            raise ValueError("JWT secret key cannot be empty")

        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_days = expire_days

    @staticmethod
    def check_key(given: str, expected: str) -> bool:
        """Constant-time comparison; an empty configured key never matches"""
        if not expected:
            return False
        return hmac.compare_digest(given.encode(), expected.encode())

    def create_access_token(self) -> str:
        now = datetime.now(UTC)
        payload = {
            "sub": "admin",
            "exp": now + timedelta(days=self.expire_days),
            "iat": now,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> dict | None:
        """Verify a JWT token and return the payload if valid"""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
            if payload.get("sub") != "admin":
                logger.warning("Token has unexpected sub")
                return None
            return payload

        except jwt.ExpiredSignatureError:
            logger.warning("Token expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid token: {e}")
            return None
