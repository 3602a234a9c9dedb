from .auth_service import AuthService
from .tag_service import TagNotFoundError, TagService

__all__ = ["AuthService", "TagNotFoundError", "TagService"]
