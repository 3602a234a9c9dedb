from . import auth_router, responses_router, tags_router

__all__ = ["auth_router", "responses_router", "tags_router"]
