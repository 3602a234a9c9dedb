"""Tag administration panel."""

from .app import create_app

__all__ = ["create_app"]
