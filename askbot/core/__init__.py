"""Core modules for the relay bot."""

from .config import DEFAULT_CONFIG_FILE, Settings, get_settings
from .guards import ActivationGate, is_mod
from .logging import setup_logging

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "DEFAULT_CONFIG_FILE",
    # Setup functions
    "setup_logging",
    # Guards
    "ActivationGate",
    "is_mod",
]
