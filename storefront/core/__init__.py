# Core modules

from .config import Settings, get_settings
from .session import StorefrontSession

__all__ = ["Settings", "get_settings", "StorefrontSession"]
