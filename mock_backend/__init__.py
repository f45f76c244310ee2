"""
Mock storefront backend

In-memory FastAPI stand-in for the storefront REST API, used by the
integration tests and for local development.
"""

from .config import BackendSettings
from .main import create_app

__all__ = ["BackendSettings", "create_app"]
