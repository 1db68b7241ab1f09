"""
HTTP API for GeoCat.

FastAPI routers, dependencies and the error boundary.
"""

from .app import create_app

__all__ = ["create_app"]
