"""
CourseVault API package.

Provides the FastAPI application for the course marketplace.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
