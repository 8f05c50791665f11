"""Command-line interface for the Jules API client."""

from .main import app

__all__ = ["app"]
