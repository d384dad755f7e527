"""Passerelle HTTP devant les scrapers (FastAPI)."""

from hanimeta.web.app import create_app

__all__ = ["create_app"]
