"""
Solarshade REST API.

FastAPI-based REST API for sun position and roof shading estimates.

Usage:
    uvicorn solarshade.api.main:app --reload

    # Or
    python -m solarshade.api.main
"""

from .main import app

__all__ = ["app"]
