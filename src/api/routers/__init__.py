"""
API Routers Package

Contains all FastAPI routers grouped by functionality.

Architecture Notes:
    - Part of API Layer (Presentation)
    - Routers are thin wrappers around Application Layer use cases
    - All routers follow dependency injection pattern

Available Routers:
    - geo_matching_router: coordinate matching and coverage preview
"""

from .geo_matching import router as geo_matching_router

__all__ = ["geo_matching_router"]
