"""
Application Services

Responsibility:
    Orchestration services that coordinate domain services and the stores
    injected into them.

Contains:
    - GeoMatchingUseCase: coordinate -> ranked zones with services

Does NOT contain:
    - Domain business logic (use Domain services)
    - Direct infrastructure calls (use dependency injection)
"""

from src.application.services.geo_matching_use_case import GeoMatchingUseCase

__all__ = ["GeoMatchingUseCase"]
