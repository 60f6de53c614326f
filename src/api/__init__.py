"""
API Layer - FastAPI Presentation Layer

Responsibility:
    HTTP interface for the geo matching service. Handles requests and
    responses. No business logic.

Contains:
    - FastAPI routers (geo-matching)
    - Request/Response models (Pydantic)
    - Dependency injection setup
    - Middleware configuration (CORS, logging)

Does NOT contain:
    - Business logic (belongs to Domain layer)
    - Request normalisation (belongs to Application layer)
    - Store access (belongs to Infrastructure layer)
"""
