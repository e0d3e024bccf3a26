"""API router configuration."""

from fastapi import APIRouter

from src.api.endpoints import criteria_categories, criteria

# Create main API router
api_router = APIRouter()

# Criteria categories - weighted groups of evaluation criteria
api_router.include_router(
    criteria_categories.router,
    prefix="/criteria-categories",
    tags=["Criteria Categories"],
    responses={
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Criteria category not found"},
        409: {"description": "Conflict"},
        422: {"description": "Validation Error"},
    },
)

# Criteria - individual evaluation criteria
api_router.include_router(
    criteria.router,
    prefix="/criteria",
    tags=["Criteria"],
    responses={
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Criteria not found"},
        422: {"description": "Validation Error"},
    },
)


# Export for main.py
def get_api_router():
    """Get configured API router with all endpoints."""
    return api_router
