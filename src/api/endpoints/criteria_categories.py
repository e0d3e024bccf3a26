"""Criteria Category API endpoints."""

from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database import get_db
from src.auth.permissions import get_current_active_user, evaluator_or_admin_required
from src.repositories.criteria_category import CriteriaCategoryRepository
from src.repositories.criteria import CriteriaRepository
from src.services.criteria_category import CriteriaCategoryService
from src.schemas.criteria_category import (
    CriteriaCategoryCreate,
    CriteriaCategoryUpdate,
    CriteriaCategoryResponse,
    CriteriaCategoryWithCriteriaResponse,
    RebalanceWeightsRequest,
    WeightSummaryResponse,
    WeightCheckResponse,
)
from src.schemas.shared import MessageResponse

router = APIRouter()


def get_category_service(db: AsyncSession = Depends(get_db)) -> CriteriaCategoryService:
    """Get criteria category service dependency."""
    category_repo = CriteriaCategoryRepository(db)
    criteria_repo = CriteriaRepository(db)
    return CriteriaCategoryService(category_repo, criteria_repo, db)


# ===== SPECIFIC ENDPOINTS (Must come before generic {id} routes) =====

@router.get(
    "",
    response_model=List[CriteriaCategoryResponse],
    summary="Get all criteria categories"
)
async def get_categories(
    current_user: dict = Depends(get_current_active_user),
    category_service: CriteriaCategoryService = Depends(get_category_service)
):
    """Get criteria categories ordered by name. Inactive ones are listed for admins only."""
    return await category_service.get_all_categories(current_user)


@router.get(
    "/active",
    response_model=List[CriteriaCategoryResponse],
    summary="Get active criteria categories"
)
async def get_active_categories(
    current_user: dict = Depends(get_current_active_user),
    category_service: CriteriaCategoryService = Depends(get_category_service)
):
    """Get all active criteria categories."""
    return await category_service.get_active_categories()


@router.get(
    "/validate-weights",
    response_model=WeightSummaryResponse,
    summary="Validate stored category weights"
)
async def get_weight_summary(
    current_user: dict = Depends(evaluator_or_admin_required),
    category_service: CriteriaCategoryService = Depends(get_category_service)
):
    """Check whether the weights of active categories currently add up to 100%."""
    return await category_service.get_weight_summary()


@router.post(
    "/validate-weights",
    response_model=WeightCheckResponse,
    summary="Validate a proposed weight distribution"
)
async def check_weights(
    request: RebalanceWeightsRequest,
    current_user: dict = Depends(get_current_active_user),
    category_service: CriteriaCategoryService = Depends(get_category_service)
):
    """Validate a proposed set of weights without saving it."""
    return category_service.check_weights(request.as_pairs())


@router.post(
    "/rebalance-weights",
    response_model=MessageResponse,
    summary="Rebalance category weights"
)
async def rebalance_weights(
    request: RebalanceWeightsRequest,
    current_user: dict = Depends(get_current_active_user),
    category_service: CriteriaCategoryService = Depends(get_category_service)
):
    """
    Replace the weights of the given categories in a single transaction.

    The set must add up to 100% (within 0.01) and every weight must be
    between 0 and 100. Requires admin role.
    """
    return await category_service.rebalance_weights(request.as_pairs(), current_user)


# ===== BASIC CRUD =====

@router.post(
    "",
    response_model=CriteriaCategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create criteria category"
)
async def create_category(
    category_data: CriteriaCategoryCreate,
    current_user: dict = Depends(get_current_active_user),
    category_service: CriteriaCategoryService = Depends(get_category_service)
):
    """Create a new criteria category. Requires admin role."""
    return await category_service.create_category(category_data, current_user)


@router.get(
    "/{category_id}",
    response_model=CriteriaCategoryResponse,
    summary="Get criteria category by ID"
)
async def get_category(
    category_id: int,
    current_user: dict = Depends(get_current_active_user),
    category_service: CriteriaCategoryService = Depends(get_category_service)
):
    return await category_service.get_category(category_id, current_user)


@router.get(
    "/{category_id}/with-criteria",
    response_model=CriteriaCategoryWithCriteriaResponse,
    summary="Get criteria category with its criteria"
)
async def get_category_with_criteria(
    category_id: int,
    current_user: dict = Depends(get_current_active_user),
    category_service: CriteriaCategoryService = Depends(get_category_service)
):
    """Get a criteria category together with its criteria ordered by name."""
    return await category_service.get_category_with_criteria(category_id, current_user)


@router.put(
    "/{category_id}",
    response_model=CriteriaCategoryResponse,
    summary="Update criteria category"
)
async def update_category(
    category_id: int,
    category_data: CriteriaCategoryUpdate,
    current_user: dict = Depends(get_current_active_user),
    category_service: CriteriaCategoryService = Depends(get_category_service)
):
    """Update a criteria category. Requires admin role."""
    return await category_service.update_category(category_id, category_data, current_user)


# ===== STATUS MANAGEMENT =====

@router.patch(
    "/{category_id}/deactivate",
    response_model=MessageResponse,
    summary="Deactivate criteria category"
)
async def deactivate_category(
    category_id: int,
    current_user: dict = Depends(get_current_active_user),
    category_service: CriteriaCategoryService = Depends(get_category_service)
):
    """Deactivate a criteria category. Its criteria are left untouched."""
    return await category_service.deactivate_category(category_id, current_user)


@router.patch(
    "/{category_id}/reactivate",
    response_model=MessageResponse,
    summary="Reactivate criteria category"
)
async def reactivate_category(
    category_id: int,
    current_user: dict = Depends(get_current_active_user),
    category_service: CriteriaCategoryService = Depends(get_category_service)
):
    return await category_service.reactivate_category(category_id, current_user)


@router.patch(
    "/{category_id}/cascade-deactivate",
    response_model=MessageResponse,
    summary="Deactivate criteria category and all its criteria"
)
async def cascade_deactivate_category(
    category_id: int,
    current_user: dict = Depends(get_current_active_user),
    category_service: CriteriaCategoryService = Depends(get_category_service)
):
    """Deactivate a criteria category and every active criteria under it atomically."""
    return await category_service.cascade_deactivate(category_id, current_user)


@router.delete(
    "/{category_id}/permanent",
    response_model=MessageResponse,
    summary="Permanently delete criteria category"
)
async def delete_category(
    category_id: int,
    current_user: dict = Depends(get_current_active_user),
    category_service: CriteriaCategoryService = Depends(get_category_service)
):
    """
    Permanently delete a criteria category.

    Refused with 409 while any criteria (active or inactive) still
    belongs to the category.
    """
    return await category_service.hard_delete(category_id, current_user)
