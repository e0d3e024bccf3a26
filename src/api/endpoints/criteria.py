"""Criteria API endpoints."""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database import get_db
from src.auth.permissions import get_current_active_user, evaluator_or_admin_required
from src.repositories.criteria import CriteriaRepository
from src.repositories.criteria_category import CriteriaCategoryRepository
from src.services.criteria import CriteriaService
from src.schemas.criteria import CriteriaCreate, CriteriaUpdate, CriteriaResponse
from src.schemas.shared import MessageResponse

router = APIRouter()


def get_criteria_service(db: AsyncSession = Depends(get_db)) -> CriteriaService:
    """Get criteria service dependency."""
    return CriteriaService(CriteriaRepository(db), CriteriaCategoryRepository(db))


@router.get(
    "",
    response_model=List[CriteriaResponse],
    summary="Get criteria"
)
async def get_criteria_list(
    category_id: Optional[int] = Query(None, ge=1, description="Only criteria of this category"),
    current_user: dict = Depends(get_current_active_user),
    criteria_service: CriteriaService = Depends(get_criteria_service)
):
    """
    Get criteria ordered by category name then name.

    Admins see every criteria; other users only active criteria of
    active categories.
    """
    return await criteria_service.get_all_criteria(current_user, category_id)


@router.get(
    "/active-for-evaluation",
    response_model=List[CriteriaResponse],
    summary="Get active criteria for evaluations"
)
async def get_active_criteria_for_evaluation(
    current_user: dict = Depends(evaluator_or_admin_required),
    criteria_service: CriteriaService = Depends(get_criteria_service)
):
    """Get active criteria whose category is active too."""
    return await criteria_service.get_active_criteria_for_evaluation()


@router.post(
    "",
    response_model=CriteriaResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create criteria"
)
async def create_criteria(
    criteria_data: CriteriaCreate,
    current_user: dict = Depends(get_current_active_user),
    criteria_service: CriteriaService = Depends(get_criteria_service)
):
    """Create a new criteria. Requires admin role."""
    return await criteria_service.create_criteria(criteria_data, current_user)


@router.get(
    "/{criteria_id}",
    response_model=CriteriaResponse,
    summary="Get criteria by ID"
)
async def get_criteria(
    criteria_id: int,
    current_user: dict = Depends(get_current_active_user),
    criteria_service: CriteriaService = Depends(get_criteria_service)
):
    return await criteria_service.get_criteria(criteria_id, current_user)


@router.put(
    "/{criteria_id}",
    response_model=CriteriaResponse,
    summary="Update criteria"
)
async def update_criteria(
    criteria_id: int,
    criteria_data: CriteriaUpdate,
    current_user: dict = Depends(get_current_active_user),
    criteria_service: CriteriaService = Depends(get_criteria_service)
):
    """Update a criteria. Requires admin role."""
    return await criteria_service.update_criteria(criteria_id, criteria_data, current_user)


@router.patch(
    "/{criteria_id}/deactivate",
    response_model=MessageResponse,
    summary="Deactivate criteria"
)
async def deactivate_criteria(
    criteria_id: int,
    current_user: dict = Depends(get_current_active_user),
    criteria_service: CriteriaService = Depends(get_criteria_service)
):
    return await criteria_service.deactivate_criteria(criteria_id, current_user)


@router.patch(
    "/{criteria_id}/reactivate",
    response_model=MessageResponse,
    summary="Reactivate criteria"
)
async def reactivate_criteria(
    criteria_id: int,
    current_user: dict = Depends(get_current_active_user),
    criteria_service: CriteriaService = Depends(get_criteria_service)
):
    return await criteria_service.reactivate_criteria(criteria_id, current_user)


@router.delete(
    "/{criteria_id}",
    response_model=MessageResponse,
    summary="Permanently delete criteria"
)
async def delete_criteria(
    criteria_id: int,
    current_user: dict = Depends(get_current_active_user),
    criteria_service: CriteriaService = Depends(get_criteria_service)
):
    """Permanently delete a criteria. Requires admin role."""
    return await criteria_service.delete_criteria(criteria_id, current_user)
