"""Criteria service."""

import logging
from typing import Callable, Dict, List, Optional

from src.auth.permissions import is_admin
from src.core.exceptions import UnauthorizedError, CategoryNotFoundError, CriteriaNotFoundError
from src.repositories.criteria import CriteriaRepository
from src.repositories.criteria_category import CriteriaCategoryRepository
from src.schemas.criteria import CriteriaCreate, CriteriaUpdate, CriteriaResponse
from src.schemas.shared import MessageResponse
from src.utils.messages import get_message

logger = logging.getLogger(__name__)


class CriteriaService:
    """Service for criteria operations."""

    def __init__(
        self,
        criteria_repo: CriteriaRepository,
        category_repo: CriteriaCategoryRepository,
        admin_check: Callable[[Optional[Dict]], bool] = is_admin
    ):
        self.criteria_repo = criteria_repo
        self.category_repo = category_repo
        self.admin_check = admin_check

    def _require_admin(self, current_user: Optional[Dict], action: str) -> None:
        if not self.admin_check(current_user):
            raise UnauthorizedError(action)

    async def create_criteria(self, criteria_data: CriteriaCreate, current_user: Dict) -> CriteriaResponse:
        """Create new criteria under an existing category."""
        self._require_admin(current_user, "create criteria")

        category = await self.category_repo.get_by_id(criteria_data.category_id)
        if not category:
            raise CategoryNotFoundError(criteria_data.category_id)

        criteria = await self.criteria_repo.create(criteria_data, current_user.get("id"))

        logger.info(f"Criteria created: ID {criteria.id} in category {category.id} by User {current_user.get('id')}")
        return CriteriaResponse.from_criteria_model(criteria, criteria.category)

    async def get_criteria(self, criteria_id: int, current_user: Dict) -> CriteriaResponse:
        """Get criteria by ID."""
        criteria = await self.criteria_repo.get_by_id(criteria_id)
        if not criteria or (not criteria.is_active and not self.admin_check(current_user)):
            raise CriteriaNotFoundError(criteria_id)

        return CriteriaResponse.from_criteria_model(criteria, criteria.category)

    async def get_criteria_by_category(self, category_id: int, current_user: Dict) -> List[CriteriaResponse]:
        """Get criteria of a category; non-admins only see active ones."""
        admin = self.admin_check(current_user)

        category = await self.category_repo.get_by_id(category_id)
        if not category or (not admin and not category.is_active):
            raise CategoryNotFoundError(category_id)

        criteria_list = await self.criteria_repo.get_by_category(category_id, include_inactive=admin)
        return [CriteriaResponse.from_criteria_model(c, category) for c in criteria_list]

    async def get_all_criteria(self, current_user: Dict, category_id: Optional[int] = None) -> List[CriteriaResponse]:
        """
        List criteria, optionally narrowed to one category.

        Admins see every criteria. Other users only see active criteria
        of active categories.
        """
        if category_id is not None:
            return await self.get_criteria_by_category(category_id, current_user)

        if self.admin_check(current_user):
            criteria_list = await self.criteria_repo.get_all()
        else:
            criteria_list = await self.criteria_repo.get_active_for_evaluation()
        return [CriteriaResponse.from_criteria_model(c, c.category) for c in criteria_list]

    async def get_active_criteria_for_evaluation(self) -> List[CriteriaResponse]:
        """Get active criteria of active categories, grouped by category name."""
        criteria_list = await self.criteria_repo.get_active_for_evaluation()
        return [CriteriaResponse.from_criteria_model(c, c.category) for c in criteria_list]

    async def update_criteria(
        self,
        criteria_id: int,
        criteria_data: CriteriaUpdate,
        current_user: Dict
    ) -> CriteriaResponse:
        """Update criteria, optionally moving it to another category."""
        self._require_admin(current_user, "update criteria")

        criteria = await self.criteria_repo.get_by_id(criteria_id)
        if not criteria:
            raise CriteriaNotFoundError(criteria_id)

        if criteria_data.category_id is not None and criteria_data.category_id != criteria.category_id:
            target = await self.category_repo.get_by_id(criteria_data.category_id)
            if not target:
                raise CategoryNotFoundError(criteria_data.category_id)

        updated = await self.criteria_repo.update(criteria, criteria_data, current_user.get("id"))

        logger.info(f"Criteria updated: ID {criteria_id} by User {current_user.get('id')}")
        return CriteriaResponse.from_criteria_model(updated, updated.category)

    async def deactivate_criteria(self, criteria_id: int, current_user: Dict) -> MessageResponse:
        """Deactivate criteria."""
        self._require_admin(current_user, "deactivate criteria")

        success = await self.criteria_repo.deactivate(criteria_id)
        if not success:
            raise CriteriaNotFoundError(criteria_id, get_message("criteria", "not_found_or_inactive"))

        logger.info(f"Criteria deactivated: ID {criteria_id} by Admin {current_user.get('id')}")
        return MessageResponse(message=get_message("criteria", "deactivated"))

    async def reactivate_criteria(self, criteria_id: int, current_user: Dict) -> MessageResponse:
        """Reactivate criteria."""
        self._require_admin(current_user, "reactivate criteria")

        success = await self.criteria_repo.reactivate(criteria_id)
        if not success:
            raise CriteriaNotFoundError(criteria_id, get_message("criteria", "not_found_or_active"))

        logger.info(f"Criteria reactivated: ID {criteria_id} by Admin {current_user.get('id')}")
        return MessageResponse(message=get_message("criteria", "reactivated"))

    async def delete_criteria(self, criteria_id: int, current_user: Dict) -> MessageResponse:
        """Permanently delete criteria."""
        self._require_admin(current_user, "permanently delete criteria")

        success = await self.criteria_repo.delete(criteria_id)
        if not success:
            raise CriteriaNotFoundError(criteria_id)

        logger.warning(f"Criteria permanently deleted: ID {criteria_id} by Admin {current_user.get('id')}")
        return MessageResponse(message=get_message("criteria", "deleted"))
