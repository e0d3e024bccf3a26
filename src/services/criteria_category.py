"""CriteriaCategory service: weight ledger, rebalancing and category lifecycle."""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Tuple
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.permissions import is_admin
from src.core.exceptions import (
    UnauthorizedError,
    CategoryNotFoundError,
    WeightExceededError,
    WeightValidationError,
    HasDependentCriteriaError,
    InactiveCategoryError,
    TransactionFailureError,
)
from src.repositories.criteria_category import CriteriaCategoryRepository
from src.repositories.criteria import CriteriaRepository
from src.schemas.criteria_category import (
    CriteriaCategoryCreate,
    CriteriaCategoryUpdate,
    CriteriaCategoryResponse,
    CriteriaCategoryWithCriteriaResponse,
    CategoryWeight,
    WeightSummaryResponse,
    WeightCheckResponse,
)
from src.schemas.shared import MessageResponse
from src.utils.messages import get_message
from src.utils.weight_validation import (
    MAX_TOTAL_WEIGHT,
    Number,
    check_incremental_weight,
    is_total_valid,
    to_decimal,
    validate_weights,
)

logger = logging.getLogger(__name__)


class CriteriaCategoryService:
    """Service for criteria category operations.

    Every operation re-reads the current state from the database before
    validating; totals are never cached between calls.
    """

    def __init__(
        self,
        category_repo: CriteriaCategoryRepository,
        criteria_repo: CriteriaRepository,
        session: AsyncSession,
        admin_check: Callable[[Optional[Dict]], bool] = is_admin
    ):
        self.category_repo = category_repo
        self.criteria_repo = criteria_repo
        self.session = session
        self.admin_check = admin_check

    def _require_admin(self, current_user: Optional[Dict], action: str) -> None:
        if not self.admin_check(current_user):
            logger.warning(
                f"Denied '{action}' for user {self._user_id(current_user)} "
                f"with role {(current_user or {}).get('role')}"
            )
            raise UnauthorizedError(action)

    @staticmethod
    def _user_id(current_user: Optional[Dict]) -> Optional[int]:
        return (current_user or {}).get("id")

    # ===== BASIC CRUD OPERATIONS =====

    async def create_category(self, category_data: CriteriaCategoryCreate, current_user: Dict) -> CriteriaCategoryResponse:
        """Create new criteria category if the active total stays within 100%."""
        self._require_admin(current_user, "create criteria categories")

        current_total = await self.category_repo.get_total_weight()
        check = check_incremental_weight(current_total, category_data.weight)
        if not check.allowed:
            raise WeightExceededError(check.current_total, check.proposed_total)

        category = await self.category_repo.create(category_data, self._user_id(current_user))

        logger.info(
            f"Criteria category created: ID {category.id} weight {category.weight}% "
            f"by User {self._user_id(current_user)}"
        )
        return CriteriaCategoryResponse.from_criteria_category_model(category)

    async def update_category(
        self,
        category_id: int,
        category_data: CriteriaCategoryUpdate,
        current_user: Dict
    ) -> CriteriaCategoryResponse:
        """Update criteria category; a weight change must not push the total above 100%."""
        self._require_admin(current_user, "update criteria categories")

        category = await self.category_repo.get_by_id(category_id)
        if not category:
            raise CategoryNotFoundError(category_id)

        if category_data.weight is not None and category_data.weight != category.weight:
            # Baseline leaves this category out so its old weight is not counted twice
            other_total = await self.category_repo.get_total_weight(exclude_id=category_id)
            check = check_incremental_weight(other_total, category_data.weight)
            if not check.allowed:
                raise WeightExceededError(check.current_total, check.proposed_total)

        updated_category = await self.category_repo.update(
            category, category_data, self._user_id(current_user)
        )

        logger.info(f"Criteria category updated: ID {category_id} by User {self._user_id(current_user)}")
        return CriteriaCategoryResponse.from_criteria_category_model(updated_category)

    async def get_category(self, category_id: int, current_user: Dict) -> CriteriaCategoryResponse:
        """Get criteria category by ID; inactive ones are only visible to admins."""
        category = await self.category_repo.get_by_id(category_id)
        if not category or (not category.is_active and not self.admin_check(current_user)):
            raise CategoryNotFoundError(category_id)

        return CriteriaCategoryResponse.from_criteria_category_model(category)

    async def get_category_with_criteria(self, category_id: int, current_user: Dict) -> CriteriaCategoryWithCriteriaResponse:
        """Get criteria category with its criteria, filtered by role."""
        admin = self.admin_check(current_user)

        category = await self.category_repo.get_with_criteria(category_id)
        if not category or (not admin and not category.is_active):
            raise CategoryNotFoundError(category_id)

        criteria_list = sorted(category.criteria, key=lambda c: c.name)
        if not admin:
            criteria_list = [c for c in criteria_list if c.is_active]

        return CriteriaCategoryWithCriteriaResponse.from_category_and_criteria(category, criteria_list)

    # ===== LISTING =====

    async def get_all_categories(self, current_user: Dict) -> List[CriteriaCategoryResponse]:
        """Get all categories; non-admins only see active ones."""
        categories = await self.category_repo.get_all_categories(
            include_inactive=self.admin_check(current_user)
        )
        return [CriteriaCategoryResponse.from_criteria_category_model(c) for c in categories]

    async def get_active_categories(self) -> List[CriteriaCategoryResponse]:
        """Get all active criteria categories."""
        categories = await self.category_repo.get_active_categories()
        return [CriteriaCategoryResponse.from_criteria_category_model(c) for c in categories]

    # ===== STATUS TRANSITIONS =====

    async def deactivate_category(self, category_id: int, current_user: Dict) -> MessageResponse:
        """Deactivate a criteria category without touching its criteria."""
        self._require_admin(current_user, "deactivate criteria categories")

        success = await self.category_repo.deactivate(category_id)
        if not success:
            raise CategoryNotFoundError(category_id, get_message("category", "not_found_or_inactive"))

        logger.info(f"Criteria category deactivated: ID {category_id} by Admin {self._user_id(current_user)}")
        return MessageResponse(message=get_message("category", "deactivated"))

    async def reactivate_category(self, category_id: int, current_user: Dict) -> MessageResponse:
        """Reactivate a criteria category. Its criteria keep their own status."""
        self._require_admin(current_user, "reactivate criteria categories")

        success = await self.category_repo.reactivate(category_id)
        if not success:
            raise CategoryNotFoundError(category_id, get_message("category", "not_found_or_active"))

        logger.info(f"Criteria category reactivated: ID {category_id} by Admin {self._user_id(current_user)}")
        return MessageResponse(message=get_message("category", "reactivated"))

    async def cascade_deactivate(self, category_id: int, current_user: Dict) -> MessageResponse:
        """Deactivate a category and all of its active criteria in one transaction."""
        self._require_admin(current_user, "cascade deactivate criteria categories")

        category = await self.category_repo.get_by_id(category_id)
        if not category:
            raise CategoryNotFoundError(category_id)

        deactivated = 0
        try:
            criteria_list = await self.category_repo.get_category_criteria(category_id)
            for criteria in criteria_list:
                if not criteria.is_active:
                    continue
                await self.criteria_repo.deactivate(criteria.id, commit=False)
                deactivated += 1

            await self.category_repo.deactivate(category_id, commit=False)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error during cascade deactivation for criteria category {category_id}: {e}")
            raise TransactionFailureError("cascade deactivation") from e
        except Exception:
            await self.session.rollback()
            logger.exception(f"Error during cascade deactivation for criteria category {category_id}")
            raise

        logger.info(
            f"Criteria category and {deactivated} criteria cascade deactivated: "
            f"ID {category_id} by Admin {self._user_id(current_user)}"
        )
        return MessageResponse(
            message=get_message("category", "cascade_deactivated", count=deactivated),
            data={"category_id": category_id, "criteria_deactivated": deactivated}
        )

    async def hard_delete(self, category_id: int, current_user: Dict) -> MessageResponse:
        """Permanently delete a category that has no criteria at all."""
        self._require_admin(current_user, "permanently delete criteria categories")

        category = await self.category_repo.get_by_id(category_id)
        if not category:
            raise CategoryNotFoundError(category_id)

        # Inactive criteria count as dependents too
        criteria_count = await self.category_repo.count_criteria(category_id)
        if criteria_count > 0:
            raise HasDependentCriteriaError(category_id, criteria_count)

        success = await self.category_repo.delete(category_id)
        if not success:
            raise CategoryNotFoundError(category_id)

        logger.warning(f"Criteria category permanently deleted: ID {category_id} by Admin {self._user_id(current_user)}")
        return MessageResponse(message=get_message("category", "deleted"))

    # ===== WEIGHTS =====

    def check_weights(self, pairs: Iterable[Tuple[int, Number]]) -> WeightCheckResponse:
        """Validate a proposed distribution without touching the database."""
        return WeightCheckResponse.from_check_result(validate_weights(pairs))

    async def get_weight_summary(self) -> WeightSummaryResponse:
        """Validate the weights currently stored for active categories."""
        categories = await self.category_repo.get_active_categories()
        total = await self.category_repo.get_total_weight()

        return WeightSummaryResponse(
            total_weight=total,
            is_valid=is_total_valid(total),
            remaining_weight=MAX_TOTAL_WEIGHT - total,
            categories=[
                CategoryWeight(id=c.id, name=c.name, weight=c.weight)
                for c in categories
            ]
        )

    async def rebalance_weights(self, pairs: List[Tuple[int, Number]], current_user: Dict) -> MessageResponse:
        """
        Replace category weights atomically.

        Args:
            pairs: (category_id, weight) for every category that stays active
            current_user: Authenticated user claims

        Raises:
            UnauthorizedError: Caller is not an administrator
            WeightValidationError: The set does not add up to 100% or has bad entries
            CategoryNotFoundError: An id does not resolve; nothing is written
            InactiveCategoryError: An id names an inactive category; nothing is written
            TransactionFailureError: The database failed mid-write; everything is rolled back
        """
        self._require_admin(current_user, "rebalance weights")

        result = validate_weights(pairs)
        if not result.valid:
            logger.info(
                f"Rejected weight rebalance by User {self._user_id(current_user)}: "
                f"total {result.total}% ({len(result.violations)} violations)"
            )
            raise WeightValidationError(
                result.total,
                result.delta,
                [v.to_dict() for v in result.violations]
            )

        user_id = self._user_id(current_user)
        try:
            # Resolve every id before staging any write
            targets = []
            for category_id, weight in pairs:
                category = await self.category_repo.get_by_id(category_id)
                if not category:
                    raise CategoryNotFoundError(category_id)
                if not category.is_active:
                    raise InactiveCategoryError(category_id)
                targets.append((category, to_decimal(weight)))

            for category, weight in targets:
                await self.category_repo.set_weight(category, weight, user_id)

            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error rebalancing criteria category weights: {e}")
            raise TransactionFailureError("weight rebalance") from e
        except Exception:
            await self.session.rollback()
            logger.warning(f"Weight rebalance by User {user_id} rolled back")
            raise

        logger.info(f"Criteria category weights rebalanced ({len(pairs)} categories) by User {user_id}")
        return MessageResponse(
            message=get_message("weight", "rebalanced"),
            data={"total": str(result.total), "categories": len(pairs)}
        )
