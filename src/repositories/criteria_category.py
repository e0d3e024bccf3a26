"""CriteriaCategory repository."""

from typing import List, Optional
from decimal import Decimal
from sqlalchemy import select, and_, func, update, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.models.base import utc_now
from src.models.criteria_category import CriteriaCategory
from src.models.criteria import Criteria
from src.schemas.criteria_category import CriteriaCategoryCreate, CriteriaCategoryUpdate


class CriteriaCategoryRepository:
    """Repository for criteria category operations.

    Methods taking ``commit`` only flush when it is False so that several
    changes can be committed (or rolled back) together by the caller.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    # ===== BASIC CRUD OPERATIONS =====

    async def create(self, category_data: CriteriaCategoryCreate, created_by: Optional[int] = None) -> CriteriaCategory:
        """Create new criteria category."""
        category = CriteriaCategory(
            name=category_data.name,
            description=category_data.description,
            weight=category_data.weight,
            is_active=True,
            created_at=utc_now(),
            created_by=created_by
        )

        self.session.add(category)
        await self.session.commit()
        await self.session.refresh(category)
        return category

    async def get_by_id(self, category_id: int) -> Optional[CriteriaCategory]:
        """Get criteria category by ID, active or not."""
        query = select(CriteriaCategory).where(CriteriaCategory.id == category_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_with_criteria(self, category_id: int) -> Optional[CriteriaCategory]:
        """Get criteria category with all its criteria loaded."""
        query = select(CriteriaCategory).options(
            selectinload(CriteriaCategory.criteria)
        ).where(CriteriaCategory.id == category_id).execution_options(populate_existing=True)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def update(
        self,
        category: CriteriaCategory,
        category_data: CriteriaCategoryUpdate,
        updated_by: Optional[int] = None
    ) -> CriteriaCategory:
        """Apply the provided fields to a loaded category and commit."""
        update_data = category_data.model_dump(exclude_unset=True, exclude_none=True)
        for key, value in update_data.items():
            setattr(category, key, value)

        category.touch(updated_by)

        await self.session.commit()
        await self.session.refresh(category)
        return category

    async def set_weight(self, category: CriteriaCategory, weight: Decimal, updated_by: Optional[int] = None) -> None:
        """Stage a weight change without committing."""
        category.weight = weight
        category.touch(updated_by)
        await self.session.flush()

    async def deactivate(self, category_id: int, commit: bool = True) -> bool:
        """Deactivate an active criteria category."""
        query = (
            update(CriteriaCategory)
            .where(
                and_(
                    CriteriaCategory.id == category_id,
                    CriteriaCategory.is_active == True
                )
            )
            .values(
                is_active=False,
                updated_at=utc_now()
            )
        )
        result = await self.session.execute(query)
        if commit:
            await self.session.commit()
        return result.rowcount > 0

    async def reactivate(self, category_id: int) -> bool:
        """Reactivate an inactive criteria category."""
        query = (
            update(CriteriaCategory)
            .where(
                and_(
                    CriteriaCategory.id == category_id,
                    CriteriaCategory.is_active == False
                )
            )
            .values(
                is_active=True,
                updated_at=utc_now()
            )
        )
        result = await self.session.execute(query)
        await self.session.commit()
        return result.rowcount > 0

    async def delete(self, category_id: int) -> bool:
        """Permanently delete criteria category."""
        query = delete(CriteriaCategory).where(CriteriaCategory.id == category_id)
        result = await self.session.execute(query)
        await self.session.commit()
        return result.rowcount > 0

    # ===== LISTING =====

    async def get_all_categories(self, include_inactive: bool = False) -> List[CriteriaCategory]:
        """Get categories ordered by name."""
        query = select(CriteriaCategory)
        if not include_inactive:
            query = query.where(CriteriaCategory.is_active == True)
        query = query.order_by(CriteriaCategory.name.asc())

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_active_categories(self) -> List[CriteriaCategory]:
        """Get all active criteria categories."""
        return await self.get_all_categories(include_inactive=False)

    async def get_category_criteria(self, category_id: int) -> List[Criteria]:
        """Get every criteria linked to a category, active or inactive."""
        query = select(Criteria).where(Criteria.category_id == category_id).order_by(Criteria.id.asc())
        result = await self.session.execute(query)
        return list(result.scalars().all())

    # ===== WEIGHT HELPERS =====

    async def get_total_weight(self, exclude_id: Optional[int] = None) -> Decimal:
        """Sum the weights of active categories, optionally leaving one out."""
        query = select(func.coalesce(func.sum(CriteriaCategory.weight), 0)).where(
            CriteriaCategory.is_active == True
        )
        if exclude_id is not None:
            query = query.where(CriteriaCategory.id != exclude_id)

        result = await self.session.execute(query)
        total = result.scalar()
        return Decimal(str(total or 0)).quantize(Decimal("0.01"))

    async def count_criteria(self, category_id: int) -> int:
        """Count criteria linked to a category, active or inactive."""
        query = select(func.count(Criteria.id)).where(Criteria.category_id == category_id)
        result = await self.session.execute(query)
        return result.scalar() or 0
