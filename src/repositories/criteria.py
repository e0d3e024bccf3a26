"""Criteria repository."""

from typing import List, Optional
from sqlalchemy import select, and_, update, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.models.base import utc_now
from src.models.criteria import Criteria
from src.models.criteria_category import CriteriaCategory
from src.schemas.criteria import CriteriaCreate, CriteriaUpdate


class CriteriaRepository:
    """Repository for criteria operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, criteria_data: CriteriaCreate, created_by: Optional[int] = None) -> Criteria:
        """Create new criteria."""
        criteria = Criteria(
            category_id=criteria_data.category_id,
            name=criteria_data.name,
            base_description=criteria_data.base_description.strip() if criteria_data.base_description else None,
            is_active=True,
            created_at=utc_now(),
            created_by=created_by
        )

        self.session.add(criteria)
        await self.session.commit()
        return await self.get_by_id(criteria.id)

    async def get_by_id(self, criteria_id: int) -> Optional[Criteria]:
        """Get criteria by ID with its category loaded."""
        query = select(Criteria).options(
            selectinload(Criteria.category)
        ).where(Criteria.id == criteria_id).execution_options(populate_existing=True)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def update(
        self,
        criteria: Criteria,
        criteria_data: CriteriaUpdate,
        updated_by: Optional[int] = None
    ) -> Criteria:
        """Apply the provided fields to a loaded criteria and commit."""
        update_data = criteria_data.model_dump(exclude_unset=True, exclude_none=True)
        if "base_description" in update_data:
            update_data["base_description"] = update_data["base_description"].strip()
        for key, value in update_data.items():
            setattr(criteria, key, value)

        criteria.touch(updated_by)

        await self.session.commit()
        # Category may have changed
        self.session.expire(criteria, ["category"])
        return await self.get_by_id(criteria.id)

    async def get_by_category(self, category_id: int, include_inactive: bool = True) -> List[Criteria]:
        """Get criteria of a category ordered by name."""
        query = select(Criteria).where(Criteria.category_id == category_id)
        if not include_inactive:
            query = query.where(Criteria.is_active == True)
        query = query.order_by(Criteria.name.asc())

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_all(self) -> List[Criteria]:
        """Get every criteria with its category, ordered by category name then name."""
        query = (
            select(Criteria)
            .join(CriteriaCategory)
            .options(selectinload(Criteria.category))
            .order_by(CriteriaCategory.name.asc(), Criteria.name.asc())
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_active_for_evaluation(self) -> List[Criteria]:
        """Get active criteria whose category is active as well."""
        query = (
            select(Criteria)
            .join(CriteriaCategory)
            .options(selectinload(Criteria.category))
            .where(
                and_(
                    Criteria.is_active == True,
                    CriteriaCategory.is_active == True
                )
            )
            .order_by(CriteriaCategory.name.asc(), Criteria.name.asc())
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def deactivate(self, criteria_id: int, commit: bool = True) -> bool:
        """Deactivate an active criteria."""
        query = (
            update(Criteria)
            .where(
                and_(
                    Criteria.id == criteria_id,
                    Criteria.is_active == True
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

    async def reactivate(self, criteria_id: int) -> bool:
        """Reactivate an inactive criteria."""
        query = (
            update(Criteria)
            .where(
                and_(
                    Criteria.id == criteria_id,
                    Criteria.is_active == False
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

    async def delete(self, criteria_id: int) -> bool:
        """Permanently delete criteria."""
        query = delete(Criteria).where(Criteria.id == criteria_id)
        result = await self.session.execute(query)
        await self.session.commit()
        return result.rowcount > 0
