"""Criteria model."""

from typing import Optional, TYPE_CHECKING
from sqlmodel import Field, SQLModel, Relationship

from .base import BaseModel

if TYPE_CHECKING:
    from .criteria_category import CriteriaCategory


class Criteria(BaseModel, SQLModel, table=True):
    """Individual evaluable item belonging to exactly one category."""

    __tablename__ = "criteria"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100, nullable=False, index=True)
    base_description: Optional[str] = Field(default=None, max_length=500)

    # Foreign Key to CriteriaCategory
    category_id: int = Field(foreign_key="criteria_categories.id", index=True)

    # Status
    is_active: bool = Field(default=True, index=True)

    # Relationships
    category: Optional["CriteriaCategory"] = Relationship(back_populates="criteria")

    def __repr__(self) -> str:
        return f"<Criteria(id={self.id}, name={self.name}, category_id={self.category_id})>"
