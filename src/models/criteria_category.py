"""CriteriaCategory model."""

from decimal import Decimal
from typing import List, Optional, TYPE_CHECKING
from sqlmodel import Field, SQLModel, Relationship

from .base import BaseModel

if TYPE_CHECKING:
    from .criteria import Criteria


class CriteriaCategory(BaseModel, SQLModel, table=True):
    """Weighted grouping of evaluation criteria (e.g., Technical Skills, Communication)."""

    __tablename__ = "criteria_categories"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100, nullable=False, index=True)
    description: Optional[str] = Field(default=None, max_length=500)

    # Percentage of the overall evaluation score, 0-100
    weight: Decimal = Field(default=Decimal("0"), max_digits=5, decimal_places=2)

    # Status
    is_active: bool = Field(default=True, index=True)

    # Relationships
    criteria: List["Criteria"] = Relationship(back_populates="category")

    def __repr__(self) -> str:
        return f"<CriteriaCategory(id={self.id}, name={self.name}, weight={self.weight})>"
