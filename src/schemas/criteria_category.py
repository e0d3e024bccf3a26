"""CriteriaCategory schemas for API endpoints."""

from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator
from datetime import datetime

from src.schemas.criteria import CriteriaSummary


# ===== BASE SCHEMAS =====

class CriteriaCategoryBase(BaseModel):
    """Base criteria category schema."""
    name: str = Field(..., min_length=1, max_length=100, description="Category name")
    description: Optional[str] = Field(None, max_length=500, description="Category description")
    weight: Decimal = Field(..., ge=0, le=100, max_digits=5, decimal_places=2, description="Weight percentage (0-100)")

    @field_validator('name')
    @classmethod
    def validate_name(cls, name: str) -> str:
        """Validate and normalize category name."""
        name = name.strip()
        if not name:
            raise ValueError("Category name cannot be blank")
        return name

    @field_validator('description')
    @classmethod
    def validate_description(cls, description: Optional[str]) -> Optional[str]:
        return description.strip() if description else description


# ===== REQUEST SCHEMAS =====

class CriteriaCategoryCreate(CriteriaCategoryBase):
    """Schema for creating a criteria category."""
    pass


class CriteriaCategoryUpdate(BaseModel):
    """Schema for updating a criteria category."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    weight: Optional[Decimal] = Field(None, ge=0, le=100, max_digits=5, decimal_places=2)
    is_active: Optional[bool] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, name: Optional[str]) -> Optional[str]:
        """Validate and normalize category name if provided."""
        return name.strip() if name else None

    @field_validator('description')
    @classmethod
    def validate_description(cls, description: Optional[str]) -> Optional[str]:
        return description.strip() if description else None


class WeightAssignment(BaseModel):
    """One (category, weight) pair of a proposed distribution.

    Only the stored precision is enforced here; out-of-range weights are
    reported as violations by the weight validator.
    """
    category_id: int = Field(..., ge=1, description="Category ID")
    weight: Decimal = Field(..., max_digits=5, decimal_places=2, description="Proposed weight percentage")


class RebalanceWeightsRequest(BaseModel):
    """Full replacement set of category weights."""
    weights: List[WeightAssignment] = Field(..., min_length=1, description="New weight for every category that stays active")

    def as_pairs(self) -> List[tuple]:
        return [(item.category_id, item.weight) for item in self.weights]


# ===== RESPONSE SCHEMAS =====

class CriteriaCategoryResponse(BaseModel):
    """Schema for criteria category response."""
    id: int
    name: str
    description: Optional[str] = None
    weight: Decimal
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_criteria_category_model(cls, category) -> "CriteriaCategoryResponse":
        """Create CriteriaCategoryResponse from CriteriaCategory model."""
        return cls(
            id=category.id,
            name=category.name,
            description=category.description,
            weight=category.weight,
            is_active=category.is_active,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )

    model_config = {"from_attributes": True}


class CriteriaCategoryWithCriteriaResponse(CriteriaCategoryResponse):
    """Criteria category together with its (visible) criteria."""
    criteria_count: int = Field(default=0, description="Number of criteria returned")
    criteria: List[CriteriaSummary] = Field(default_factory=list)

    @classmethod
    def from_category_and_criteria(cls, category, criteria_list) -> "CriteriaCategoryWithCriteriaResponse":
        """Build the response from a category and an already filtered criteria list."""
        base = CriteriaCategoryResponse.from_criteria_category_model(category)
        return cls(
            **base.model_dump(),
            criteria_count=len(criteria_list),
            criteria=[CriteriaSummary.from_criteria_model(c) for c in criteria_list]
        )


class CategoryWeight(BaseModel):
    """Weight entry of the stored distribution."""
    id: int
    name: str
    weight: Decimal


class WeightSummaryResponse(BaseModel):
    """Validation of the weights currently stored for active categories."""
    total_weight: Decimal
    is_valid: bool
    remaining_weight: Decimal
    categories: List[CategoryWeight] = Field(default_factory=list)


class WeightViolationResponse(BaseModel):
    """Single violation found in a proposed distribution."""
    category_id: int
    weight: Decimal
    reason: str
    message: str


class WeightCheckResponse(BaseModel):
    """Result of validating a proposed distribution without persisting it."""
    valid: bool
    total: Decimal
    delta: Decimal
    violations: List[WeightViolationResponse] = Field(default_factory=list)

    @classmethod
    def from_check_result(cls, result) -> "WeightCheckResponse":
        """Create WeightCheckResponse from a WeightCheckResult."""
        return cls(
            valid=result.valid,
            total=result.total,
            delta=result.delta,
            violations=[
                WeightViolationResponse(
                    category_id=v.category_id,
                    weight=v.weight,
                    reason=v.reason,
                    message=v.message
                )
                for v in result.violations
            ]
        )
