"""Criteria schemas for API endpoints."""

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from datetime import datetime


# ===== BASE SCHEMAS =====

class CriteriaBase(BaseModel):
    """Base criteria schema."""
    category_id: int = Field(..., ge=1, description="ID of the criteria category")
    name: str = Field(..., min_length=1, max_length=100, description="Criteria name")
    base_description: Optional[str] = Field(None, max_length=500, description="Description shared by all roles")

    @field_validator('name')
    @classmethod
    def validate_name(cls, name: str) -> str:
        """Validate and normalize criteria name."""
        name = name.strip()
        if not name:
            raise ValueError("Criteria name cannot be blank")
        return name


# ===== REQUEST SCHEMAS =====

class CriteriaCreate(CriteriaBase):
    """Schema for creating a criteria."""
    pass


class CriteriaUpdate(BaseModel):
    """Schema for updating a criteria."""
    category_id: Optional[int] = Field(None, ge=1)
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    base_description: Optional[str] = Field(None, max_length=500)
    is_active: Optional[bool] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, name: Optional[str]) -> Optional[str]:
        """Validate and normalize criteria name if provided."""
        return name.strip() if name else None


# ===== RESPONSE SCHEMAS =====

class CriteriaResponse(BaseModel):
    """Schema for criteria response."""
    id: int
    category_id: int
    category_name: Optional[str] = None
    category_weight: Optional[Decimal] = None
    name: str
    base_description: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_criteria_model(cls, criteria, category=None) -> "CriteriaResponse":
        """Create CriteriaResponse from Criteria model and its (optional) category."""
        return cls(
            id=criteria.id,
            category_id=criteria.category_id,
            category_name=category.name if category else None,
            category_weight=category.weight if category else None,
            name=criteria.name,
            base_description=criteria.base_description,
            is_active=criteria.is_active,
            created_at=criteria.created_at,
            updated_at=criteria.updated_at,
        )

    model_config = {"from_attributes": True}


class CriteriaSummary(BaseModel):
    """Schema for criteria summary (lighter response)."""
    id: int
    name: str
    base_description: Optional[str] = None
    is_active: bool
    created_at: datetime

    @classmethod
    def from_criteria_model(cls, criteria) -> "CriteriaSummary":
        """Create CriteriaSummary from Criteria model."""
        return cls(
            id=criteria.id,
            name=criteria.name,
            base_description=criteria.base_description,
            is_active=criteria.is_active,
            created_at=criteria.created_at
        )

    model_config = {"from_attributes": True}
