"""Schemas initialization."""

# Shared schemas
from .shared import (
    MessageResponse,
    StatusResponse,
)

# Criteria schemas
from .criteria import (
    CriteriaBase,
    CriteriaCreate,
    CriteriaUpdate,
    CriteriaResponse,
    CriteriaSummary,
)

# Criteria category schemas
from .criteria_category import (
    CriteriaCategoryBase,
    CriteriaCategoryCreate,
    CriteriaCategoryUpdate,
    CriteriaCategoryResponse,
    CriteriaCategoryWithCriteriaResponse,
    WeightAssignment,
    RebalanceWeightsRequest,
    CategoryWeight,
    WeightSummaryResponse,
    WeightViolationResponse,
    WeightCheckResponse,
)

__all__ = [
    # Shared
    "MessageResponse",
    "StatusResponse",
    # Criteria
    "CriteriaBase",
    "CriteriaCreate",
    "CriteriaUpdate",
    "CriteriaResponse",
    "CriteriaSummary",
    # Criteria categories
    "CriteriaCategoryBase",
    "CriteriaCategoryCreate",
    "CriteriaCategoryUpdate",
    "CriteriaCategoryResponse",
    "CriteriaCategoryWithCriteriaResponse",
    "WeightAssignment",
    "RebalanceWeightsRequest",
    "CategoryWeight",
    "WeightSummaryResponse",
    "WeightViolationResponse",
    "WeightCheckResponse",
]
