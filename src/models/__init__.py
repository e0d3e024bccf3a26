"""Database models initialization."""

# Base classes
from .base import BaseModel

# Criteria models
from .criteria_category import CriteriaCategory
from .criteria import Criteria

# Enums
from .enums import UserRole as UserRoleEnum

__all__ = [
    # Base classes
    "BaseModel",

    # Criteria models
    "CriteriaCategory",
    "Criteria",

    # Enums
    "UserRoleEnum",
]
