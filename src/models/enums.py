"""Enums for database models."""

from enum import Enum


class UserRole(str, Enum):
    """User role enum for role-based access control."""
    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    EVALUATOR = "EVALUATOR"
    EMPLOYEE = "EMPLOYEE"

    @classmethod
    def get_all_values(cls):
        """Get all role values as list."""
        return [role.value for role in cls]

    @classmethod
    def is_valid_role(cls, role: str) -> bool:
        """Check if role is valid."""
        return role in cls.get_all_values()

    @classmethod
    def admin_values(cls):
        """Roles holding administrator capability."""
        return [cls.SUPER_ADMIN.value, cls.ADMIN.value]
