"""Auth module init."""

from .jwt import create_access_token, verify_token
from .permissions import (
    get_current_user,
    get_current_active_user,
    require_roles,
    # Role dependencies
    evaluator_or_admin_required,
    # Capability checks
    is_admin,
)

__all__ = [
    # JWT functions
    "create_access_token",
    "verify_token",
    # Auth dependencies
    "get_current_user",
    "get_current_active_user",
    "require_roles",
    # Role dependencies
    "evaluator_or_admin_required",
    # Capability checks
    "is_admin",
]
