"""Authorization and permission system.

Identity comes entirely from the verified JWT claims; role resolution is
not repeated against a user store.
"""

import logging
from typing import List, Dict, Optional
from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPBearer
from jose import JWTError

from src.auth.jwt import verify_token
from src.models.enums import UserRole
from src.utils.messages import get_message

logger = logging.getLogger(__name__)


class JWTBearer(HTTPBearer):
    """JWT handler reading the HttpOnly cookie first, then the Authorization header."""

    def __init__(self, auto_error: bool = True):
        super(JWTBearer, self).__init__(auto_error=False)
        self.require_token = auto_error

    async def __call__(self, request: Request) -> Optional[str]:
        access_token = request.cookies.get("access_token")
        if access_token:
            return access_token

        credentials = await super(JWTBearer, self).__call__(request)
        if credentials and credentials.scheme.lower() == "bearer":
            return credentials.credentials

        if self.require_token:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=get_message("auth", "authentication_required"),
            )

        return None


jwt_bearer = JWTBearer()


async def get_current_user(token: str = Depends(jwt_bearer)) -> Dict:
    """Get the current authenticated user from the JWT claims."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=get_message("auth", "invalid_credentials"),
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = verify_token(token)
    except JWTError as e:
        logger.warning(f"Rejected token: {e}")
        raise credentials_exception

    user_id = payload.get("sub")
    if not user_id:
        raise credentials_exception

    try:
        user_id = int(user_id)
    except (ValueError, TypeError):
        raise credentials_exception

    role = payload.get("role")
    if not role or not UserRole.is_valid_role(role):
        raise credentials_exception

    return {
        "id": user_id,
        "email": payload.get("email"),
        "role": role,
        "is_active": payload.get("is_active", True),
    }


async def get_current_active_user(
    current_user: Dict = Depends(get_current_user),
) -> Dict:
    """Ensure the current user is active."""
    if not current_user.get("is_active"):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=get_message("auth", "account_deactivated")
        )
    return current_user


def require_roles(required_roles: List[str]):
    """
    Dependency factory to require specific roles.

    Args:
        required_roles: List of role names that are allowed access

    Returns:
        Dependency function that checks user roles
    """
    async def _check_roles(
        current_user: Dict = Depends(get_current_active_user),
    ) -> Dict:
        user_role = current_user.get("role")

        if user_role not in required_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=get_message("auth", "roles_required", roles=", ".join(required_roles), role=user_role),
            )

        return current_user

    return _check_roles


# ===== ROLE-BASED DEPENDENCIES =====

evaluator_or_admin_required = require_roles(UserRole.admin_values() + [UserRole.EVALUATOR.value])


# ===== UTILITY FUNCTIONS =====

def has_any_role(user: Dict, roles: List[str]) -> bool:
    """Check if user has any of the specified roles."""
    return user.get("role") in roles


def is_admin(user: Optional[Dict]) -> bool:
    """Check if user is admin (includes super admin)."""
    if not user:
        return False
    return has_any_role(user, UserRole.admin_values())
