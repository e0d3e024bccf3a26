"""Custom exceptions for the application."""

from decimal import Decimal
from typing import List, Optional

from fastapi import HTTPException, status
from ..utils.messages import get_message


class UnauthorizedError(HTTPException):
    """Exception raised when the caller lacks administrator capability."""

    def __init__(self, action: str = "perform this operation"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=get_message("access", "admin_only", action=action)
        )


class CategoryNotFoundError(HTTPException):
    """Exception raised when a criteria category id does not resolve."""

    def __init__(self, category_id: Optional[int] = None, message: Optional[str] = None):
        self.category_id = category_id
        if message is None:
            if category_id is not None:
                message = get_message("category", "not_found_with_id", category_id=category_id)
            else:
                message = get_message("category", "not_found")

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=message
        )


class CriteriaNotFoundError(HTTPException):
    """Exception raised when a criteria id does not resolve."""

    def __init__(self, criteria_id: Optional[int] = None, message: Optional[str] = None):
        self.criteria_id = criteria_id
        if message is None:
            if criteria_id is not None:
                message = get_message("criteria", "not_found_with_id", criteria_id=criteria_id)
            else:
                message = get_message("criteria", "not_found")

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=message
        )


class WeightExceededError(HTTPException):
    """Exception raised when a single-category change would push the total above 100%."""

    def __init__(self, current_total: Decimal, proposed_total: Decimal):
        self.current_total = current_total
        self.proposed_total = proposed_total
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=get_message(
                "weight", "exceeded",
                current_total=current_total,
                proposed_total=proposed_total
            )
        )


class WeightValidationError(HTTPException):
    """Exception raised when a full replacement weight set is not a valid 100% distribution."""

    def __init__(self, total: Decimal, delta: Decimal, violations: Optional[List[dict]] = None):
        self.total = total
        self.delta = delta
        self.violations = violations or []
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": get_message("weight", "invalid_total", total=total, delta=delta),
                "total": str(total),
                "delta": str(delta),
                "violations": self.violations,
            }
        )


class HasDependentCriteriaError(HTTPException):
    """Exception raised when a hard delete is blocked by linked criteria."""

    def __init__(self, category_id: int, count: int):
        self.category_id = category_id
        self.count = count
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=get_message("category", "has_dependent_criteria", count=count)
        )


class TransactionFailureError(HTTPException):
    """Exception raised when a persistence operation fails mid-transaction."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=get_message("crud", "operation_failed", operation=operation)
        )


class InactiveCategoryError(HTTPException):
    """Exception raised when a rebalance names a category that is not active."""

    def __init__(self, category_id: int):
        self.category_id = category_id
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=get_message("weight", "inactive_category", category_id=category_id)
        )
