"""Message mappings for API responses."""

class Messages:
    """Centralized messages for API responses."""

    # Authentication messages
    AUTH = {
        "authentication_required": "Authentication required. Please login.",
        "invalid_credentials": "Could not validate credentials",
        "account_deactivated": "User account is deactivated",
        "roles_required": "Access denied. Required roles: {roles}. Your role: {role}",
    }

    # Access control messages
    ACCESS = {
        "admin_only": "Only administrators can {action}",
    }

    # Criteria category messages
    CATEGORY = {
        "not_found": "Criteria category not found",
        "not_found_with_id": "Criteria category with ID {category_id} not found",
        "not_found_or_inactive": "Criteria category not found or already inactive",
        "not_found_or_active": "Criteria category not found or already active",
        "deactivated": "Criteria category deactivated successfully",
        "reactivated": "Criteria category reactivated successfully",
        "cascade_deactivated": "Criteria category and {count} criteria deactivated successfully",
        "deleted": "Criteria category permanently deleted",
        "has_dependent_criteria": (
            "Cannot permanently delete criteria category. Category has {count} criteria. "
            "Consider using cascade deactivation instead."
        ),
    }

    # Weight messages
    WEIGHT = {
        "exceeded": "Total weight would exceed 100%. Current total: {current_total}%, New total would be: {proposed_total}%",
        "invalid_total": "Total weights must equal 100%. Provided total: {total}% (off by {delta}%)",
        "rebalanced": "Weights rebalanced successfully",
        "negative": "Weight {weight} for category {category_id} is negative",
        "exceeds_maximum": "Weight {weight} for category {category_id} exceeds 100%",
        "duplicate": "Category {category_id} appears more than once",
        "inactive_category": "Criteria category {category_id} is inactive and cannot be rebalanced",
    }

    # Criteria messages
    CRITERIA = {
        "not_found": "Criteria not found",
        "not_found_with_id": "Criteria with ID {criteria_id} not found",
        "not_found_or_inactive": "Criteria not found or already inactive",
        "not_found_or_active": "Criteria not found or already active",
        "deactivated": "Criteria deactivated successfully",
        "reactivated": "Criteria reactivated successfully",
        "deleted": "Criteria permanently deleted",
    }

    # General CRUD messages
    CRUD = {
        "operation_failed": "Operation failed: {operation}",
        "internal_error": "An unexpected error occurred",
    }

def get_message(category: str, key: str, **kwargs) -> str:
    """Get a message from the specified category and format it with kwargs."""
    category_messages = getattr(Messages, category.upper(), {})
    message = category_messages.get(key, f"Message not found: {category}.{key}")
    return message.format(**kwargs) if kwargs else message
