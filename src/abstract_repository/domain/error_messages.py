"""
Fixed failure messages for repository operations.

Each repository operation reports failures with exactly one message,
regardless of the underlying cause. The cause is still available on the
raised error (``__cause__`` and ``code``) for logging and inspection.

Usage:
    from abstract_repository.domain.error_messages import get_operation_message

    message = get_operation_message("get_by_id")
"""

# ========================================
# Operation Messages
# ========================================

OPERATION_MESSAGES = {
    "get_all": "Unable to retrieve the paginated list of records.",
    "get_by_id": "Unable to retrieve the record with the given identifier.",
    "create": "Unable to create the record.",
    "update": "Unable to update the record with the given identifier.",
    "delete": "Unable to delete the record with the given identifier.",
    "find_by": "Unable to find records matching the given criteria.",
    "update_or_create": "Unable to update or create the record.",
    "with_relations": "Unable to retrieve records with the requested relations.",
    "search": "Unable to search records for the given keyword.",
}

DEFAULT_OPERATION_MESSAGE = "The repository operation failed."


def get_operation_message(operation: str) -> str:
    """
    Get the fixed failure message for a repository operation.

    Args:
        operation: Operation name (e.g., "get_by_id", "search")

    Returns:
        The operation's message, or a generic message for unknown operations
    """
    return OPERATION_MESSAGES.get(operation, DEFAULT_OPERATION_MESSAGE)
