"""
Input validators for search requests
"""
from typing import Any
import logging

logger = logging.getLogger(__name__)


def normalize_query(query: Any) -> str:
    """
    Coerce raw query input into a searchable string

    Malformed input never raises: None, non-strings and whitespace-only
    strings all become an empty query, which classifies to the default
    intent and extracts no entities.

    Args:
        query: Raw query value from the caller

    Returns:
        The query text unchanged, or "" when unusable
    """
    if not isinstance(query, str):
        if query is not None:
            logger.warning(f"Ignoring non-string query of type {type(query).__name__}")
        return ""

    if not query.strip():
        return ""

    return query


def normalize_user_id(user_id: Any) -> str:
    """
    Coerce a user ID into a string

    Args:
        user_id: Raw user identifier (str, UUID, int)

    Returns:
        String user ID, "" when missing
    """
    if user_id is None:
        return ""
    return str(user_id)
