"""
Supabase client wrapper for the summary search engine
"""
import asyncio
from supabase import create_client, Client
from typing import Any, Dict, List
from functools import lru_cache
from summary_search.config import settings
import logging

logger = logging.getLogger(__name__)


def supabase_configured() -> bool:
    """True when a Supabase URL and at least one key are set"""
    return bool(
        settings.supabase_url
        and (settings.supabase_anon_key or settings.supabase_service_role_key)
    )


@lru_cache()
def get_supabase_client(use_service_role: bool = False) -> Client:
    """
    Get Supabase client instance (cached)

    Args:
        use_service_role: If True, use service role key (bypasses RLS)

    Returns:
        Supabase client instance
    """
    if not supabase_configured():
        raise RuntimeError("Supabase is not configured (set SUPABASE_URL and a key)")

    try:
        key = (
            settings.supabase_service_role_key
            if use_service_role and settings.supabase_service_role_key
            else settings.supabase_anon_key or settings.supabase_service_role_key
        )
        client = create_client(settings.supabase_url, key)
        logger.info(f"Supabase client created (service_role={use_service_role})")
        return client
    except Exception as e:
        logger.error(f"Failed to create Supabase client: {e}")
        raise


async def fetch_user_summaries(user_id: str, use_service_role: bool = True) -> List[Dict[str, Any]]:
    """
    Fetch all summary rows visible to a user

    Args:
        user_id: Owner of the summaries
        use_service_role: Whether to use service role

    Returns:
        Raw rows from the summaries table
    """
    client = get_supabase_client(use_service_role=use_service_role)
    try:
        # Sync client: run the request off the event loop
        result = await asyncio.to_thread(
            lambda: client.table(settings.summaries_table)
                .select("id, title, content, summary_data, created_at")
                .eq("user_id", user_id)
                .execute()
        )
        return result.data or []
    except Exception as e:
        logger.error(f"Summary fetch failed for user {user_id}: {e}")
        raise


async def insert_search_event(event: Dict[str, Any], use_service_role: bool = True) -> None:
    """
    Insert one search analytics row

    Args:
        event: JSON-serialisable analytics record
        use_service_role: Whether to use service role
    """
    client = get_supabase_client(use_service_role=use_service_role)
    await asyncio.to_thread(
        lambda: client.table(settings.analytics_table).insert(event).execute()
    )
