"""
Utility modules for the summary search engine
"""
from .supabase_client import get_supabase_client, supabase_configured
from .corpus import (
    SummaryCorpus,
    InMemoryCorpus,
    SupabaseCorpus,
    CorpusFetchError,
    summary_from_row
)
from .validators import normalize_query, normalize_user_id

__all__ = [
    "get_supabase_client",
    "supabase_configured",
    "SummaryCorpus",
    "InMemoryCorpus",
    "SupabaseCorpus",
    "CorpusFetchError",
    "summary_from_row",
    "normalize_query",
    "normalize_user_id",
]
