"""
Core service modules for the summary search engine
"""
from .entity_extraction import extract_entities, extract_dates, extract_persons, extract_topics
from .intent_detection import classify_intent
from .filter_builder import build_filters, apply_filters, display_window
from .ranking import rank_summaries, score_summary
from .response_composer import compose_response, generate_personalized_suggestions
from .analytics import AnalyticsDispatcher, LoggingAnalyticsSink, SupabaseAnalyticsSink
from .search_engine import SummarySearchEngine, create_search_engine

__all__ = [
    "extract_entities",
    "extract_dates",
    "extract_persons",
    "extract_topics",
    "classify_intent",
    "build_filters",
    "apply_filters",
    "display_window",
    "rank_summaries",
    "score_summary",
    "compose_response",
    "generate_personalized_suggestions",
    "AnalyticsDispatcher",
    "LoggingAnalyticsSink",
    "SupabaseAnalyticsSink",
    "SummarySearchEngine",
    "create_search_engine",
]
