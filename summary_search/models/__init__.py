"""
Data models for the summary search engine
"""
from .summary import SummaryRecord
from .query import (
    IntentType,
    EntityType,
    SearchIntent,
    SearchEntity,
    DateRange,
    SearchFilters,
    SearchQuery
)
from .responses import (
    MatchType,
    SearchMatch,
    ResultMetadata,
    SearchResult,
    ConversationalResponse,
    AnalyticsEvent
)

__all__ = [
    # Corpus
    "SummaryRecord",
    # Query
    "IntentType",
    "EntityType",
    "SearchIntent",
    "SearchEntity",
    "DateRange",
    "SearchFilters",
    "SearchQuery",
    # Response
    "MatchType",
    "SearchMatch",
    "ResultMetadata",
    "SearchResult",
    "ConversationalResponse",
    "AnalyticsEvent",
]
