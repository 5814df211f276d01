"""
Summary Search Engine
Conversational natural language search over meeting and call summaries
"""
from summary_search.services.search_engine import SummarySearchEngine, create_search_engine
from summary_search.models import ConversationalResponse, SummaryRecord

__version__ = "1.0.0"

__all__ = [
    "SummarySearchEngine",
    "create_search_engine",
    "ConversationalResponse",
    "SummaryRecord",
]
