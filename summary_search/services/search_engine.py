"""
Summary Search Engine
Entry point for "ask your summaries" conversational search

Processes natural language queries through:
1. Intent classification
2. Entity extraction
3. Filter building
4. Corpus fetch (external)
5. Filtering, scoring and ranking
6. Response composition
7. Analytics (fire-and-forget)

A failing search never raises to the caller; it degrades to a fixed
fallback response.
"""
import uuid
from datetime import date, datetime, timezone
from typing import Any, Callable, List, Optional
from summary_search.models.query import SearchQuery
from summary_search.models.responses import ConversationalResponse, AnalyticsEvent
from summary_search.services.intent_detection import classify_intent
from summary_search.services.entity_extraction import extract_entities
from summary_search.services.filter_builder import build_filters, display_window
from summary_search.services.ranking import rank_summaries
from summary_search.services.response_composer import (
    compose_response,
    fallback_response,
    generate_personalized_suggestions,
    get_random_suggestions,
    CLARIFICATION_PROMPT
)
from summary_search.services.analytics import (
    AnalyticsDispatcher,
    AnalyticsSink,
    LoggingAnalyticsSink,
    SupabaseAnalyticsSink
)
from summary_search.utils.corpus import SummaryCorpus, InMemoryCorpus, SupabaseCorpus
from summary_search.utils.supabase_client import supabase_configured
from summary_search.utils.validators import normalize_query, normalize_user_id
from summary_search.config import settings
import logging

logger = logging.getLogger(__name__)


class SummarySearchEngine:
    """Natural language search over a user's summaries"""

    def __init__(
        self,
        corpus: SummaryCorpus,
        analytics_sink: Optional[AnalyticsSink] = None,
        today: Optional[Callable[[], date]] = None
    ):
        self.corpus = corpus
        self.analytics = AnalyticsDispatcher(analytics_sink or LoggingAnalyticsSink())
        self._today = today or date.today

    def parse_query(self, query: Any, user_id: Any) -> SearchQuery:
        """
        Parse a natural language query into a structured search

        Args:
            query: Raw query text (malformed input becomes an empty query)
            user_id: Requesting user

        Returns:
            SearchQuery with intent, entities and filters
        """
        text = normalize_query(query)

        intent = classify_intent(text)
        entities = extract_entities(text)
        filters = build_filters(entities, today=self._today())

        return SearchQuery(
            id=f"search_{uuid.uuid4().hex}",
            user_id=normalize_user_id(user_id),
            query=text,
            intent=intent,
            entities=entities,
            filters=filters,
            timestamp=datetime.now(timezone.utc)
        )

    async def search(self, query: Any, user_id: Any) -> ConversationalResponse:
        """
        Answer a natural language question from the user's summaries

        Args:
            query: Free-text question
            user_id: Owner of the corpus to search

        Returns:
            ConversationalResponse; the fallback response on any failure
        """
        try:
            search_query = self.parse_query(query, user_id)

            logger.info(
                f"[{search_query.id}] Search from user {search_query.user_id}: "
                f"{search_query.query!r} (intent={search_query.intent.type.value})"
            )

            summaries = await self.corpus.get_user_summaries(search_query.user_id)

            results = rank_summaries(search_query, summaries)

            response = compose_response(
                search_query,
                results,
                time_window=display_window(search_query.filters, today=self._today())
            )

            if not search_query.query:
                response.clarification_needed = CLARIFICATION_PROMPT

            self._track_search(search_query, len(results))

            logger.info(
                f"[{search_query.id}] Search completed: {len(results)} results, "
                f"confidence={response.confidence:.2f}"
            )

            return response

        except Exception as e:
            logger.error(f"Error in natural language search: {e}", exc_info=True)
            return fallback_response()

    async def get_search_suggestions(self, user_id: Any) -> List[str]:
        """
        Get search suggestions based on the user's content

        Args:
            user_id: Owner of the corpus

        Returns:
            Personalised suggestions; random example queries on failure
        """
        try:
            summaries = await self.corpus.get_user_summaries(normalize_user_id(user_id))
            return generate_personalized_suggestions(summaries)
        except Exception as e:
            logger.error(f"Error getting search suggestions: {e}", exc_info=True)
            return get_random_suggestions()

    def _track_search(self, search_query: SearchQuery, result_count: int) -> None:
        """Schedule the analytics event; never waits on it"""
        if not settings.analytics_enabled:
            return

        self.analytics.emit(
            AnalyticsEvent(
                query=search_query.query,
                intent_type=search_query.intent.type,
                result_count=result_count,
                timestamp=search_query.timestamp
            )
        )


def create_search_engine() -> SummarySearchEngine:
    """
    Build an engine from settings

    Uses Supabase for both corpus and analytics when configured, otherwise
    an empty in-memory corpus with log-only analytics.
    """
    if supabase_configured():
        logger.info("Search engine using Supabase corpus")
        return SummarySearchEngine(
            corpus=SupabaseCorpus(),
            analytics_sink=SupabaseAnalyticsSink()
        )

    logger.info("Supabase not configured; search engine using in-memory corpus")
    return SummarySearchEngine(corpus=InMemoryCorpus())
