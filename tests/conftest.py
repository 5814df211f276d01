"""
Shared fixtures for summary search tests

All relative dates resolve against TODAY, a Wednesday, so "last Monday"
is 2024-06-24.
"""
from datetime import date, datetime, timezone
from typing import List

import pytest

from summary_search.models.query import SearchQuery, SearchIntent, IntentType, SearchFilters
from summary_search.models.responses import SearchResult, ResultMetadata
from summary_search.services.search_engine import SummarySearchEngine
from summary_search.utils.corpus import InMemoryCorpus


TODAY = date(2024, 6, 26)
USER_ID = "user-123"


SUMMARY_ROWS = [
    {
        "id": "summary_1",
        "title": "Product Planning Meeting",
        "content": (
            "We discussed the Q4 roadmap and decided to prioritize the API integration. "
            "Sarah will lead the technical specification work. "
            "The deadline is set for end of November."
        ),
        "date": "2024-06-24",
        "participants": ["John Smith", "Sarah Johnson", "Mike Chen"],
        "tags": ["planning", "product", "roadmap"],
        "category": "meeting",
        "priority": "high"
    },
    {
        "id": "summary_2",
        "title": "Engineering Standup",
        "content": (
            "Daily standup covering sprint progress. API integration is 60% complete. "
            "Sarah reported some challenges with authentication. "
            "Next steps include code review and testing."
        ),
        "date": "2024-06-23",
        "participants": ["Sarah Johnson", "Mike Chen", "Alex Wilson"],
        "tags": ["standup", "engineering", "api"],
        "category": "meeting",
        "priority": "medium"
    },
]


@pytest.fixture
def summary_rows():
    """Fresh copies of the sample summary rows"""
    return [dict(row) for row in SUMMARY_ROWS]


@pytest.fixture
def corpus(summary_rows):
    """In-memory corpus holding the sample summaries for USER_ID"""
    return InMemoryCorpus({USER_ID: summary_rows})


@pytest.fixture
def engine(corpus):
    """Engine pinned to TODAY"""
    return SummarySearchEngine(corpus=corpus, today=lambda: TODAY)


@pytest.fixture
def parse(engine):
    """Parse a query the way search() does"""
    def _parse(text: str) -> SearchQuery:
        return engine.parse_query(text, USER_ID)
    return _parse


def make_query(intent_type: IntentType = IntentType.FIND_CONTENT, text: str = "query") -> SearchQuery:
    """Build a SearchQuery with a fixed intent and no entities"""
    return SearchQuery(
        id="search_test",
        user_id=USER_ID,
        query=text,
        intent=SearchIntent(type=intent_type, confidence=0.8, reasoning="test"),
        entities=[],
        filters=SearchFilters(),
        timestamp=datetime(2024, 6, 26, 9, 0, tzinfo=timezone.utc)
    )


def make_result(
    summary_id: str,
    content: str,
    score: float = 0.5,
    participants: List[str] = None
) -> SearchResult:
    """Build a SearchResult without going through the ranker"""
    return SearchResult(
        summary_id=summary_id,
        title=f"Summary {summary_id}",
        content=content,
        relevance_score=score,
        matched_segments=[],
        metadata=ResultMetadata(
            date=TODAY,
            participants=participants or [],
            tags=[],
            category="meeting",
            priority="medium"
        ),
        reasoning="test"
    )
