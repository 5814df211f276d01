"""
Tests for the search orchestrator
"""
import asyncio
from datetime import date
from unittest.mock import AsyncMock, patch

import pytest
from summary_search.services.search_engine import SummarySearchEngine, create_search_engine
from summary_search.services.response_composer import (
    EXAMPLE_QUERIES,
    NO_RESULTS_ANSWER,
    FALLBACK_ANSWER,
    CLARIFICATION_PROMPT
)
from summary_search.models.query import IntentType, EntityType, DateRange
from summary_search.models.responses import AnalyticsEvent
from summary_search.utils.corpus import InMemoryCorpus, CorpusFetchError
from conftest import TODAY, USER_ID


@pytest.mark.asyncio
async def test_scenario_roadmap_decision(engine, parse):
    """Test the decision query finds last Monday's planning summary"""
    query = "What did we decide about the product roadmap last Monday?"

    parsed = parse(query)
    response = await engine.search(query, USER_ID)

    assert parsed.intent.type == IntentType.FIND_DECISIONS
    assert parsed.filters.date_range == DateRange(start=date(2024, 6, 24), end=date(2024, 6, 24))
    assert [r.summary_id for r in response.results] == ["summary_1"]
    assert response.results[0].relevance_score > 0.3
    assert "decided to prioritize the API integration" in response.answer
    assert response.confidence == response.results[0].relevance_score


@pytest.mark.asyncio
async def test_scenario_api_assignment(engine, parse):
    """Test the API assignment query is restricted to api-tagged summaries"""
    query = "Who was assigned to work on the API integration?"

    parsed = parse(query)
    response = await engine.search(query, USER_ID)

    assert parsed.intent.type in (IntentType.FIND_ACTION_ITEMS, IntentType.FIND_CONTENT)
    topics = [e.value.lower() for e in parsed.entities if e.type == EntityType.TOPIC]
    assert "api" in topics
    assert [r.summary_id for r in response.results] == ["summary_2"]
    assert response.answer == (
        "I found these action items from your meetings: "
        "Next steps include code review and testing."
    )


@pytest.mark.asyncio
async def test_scenario_nonsense_query(engine):
    """Test a query with nothing to match"""
    response = await engine.search("xyzzy plugh", USER_ID)

    assert response.results == []
    assert response.answer == NO_RESULTS_ANSWER
    assert response.confidence == 0.0


@pytest.mark.asyncio
async def test_empty_corpus():
    """Test a user with no summaries gets an empty, non-error response"""
    engine = SummarySearchEngine(corpus=InMemoryCorpus(), today=lambda: TODAY)

    response = await engine.search("What did we decide about the roadmap?", "new-user")

    assert response.results == []
    assert response.confidence == 0.0


@pytest.mark.asyncio
async def test_results_sorted_and_above_threshold(summary_rows):
    """Test results are ordered and above threshold on a mixed corpus"""
    summary_rows.append({
        "id": "summary_3",
        "content": "Sarah finished the work early.",
        "date": "2024-06-20"
    })
    engine = SummarySearchEngine(corpus=InMemoryCorpus({USER_ID: summary_rows}), today=lambda: TODAY)

    response = await engine.search("sarah specification work", USER_ID)

    scores = [r.relevance_score for r in response.results]
    assert [r.summary_id for r in response.results] == ["summary_1", "summary_3"]
    assert scores == sorted(scores, reverse=True)
    assert all(score > 0.3 for score in scores)


@pytest.mark.asyncio
async def test_filtered_summary_never_returned(summary_rows):
    """Test a summary outside the date range is excluded despite overlap"""
    engine = SummarySearchEngine(corpus=InMemoryCorpus({USER_ID: summary_rows[:1]}), today=lambda: TODAY)

    response = await engine.search("What did we decide about the roadmap yesterday?", USER_ID)

    assert response.results == []


@pytest.mark.asyncio
async def test_search_is_idempotent(engine):
    """Test repeated searches give identical responses"""
    query = "What did we decide about the product roadmap last Monday?"

    first = await engine.search(query, USER_ID)
    second = await engine.search(query, USER_ID)

    assert first.model_dump() == second.model_dump()


@pytest.mark.asyncio
async def test_time_window_defaults_to_lookback(engine):
    """Test queries without dates show the trailing window"""
    response = await engine.search("sarah", USER_ID)

    assert response.time_window == DateRange(start=date(2024, 5, 27), end=TODAY)


@pytest.mark.asyncio
async def test_corpus_failure_returns_fallback():
    """Test a failing corpus never raises to the caller"""
    corpus = AsyncMock()
    corpus.get_user_summaries.side_effect = CorpusFetchError("database down")
    engine = SummarySearchEngine(corpus=corpus, today=lambda: TODAY)

    response = await engine.search("What did we decide?", USER_ID)

    assert response.answer == FALLBACK_ANSWER
    assert response.results == []
    assert response.confidence == 0.0
    assert set(response.suggested_questions) <= set(EXAMPLE_QUERIES)


@pytest.mark.asyncio
async def test_malformed_record_returns_fallback():
    """Test a record without content degrades to the fallback"""
    corpus = InMemoryCorpus({USER_ID: [{"id": "bad", "date": "2024-06-24"}]})
    engine = SummarySearchEngine(corpus=corpus, today=lambda: TODAY)

    response = await engine.search("roadmap", USER_ID)

    assert response.answer == FALLBACK_ANSWER


@pytest.mark.asyncio
@pytest.mark.parametrize("query", [None, "", "   ", 42])
async def test_malformed_query_never_raises(engine, query):
    """Test unusable input is treated as an empty query"""
    response = await engine.search(query, USER_ID)

    assert response.results == []
    assert response.answer == NO_RESULTS_ANSWER
    assert response.clarification_needed == CLARIFICATION_PROMPT


@pytest.mark.asyncio
async def test_analytics_event_emitted(corpus):
    """Test one analytics event per search"""
    sink = AsyncMock()
    engine = SummarySearchEngine(corpus=corpus, analytics_sink=sink, today=lambda: TODAY)

    await engine.search("Who was assigned to work on the API integration?", USER_ID)
    await engine.analytics.drain()

    sink.record.assert_awaited_once()
    event = sink.record.await_args.args[0]
    assert isinstance(event, AnalyticsEvent)
    assert event.query == "Who was assigned to work on the API integration?"
    assert event.intent_type == IntentType.FIND_ACTION_ITEMS
    assert event.result_count == 1


@pytest.mark.asyncio
async def test_analytics_failure_is_swallowed(corpus):
    """Test a broken analytics sink does not affect the response"""
    sink = AsyncMock()
    sink.record.side_effect = RuntimeError("sink offline")
    engine = SummarySearchEngine(corpus=corpus, analytics_sink=sink, today=lambda: TODAY)

    response = await engine.search("roadmap", USER_ID)
    await engine.analytics.drain()

    assert response.answer != FALLBACK_ANSWER
    assert len(response.results) == 1


@pytest.mark.asyncio
async def test_analytics_not_awaited(corpus):
    """Test search returns while analytics delivery is still pending"""
    release = asyncio.Event()

    class SlowSink:
        async def record(self, event):
            await release.wait()

    engine = SummarySearchEngine(corpus=corpus, analytics_sink=SlowSink(), today=lambda: TODAY)

    response = await engine.search("roadmap", USER_ID)

    assert len(response.results) == 1
    assert engine.analytics.pending_count == 1

    release.set()
    await engine.analytics.drain()
    assert engine.analytics.pending_count == 0


@pytest.mark.asyncio
async def test_analytics_disabled(corpus):
    """Test no event is scheduled when analytics are off"""
    sink = AsyncMock()
    engine = SummarySearchEngine(corpus=corpus, analytics_sink=sink, today=lambda: TODAY)

    with patch("summary_search.services.search_engine.settings.analytics_enabled", False):
        await engine.search("roadmap", USER_ID)
    await engine.analytics.drain()

    sink.record.assert_not_awaited()


@pytest.mark.asyncio
async def test_search_suggestions(engine):
    """Test personalised suggestions from the user's corpus"""
    suggestions = await engine.get_search_suggestions(USER_ID)

    assert len(suggestions) == 4
    assert suggestions[0].startswith("What did we decide about ")
    assert suggestions[1] == "Show me recent meetings with John Smith"


@pytest.mark.asyncio
async def test_search_suggestions_fallback():
    """Test suggestion failures degrade to example queries"""
    corpus = AsyncMock()
    corpus.get_user_summaries.side_effect = CorpusFetchError("database down")
    engine = SummarySearchEngine(corpus=corpus)

    suggestions = await engine.get_search_suggestions(USER_ID)

    assert len(suggestions) == 4
    assert set(suggestions) <= set(EXAMPLE_QUERIES)


def test_create_search_engine_without_supabase():
    """Test the factory falls back to an in-memory corpus"""
    with patch("summary_search.services.search_engine.supabase_configured", return_value=False):
        engine = create_search_engine()

    assert isinstance(engine.corpus, InMemoryCorpus)
