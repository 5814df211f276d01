"""
Tests for search analytics
"""
import asyncio
import logging
import time
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from summary_search.services.analytics import (
    AnalyticsDispatcher,
    LoggingAnalyticsSink,
    SupabaseAnalyticsSink
)
from summary_search.models.responses import AnalyticsEvent
from summary_search.models.query import IntentType


def make_event() -> AnalyticsEvent:
    return AnalyticsEvent(
        query="roadmap",
        intent_type=IntentType.FIND_CONTENT,
        result_count=2,
        timestamp=datetime(2024, 6, 26, 9, 0, tzinfo=timezone.utc)
    )


@pytest.mark.asyncio
async def test_logging_sink(caplog):
    """Test the logging sink writes one line per event"""
    with caplog.at_level(logging.INFO, logger="summary_search.services.analytics"):
        await LoggingAnalyticsSink().record(make_event())

    assert "Search tracked" in caplog.text
    assert "find_content" in caplog.text


@pytest.mark.asyncio
async def test_supabase_sink_serialises_event():
    """Test the Supabase sink inserts a JSON-ready row"""
    with patch(
        "summary_search.services.analytics.insert_search_event",
        AsyncMock()
    ) as insert:
        await SupabaseAnalyticsSink().record(make_event())

    row = insert.await_args.args[0]
    assert row["intent_type"] == "find_content"
    assert row["result_count"] == 2
    assert row["timestamp"].startswith("2024-06-26T09:00:00")


@pytest.mark.asyncio
async def test_dispatcher_delivers_in_background():
    """Test emitted events reach the sink"""
    sink = AsyncMock()
    dispatcher = AnalyticsDispatcher(sink)

    dispatcher.emit(make_event())
    await dispatcher.drain()

    sink.record.assert_awaited_once()
    assert dispatcher.pending_count == 0


@pytest.mark.asyncio
async def test_dispatcher_logs_sink_errors(caplog):
    """Test sink failures are logged, not raised"""
    sink = AsyncMock()
    sink.record.side_effect = RuntimeError("sink offline")
    dispatcher = AnalyticsDispatcher(sink)

    dispatcher.emit(make_event())
    await dispatcher.drain()

    assert "Analytics delivery failed" in caplog.text


def test_dispatcher_without_loop_drops_event(caplog):
    """Test emitting outside an event loop is a logged no-op"""
    dispatcher = AnalyticsDispatcher(AsyncMock())

    dispatcher.emit(make_event())

    assert dispatcher.pending_count == 0
    assert "dropping analytics event" in caplog.text


@pytest.mark.asyncio
async def test_slow_supabase_insert_does_not_block_loop():
    """Test a slow analytics insert leaves the event loop responsive"""
    client = MagicMock()
    client.table.return_value.insert.return_value.execute.side_effect = lambda: time.sleep(0.5)
    dispatcher = AnalyticsDispatcher(SupabaseAnalyticsSink())

    with patch("summary_search.utils.supabase_client.get_supabase_client", return_value=client):
        dispatcher.emit(make_event())

        started = time.perf_counter()
        await asyncio.sleep(0.01)
        elapsed = time.perf_counter() - started

        await dispatcher.drain()

    assert elapsed < 0.3
    client.table.return_value.insert.assert_called_once()
