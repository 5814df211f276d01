"""
Search analytics

Events are fire-and-forget: the engine schedules them and never awaits or
inspects the outcome. A failing sink is logged and otherwise ignored.
"""
import asyncio
from typing import Protocol, Set
from summary_search.models.responses import AnalyticsEvent
from summary_search.utils.supabase_client import insert_search_event
import logging

logger = logging.getLogger(__name__)


class AnalyticsSink(Protocol):
    """Destination for search analytics events"""

    async def record(self, event: AnalyticsEvent) -> None:
        ...


class LoggingAnalyticsSink:
    """Writes each event to the log"""

    async def record(self, event: AnalyticsEvent) -> None:
        logger.info(
            f"Search tracked: query={event.query!r} intent={event.intent_type.value} "
            f"results={event.result_count} at={event.timestamp.isoformat()}"
        )


class SupabaseAnalyticsSink:
    """Inserts each event into the analytics table"""

    async def record(self, event: AnalyticsEvent) -> None:
        await insert_search_event(event.model_dump(mode="json"))


class AnalyticsDispatcher:
    """
    Schedules analytics events as detached background tasks

    Task references are held until completion so pending events are not
    garbage collected mid-flight.
    """

    def __init__(self, sink: AnalyticsSink):
        self.sink = sink
        self._pending: Set[asyncio.Task] = set()

    def emit(self, event: AnalyticsEvent) -> None:
        """Schedule an event without waiting for it"""
        try:
            task = asyncio.get_running_loop().create_task(self._deliver(event))
        except RuntimeError:
            logger.warning("No running event loop; dropping analytics event")
            return

        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _deliver(self, event: AnalyticsEvent) -> None:
        try:
            await self.sink.record(event)
        except Exception as e:
            logger.warning(f"Analytics delivery failed: {e}")

    async def drain(self) -> None:
        """Wait for pending events (shutdown and tests)"""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    @property
    def pending_count(self) -> int:
        return len(self._pending)
