"""
Summary corpus collaborators

The engine only reads summaries. Every row crossing this boundary is
validated into a SummaryRecord; a malformed row raises rather than being
passed on untyped.
"""
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Union
from summary_search.models.summary import SummaryRecord
from summary_search.utils.supabase_client import fetch_user_summaries
import logging

logger = logging.getLogger(__name__)


# Fields that may live inside the summaries.summary_data JSON column
SUMMARY_DATA_FIELDS = ("participants", "tags", "category", "priority", "date")


class CorpusFetchError(Exception):
    """The summary store could not be read"""


class SummaryCorpus(Protocol):
    """Read access to a user's summaries"""

    async def get_user_summaries(self, user_id: str) -> List[SummaryRecord]:
        ...


def summary_from_row(row: Union[SummaryRecord, Mapping[str, Any]]) -> SummaryRecord:
    """
    Validate a raw summary row into a SummaryRecord

    Flat rows are accepted as-is. Rows shaped like the summaries table
    have participants/tags/category/priority/date read from summary_data,
    with created_at standing in for a missing date.

    Raises:
        pydantic.ValidationError: If the row is malformed
    """
    if isinstance(row, SummaryRecord):
        return row

    data: Dict[str, Any] = dict(row)
    summary_data = data.pop("summary_data", None) or {}

    if isinstance(summary_data, Mapping):
        for field in SUMMARY_DATA_FIELDS:
            if data.get(field) is None and summary_data.get(field) is not None:
                data[field] = summary_data[field]

    created_at = data.pop("created_at", None)
    if data.get("date") is None and created_at is not None:
        data["date"] = created_at

    return SummaryRecord.model_validate(data)


def summaries_from_rows(rows: Sequence[Union[SummaryRecord, Mapping[str, Any]]]) -> List[SummaryRecord]:
    """Validate a batch of rows, failing on the first malformed one"""
    return [summary_from_row(row) for row in rows]


class InMemoryCorpus:
    """Corpus held in process memory, keyed by user ID"""

    def __init__(self, summaries_by_user: Optional[Mapping[str, Sequence[Any]]] = None):
        self._rows: Dict[str, List[Any]] = {
            user_id: list(rows)
            for user_id, rows in (summaries_by_user or {}).items()
        }

    def add(self, user_id: str, row: Union[SummaryRecord, Mapping[str, Any]]) -> None:
        self._rows.setdefault(user_id, []).append(row)

    async def get_user_summaries(self, user_id: str) -> List[SummaryRecord]:
        return summaries_from_rows(self._rows.get(user_id, []))


class SupabaseCorpus:
    """Corpus backed by the Supabase summaries table"""

    async def get_user_summaries(self, user_id: str) -> List[SummaryRecord]:
        try:
            rows = await fetch_user_summaries(user_id)
        except Exception as e:
            raise CorpusFetchError(f"Could not load summaries for user {user_id}") from e

        logger.debug(f"Loaded {len(rows)} summary rows for user {user_id}")

        return summaries_from_rows(rows)
