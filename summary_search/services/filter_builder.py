"""
Filter Builder
Turns extracted entities into structured filters and applies them to a corpus

An unset date range means no temporal restriction. The trailing default
window (display_window) is only ever shown to the user; it never removes
candidates.
"""
import re
from typing import List, Optional, Callable
from datetime import date, timedelta
from summary_search.models.query import SearchEntity, EntityType, SearchFilters, DateRange
from summary_search.models.summary import SummaryRecord
from summary_search.services.entity_extraction import WEEKDAYS, entities_of_type
from summary_search.config import settings
import logging

logger = logging.getLogger(__name__)


LAST_WEEKDAY_PATTERN = re.compile(r"last\s+(" + "|".join(WEEKDAYS) + r")", re.IGNORECASE)
LAST_WEEK_PATTERN = re.compile(r"last\s+week", re.IGNORECASE)
THIS_WEEK_PATTERN = re.compile(r"this\s+week", re.IGNORECASE)
ABSOLUTE_DATE_PATTERN = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})")


# =============================================================================
# DATE RESOLUTION
# =============================================================================

def _start_of_week(today: date) -> date:
    """Sunday on or before today"""
    return today - timedelta(days=(today.weekday() + 1) % 7)


def resolve_yesterday(value: str, today: date) -> Optional[DateRange]:
    if "yesterday" not in value.lower():
        return None
    day = today - timedelta(days=1)
    return DateRange(start=day, end=day)


def resolve_last_weekday(value: str, today: date) -> Optional[DateRange]:
    """Most recent matching weekday strictly before today (1-7 days back)"""
    match = LAST_WEEKDAY_PATTERN.search(value)
    if not match:
        return None
    target = WEEKDAYS.index(match.group(1).lower())
    days_back = (today.weekday() - target) % 7 or 7
    day = today - timedelta(days=days_back)
    return DateRange(start=day, end=day)


def resolve_this_week(value: str, today: date) -> Optional[DateRange]:
    if not THIS_WEEK_PATTERN.search(value):
        return None
    return DateRange(start=_start_of_week(today), end=today)


def resolve_last_week(value: str, today: date) -> Optional[DateRange]:
    if not LAST_WEEK_PATTERN.search(value):
        return None
    start = _start_of_week(today) - timedelta(days=7)
    return DateRange(start=start, end=start + timedelta(days=6))


def resolve_today(value: str, today: date) -> Optional[DateRange]:
    if "today" not in value.lower():
        return None
    return DateRange(start=today, end=today)


def resolve_absolute_date(value: str, today: date) -> Optional[DateRange]:
    """MM/DD/YYYY; impossible dates resolve to nothing"""
    match = ABSOLUTE_DATE_PATTERN.fullmatch(value.strip())
    if not match:
        return None
    month, day, year = (int(part) for part in match.groups())
    try:
        resolved = date(year, month, day)
    except ValueError:
        logger.debug(f"Skipping invalid date entity: {value}")
        return None
    return DateRange(start=resolved, end=resolved)


# Resolution priority. The first resolver that accepts any date entity wins,
# regardless of where that entity sits in the list.
DATE_RESOLVERS: List[Callable[[str, date], Optional[DateRange]]] = [
    resolve_yesterday,
    resolve_last_weekday,
    resolve_this_week,
    resolve_last_week,
    resolve_today,
    resolve_absolute_date,
]


def build_date_range(date_entities: List[SearchEntity], today: Optional[date] = None) -> Optional[DateRange]:
    """
    Resolve date entities to a concrete range

    Args:
        date_entities: Entities of type date
        today: Reference day (defaults to the current date)

    Returns:
        DateRange, or None when no entity resolves
    """
    today = today or date.today()

    for resolver in DATE_RESOLVERS:
        for entity in date_entities:
            date_range = resolver(entity.value, today)
            if date_range:
                return date_range

    return None


# =============================================================================
# FILTER CONSTRUCTION
# =============================================================================

def build_filters(entities: List[SearchEntity], today: Optional[date] = None) -> SearchFilters:
    """
    Build search filters from extracted entities

    Args:
        entities: Extracted entities
        today: Reference day for relative dates

    Returns:
        SearchFilters; fields with no supporting entity stay None
    """
    filters = SearchFilters()

    date_entities = entities_of_type(entities, EntityType.DATE)
    if date_entities:
        filters.date_range = build_date_range(date_entities, today)

    person_entities = entities_of_type(entities, EntityType.PERSON)
    if person_entities:
        filters.participants = [e.value for e in person_entities]

    topic_entities = entities_of_type(entities, EntityType.TOPIC)
    if topic_entities:
        filters.tags = [e.value for e in topic_entities]

    logger.debug(f"Built filters: {filters.model_dump(exclude_none=True)}")

    return filters


def display_window(
    filters: SearchFilters,
    today: Optional[date] = None,
    lookback_days: Optional[int] = None
) -> DateRange:
    """
    Date window presented alongside results

    Falls back to the trailing lookback period when the query carried no
    date. Display only; apply_filters never sees this range.
    """
    if filters.date_range:
        return filters.date_range

    today = today or date.today()
    if lookback_days is None:
        lookback_days = settings.default_lookback_days
    return DateRange(start=today - timedelta(days=lookback_days), end=today)


# =============================================================================
# FILTER APPLICATION
# =============================================================================

def _any_substring_match(needles: List[str], haystack: List[str]) -> bool:
    """Case-insensitive OR match of any needle inside any haystack item"""
    lowered = [item.lower() for item in haystack]
    return any(
        needle.lower() in item
        for needle in needles
        for item in lowered
    )


def matches_filters(summary: SummaryRecord, filters: SearchFilters) -> bool:
    """Check a single summary against all set filters"""
    if filters.date_range and not filters.date_range.contains(summary.date):
        return False

    if filters.participants and not _any_substring_match(filters.participants, summary.participants):
        return False

    if filters.tags and not _any_substring_match(filters.tags, summary.tags):
        return False

    return True


def apply_filters(summaries: List[SummaryRecord], filters: SearchFilters) -> List[SummaryRecord]:
    """
    Reduce the corpus to summaries passing every set filter

    Args:
        summaries: User's summary corpus
        filters: Filters built from the query

    Returns:
        Matching summaries in corpus order
    """
    if filters.is_empty():
        return list(summaries)

    filtered = [summary for summary in summaries if matches_filters(summary, filters)]

    logger.info(f"Filters kept {len(filtered)} of {len(summaries)} summaries")

    return filtered
