"""
Relevance Ranker
Scores summaries against a parsed query and ranks those above threshold

Scoring formula:
    keyword_score = matched_query_tokens / query_tokens * 0.6
    entity_score  = sum(entity.confidence * 0.4) for entities found in content
    score         = min(keyword_score + entity_score, 1.0)

Entity scores are additive, so an entity-heavy query can saturate the
score on entities alone. The score is clamped before the threshold check.
"""
from typing import List, NamedTuple, Optional
from summary_search.models.query import SearchQuery
from summary_search.models.summary import SummaryRecord
from summary_search.models.responses import SearchMatch, SearchResult, ResultMetadata, MatchType
from summary_search.services.filter_builder import apply_filters
from summary_search.config import settings
import logging

logger = logging.getLogger(__name__)


KEYWORD_WEIGHT = 0.6
ENTITY_WEIGHT = 0.4
EXACT_MATCH_CONFIDENCE = 1.0


class ScoredSummary(NamedTuple):
    relevance_score: float
    matches: List[SearchMatch]


def percent(score: float) -> int:
    """Whole percentage, halves rounded up"""
    return int(score * 100 + 0.5)


def tokenize(text: str) -> List[str]:
    """Lower-cased whitespace tokens"""
    return text.lower().split()


# =============================================================================
# SCORING
# =============================================================================

def calculate_keyword_score(query_tokens: List[str], content_tokens: List[str]) -> float:
    """
    Share of query tokens contained in some content token, weighted

    Args:
        query_tokens: Lower-cased query tokens
        content_tokens: Lower-cased content tokens

    Returns:
        Keyword component of the relevance score (0.0 to 0.6)
    """
    if not query_tokens:
        return 0.0

    matching = sum(
        1 for token in query_tokens
        if any(token in content_token for content_token in content_tokens)
    )

    return (matching / len(query_tokens)) * KEYWORD_WEIGHT


def calculate_entity_score(query: SearchQuery, content: str) -> float:
    """Additive boost for every entity value present in the content"""
    content_lower = content.lower()
    score = 0.0

    for entity in query.entities:
        if entity.value.lower() in content_lower:
            score += entity.confidence * ENTITY_WEIGHT

    return score


def calculate_relevance_score(query: SearchQuery, summary: SummaryRecord) -> float:
    """
    Calculate the clamped relevance score of one summary

    Args:
        query: Parsed search query
        summary: Candidate summary

    Returns:
        Relevance score (0.0 to 1.0)
    """
    keyword_score = calculate_keyword_score(tokenize(query.query), tokenize(summary.content))
    entity_score = calculate_entity_score(query, summary.content)

    return min(keyword_score + entity_score, 1.0)


def find_matches(query_text: str, content: str) -> List[SearchMatch]:
    """
    Locate each query token's first occurrence in the content

    Args:
        query_text: Raw query text
        content: Summary content

    Returns:
        One exact SearchMatch per query token found
    """
    matches = []
    content_lower = content.lower()

    for token in tokenize(query_text):
        index = content_lower.find(token)
        if index == -1:
            continue
        matches.append(
            SearchMatch(
                text=content[index:index + len(token)],
                start_index=index,
                end_index=index + len(token),
                match_type=MatchType.EXACT,
                confidence=EXACT_MATCH_CONFIDENCE
            )
        )

    return matches


def score_summary(query: SearchQuery, summary: SummaryRecord) -> ScoredSummary:
    """Score a summary and collect its highlight spans"""
    return ScoredSummary(
        relevance_score=calculate_relevance_score(query, summary),
        matches=find_matches(query.query, summary.content)
    )


# =============================================================================
# RANKING
# =============================================================================

def build_result(summary: SummaryRecord, scored: ScoredSummary) -> SearchResult:
    """Convert a scored summary into a SearchResult"""
    return SearchResult(
        summary_id=summary.id,
        title=summary.title,
        content=summary.content,
        relevance_score=scored.relevance_score,
        matched_segments=scored.matches,
        metadata=ResultMetadata(
            date=summary.date,
            participants=list(summary.participants),
            tags=list(summary.tags),
            category=summary.category,
            priority=summary.priority
        ),
        reasoning=(
            f"Matched {len(scored.matches)} segments with "
            f"{percent(scored.relevance_score)}% relevance"
        )
    )


def rank_summaries(
    query: SearchQuery,
    summaries: List[SummaryRecord],
    threshold: Optional[float] = None
) -> List[SearchResult]:
    """
    Filter, score and rank summaries for a query

    Filters always run before scoring; scoring only ranks and thresholds.

    Args:
        query: Parsed search query
        summaries: User's summary corpus
        threshold: Minimum (exclusive) relevance score

    Returns:
        Results sorted by relevance (descending), ties by summary ID
    """
    if threshold is None:
        threshold = settings.relevance_threshold

    candidates = apply_filters(summaries, query.filters)

    results = []
    for summary in candidates:
        scored = score_summary(query, summary)
        if scored.relevance_score > threshold:
            results.append(build_result(summary, scored))

    results.sort(key=lambda r: (-r.relevance_score, r.summary_id))

    logger.info(
        f"Ranking complete: {len(results)} of {len(candidates)} candidates "
        f"above threshold {threshold}"
    )

    return results
