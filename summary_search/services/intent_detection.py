"""
Intent Detection Module
Maps user queries to search intents with an ordered regex table
"""
import re
from typing import List, Pattern, Tuple
from summary_search.models.query import IntentType, SearchIntent
import logging

logger = logging.getLogger(__name__)


# Intent patterns (ordered by priority). The first category with a
# matching pattern wins, so a query matching several categories always
# resolves to the earliest one below.
INTENT_PATTERNS: List[Tuple[IntentType, List[Pattern]]] = [
    (
        IntentType.FIND_DECISIONS,
        [
            re.compile(r"what.*decide", re.IGNORECASE),
            re.compile(r"decisions?.*made", re.IGNORECASE),
            re.compile(r"agreed.*on", re.IGNORECASE),
            re.compile(r"concluded.*that", re.IGNORECASE),
            re.compile(r"final.*decision", re.IGNORECASE),
        ]
    ),
    (
        IntentType.FIND_ACTION_ITEMS,
        [
            re.compile(r"action.*items?", re.IGNORECASE),
            re.compile(r"tasks.*assigned", re.IGNORECASE),
            re.compile(r"who.*assigned", re.IGNORECASE),
            re.compile(r"who.*responsible", re.IGNORECASE),
            re.compile(r"next.*steps", re.IGNORECASE),
            re.compile(r"follow.*up", re.IGNORECASE),
        ]
    ),
    (
        IntentType.FIND_PARTICIPANTS,
        [
            re.compile(r"who.*attended", re.IGNORECASE),
            re.compile(r"participants", re.IGNORECASE),
            re.compile(r"people.*meeting", re.IGNORECASE),
            re.compile(r"attendees", re.IGNORECASE),
        ]
    ),
    (
        IntentType.FIND_TIMEFRAME,
        [
            re.compile(r"when.*discuss", re.IGNORECASE),
            re.compile(r"last.*week", re.IGNORECASE),
            re.compile(r"yesterday", re.IGNORECASE),
            re.compile(r"monday", re.IGNORECASE),
            re.compile(r"recent.*meeting", re.IGNORECASE),
        ]
    ),
    (
        IntentType.SUMMARIZE_TOPIC,
        [
            re.compile(r"summarize.*about", re.IGNORECASE),
            re.compile(r"tell.*me.*about", re.IGNORECASE),
            re.compile(r"overview.*of", re.IGNORECASE),
            re.compile(r"what.*happened.*with", re.IGNORECASE),
        ]
    ),
]

MATCH_CONFIDENCE = 0.8
DEFAULT_CONFIDENCE = 0.6
DEFAULT_REASONING = "default"


def classify_intent(query: str) -> SearchIntent:
    """
    Detect search intent from query

    Args:
        query: Original query text

    Returns:
        SearchIntent with the matched pattern's source as reasoning,
        or the default content search when nothing matches
    """
    logger.debug(f"Detecting intent for query: {query}")

    if query:
        for intent_type, patterns in INTENT_PATTERNS:
            for pattern in patterns:
                if pattern.search(query):
                    logger.info(f"Detected intent: {intent_type.value} (pattern: {pattern.pattern})")
                    return SearchIntent(
                        type=intent_type,
                        confidence=MATCH_CONFIDENCE,
                        reasoning=pattern.pattern
                    )

    # Fallback to content search if no pattern matched
    return default_intent()


def default_intent() -> SearchIntent:
    """Intent assigned when no pattern matches"""
    return SearchIntent(
        type=IntentType.FIND_CONTENT,
        confidence=DEFAULT_CONFIDENCE,
        reasoning=DEFAULT_REASONING
    )
