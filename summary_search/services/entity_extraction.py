"""
Entity Extraction Module
Extracts dates, person names and topic keywords from natural language queries

Each extractor is a pure function over the original query string; spans
always index into that string, never a lower-cased copy.
"""
import re
from typing import List, Pattern
from summary_search.models.query import SearchEntity, EntityType
import logging

logger = logging.getLogger(__name__)


WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

# Date phrases, in extraction order
DATE_PATTERNS: List[Pattern] = [
    re.compile(r"\blast\s+(" + "|".join(WEEKDAYS) + r")\b", re.IGNORECASE),  # last Monday
    re.compile(r"\byesterday\b", re.IGNORECASE),
    re.compile(r"\btoday\b", re.IGNORECASE),
    re.compile(r"\bthis\s+week\b", re.IGNORECASE),
    re.compile(r"\blast\s+week\b", re.IGNORECASE),
    re.compile(r"\b\d{1,2}/\d{1,2}/\d{4}\b"),  # 06/24/2024
]

# Two capitalised words in a row. Sentence-initial common nouns
# ("Budget Review") also match; accepted for this heuristic.
PERSON_PATTERN = re.compile(r"\b[A-Z][a-z]+\s+[A-Z][a-z]+\b")

# Business meeting vocabulary
TOPIC_KEYWORDS = [
    "roadmap",
    "budget",
    "hiring",
    "product",
    "feature",
    "api",
    "integration",
    "deadline",
    "milestone",
    "retrospective",
    "planning",
    "review",
    "standup",
]

TOPIC_PATTERNS: List[Pattern] = [
    re.compile(rf"\b{re.escape(topic)}\b", re.IGNORECASE)
    for topic in TOPIC_KEYWORDS
]

DATE_CONFIDENCE = 0.9
PERSON_CONFIDENCE = 0.7
TOPIC_CONFIDENCE = 0.8


def extract_with_pattern(
    query: str,
    pattern: Pattern,
    entity_type: EntityType,
    confidence: float
) -> List[SearchEntity]:
    """
    Extract every non-overlapping match of a pattern as an entity

    Args:
        query: Original query text
        pattern: Compiled regex
        entity_type: Entity type to assign
        confidence: Fixed confidence for this extractor

    Returns:
        Entities in order of appearance
    """
    return [
        SearchEntity(
            type=entity_type,
            value=match.group(0),
            confidence=confidence,
            start_index=match.start(),
            end_index=match.end()
        )
        for match in pattern.finditer(query)
    ]


def extract_dates(query: str) -> List[SearchEntity]:
    """Extract relative and absolute date phrases"""
    entities = []
    for pattern in DATE_PATTERNS:
        entities.extend(
            extract_with_pattern(query, pattern, EntityType.DATE, DATE_CONFIDENCE)
        )
    return entities


def extract_persons(query: str) -> List[SearchEntity]:
    """Extract full-name-looking word pairs"""
    return extract_with_pattern(query, PERSON_PATTERN, EntityType.PERSON, PERSON_CONFIDENCE)


def extract_topics(query: str) -> List[SearchEntity]:
    """Extract whole-word matches from the topic vocabulary"""
    entities = []
    for pattern in TOPIC_PATTERNS:
        entities.extend(
            extract_with_pattern(query, pattern, EntityType.TOPIC, TOPIC_CONFIDENCE)
        )
    return entities


def extract_entities(query: str) -> List[SearchEntity]:
    """
    Extract all entities from query text

    Extractors run unconditionally and their outputs are concatenated
    (dates, then persons, then topics). No extractor suppresses another.

    Args:
        query: Natural language query

    Returns:
        List of SearchEntity
    """
    if not query:
        return []

    logger.debug(f"Extracting entities from query: {query}")

    entities = extract_dates(query) + extract_persons(query) + extract_topics(query)

    logger.info(
        f"Extracted {len(entities)} entities: "
        f"{[(e.type.value, e.value) for e in entities]}"
    )

    return entities


def entities_of_type(entities: List[SearchEntity], entity_type: EntityType) -> List[SearchEntity]:
    """Filter entities down to one type, preserving order"""
    return [entity for entity in entities if entity.type == entity_type]
