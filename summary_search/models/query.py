"""
Query-side models: intent, entities, filters and the parsed search query
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime
from enum import Enum


class IntentType(str, Enum):
    """Types of detected intents"""
    FIND_CONTENT = "find_content"
    FIND_DECISIONS = "find_decisions"
    FIND_ACTION_ITEMS = "find_action_items"
    FIND_PARTICIPANTS = "find_participants"
    FIND_TIMEFRAME = "find_timeframe"
    SUMMARIZE_TOPIC = "summarize_topic"


class EntityType(str, Enum):
    """Types of entities extracted from a query"""
    PERSON = "person"
    DATE = "date"
    TOPIC = "topic"
    PROJECT = "project"
    DECISION = "decision"
    ACTION = "action"
    LOCATION = "location"


class SearchIntent(BaseModel):
    """Detected intent from query"""

    type: IntentType = Field(..., description="Detected intent")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Confidence score")
    reasoning: str = Field(..., description="Pattern that selected this intent")


class SearchEntity(BaseModel):
    """A fragment of the query recognised as a date, person, topic, ..."""

    type: EntityType
    value: str = Field(..., description="Matched substring of the query")
    confidence: float = Field(..., ge=0.0, le=1.0)
    start_index: int = Field(..., ge=0)
    end_index: int = Field(..., ge=0)


class DateRange(BaseModel):
    """Inclusive calendar date range"""

    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


class SearchFilters(BaseModel):
    """
    Filters derived from extracted entities

    A field left as None places no constraint on the corpus.
    """

    date_range: Optional[DateRange] = None
    participants: Optional[List[str]] = None
    tags: Optional[List[str]] = None

    def is_empty(self) -> bool:
        return self.date_range is None and not self.participants and not self.tags


class SearchQuery(BaseModel):
    """A parsed natural language query, built once per search call"""

    id: str = Field(..., description="Unique query ID for tracking")
    user_id: str
    query: str = Field(..., description="Original query text")
    intent: SearchIntent
    entities: List[SearchEntity] = Field(default_factory=list)
    filters: SearchFilters = Field(default_factory=SearchFilters)
    timestamp: datetime

    class Config:
        json_schema_extra = {
            "example": {
                "id": "search_5f1c0d9e8a7b4c3d",
                "user_id": "user-123",
                "query": "What did we decide about the product roadmap last Monday?",
                "intent": {
                    "type": "find_decisions",
                    "confidence": 0.8,
                    "reasoning": "what.*decide"
                },
                "entities": [
                    {
                        "type": "date",
                        "value": "last Monday",
                        "confidence": 0.9,
                        "start_index": 45,
                        "end_index": 56
                    }
                ],
                "filters": {
                    "date_range": {"start": "2024-06-24", "end": "2024-06-24"},
                    "tags": ["product", "roadmap"]
                },
                "timestamp": "2024-06-26T09:30:00Z"
            }
        }
