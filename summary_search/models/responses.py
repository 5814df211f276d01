"""
Response models for the summary search engine
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime
from enum import Enum

from .query import DateRange, IntentType


class MatchType(str, Enum):
    """How a highlighted segment was matched"""
    EXACT = "exact"
    SEMANTIC = "semantic"
    CONTEXTUAL = "contextual"


class SearchMatch(BaseModel):
    """A highlighted span of summary content"""

    text: str
    start_index: int = Field(..., ge=0, description="Offset into summary content")
    end_index: int = Field(..., ge=0)
    match_type: MatchType = MatchType.EXACT
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)


class ResultMetadata(BaseModel):
    """Metadata copied from the source summary"""

    date: date
    participants: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    category: str
    priority: str


class SearchResult(BaseModel):
    """One summary that passed filtering and the relevance threshold"""

    summary_id: str
    title: str
    content: str
    relevance_score: float = Field(..., ge=0.0, le=1.0, description="Relevance score")
    matched_segments: List[SearchMatch] = Field(default_factory=list)
    metadata: ResultMetadata
    reasoning: str = Field(..., description="Human-readable score explanation")


class ConversationalResponse(BaseModel):
    """Answer returned to the caller of search()"""

    answer: str
    results: List[SearchResult] = Field(default_factory=list)
    suggested_questions: List[str] = Field(default_factory=list)
    clarification_needed: Optional[str] = None
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    time_window: Optional[DateRange] = Field(
        default=None,
        description="Date window shown to the user; display only"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "answer": "Based on your summaries, here are the key decisions I found: "
                          "We discussed the Q4 roadmap and decided to prioritize the API integration.",
                "results": [
                    {
                        "summary_id": "summary_1",
                        "title": "Product Planning Meeting",
                        "content": "We discussed the Q4 roadmap and decided to prioritize the API integration.",
                        "relevance_score": 0.56,
                        "matched_segments": [
                            {
                                "text": "roadmap",
                                "start_index": 20,
                                "end_index": 27,
                                "match_type": "exact",
                                "confidence": 1.0
                            }
                        ],
                        "metadata": {
                            "date": "2024-06-24",
                            "participants": ["John Smith", "Sarah Johnson"],
                            "tags": ["planning", "roadmap"],
                            "category": "meeting",
                            "priority": "high"
                        },
                        "reasoning": "Matched 3 segments with 56% relevance"
                    }
                ],
                "suggested_questions": [
                    "What action items came from these meetings?",
                    "Who else was involved in these discussions?",
                    "When was this topic last discussed?"
                ],
                "confidence": 0.56,
                "time_window": {"start": "2024-06-24", "end": "2024-06-24"}
            }
        }


class AnalyticsEvent(BaseModel):
    """Search analytics record, emitted fire-and-forget"""

    query: str
    intent_type: IntentType
    result_count: int = Field(..., ge=0)
    timestamp: datetime
