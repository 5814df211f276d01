"""
Summary record model

Summaries are produced and stored elsewhere; this is the shape the search
engine accepts at the corpus boundary.
"""
from pydantic import BaseModel, Field, ValidationInfo, field_validator
from typing import List, Any
import datetime


class SummaryRecord(BaseModel):
    """A previously generated summary, read-only to the search engine"""

    id: str = Field(..., min_length=1, description="Unique summary ID")
    title: str = Field(default="Untitled Summary", description="Summary title")
    content: str = Field(..., description="Summary body text")
    date: datetime.date = Field(..., description="Calendar date of the summarised meeting")
    participants: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    category: str = Field(default="meeting")
    priority: str = Field(default="medium")

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "id": "summary_1",
                "title": "Product Planning Meeting",
                "content": "We discussed the Q4 roadmap and decided to prioritize the API integration.",
                "date": "2024-06-24",
                "participants": ["John Smith", "Sarah Johnson"],
                "tags": ["planning", "roadmap"],
                "category": "meeting",
                "priority": "high"
            }
        }

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        # Supabase returns UUID columns as strings, other stores may not
        if value is not None and not isinstance(value, str):
            return str(value)
        return value

    @field_validator("title", "category", "priority", mode="before")
    @classmethod
    def default_when_blank(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("participants", "tags", mode="before")
    @classmethod
    def empty_list_when_missing(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, (set, tuple)):
            return list(value)
        return value

    @field_validator("date", mode="before")
    @classmethod
    def coerce_calendar_date(cls, value: Any) -> Any:
        """Accept ISO dates, ISO timestamps and datetime objects"""
        if isinstance(value, datetime.datetime):
            return value.date()
        if isinstance(value, str) and len(value) > 10 and value[10] in ("T", " "):
            return value[:10]
        return value
