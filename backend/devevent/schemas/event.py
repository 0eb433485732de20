"""
Pydantic schemas for event responses.
Request bodies are passed to the write pipeline as raw mappings so every
violation is reported with its field-level message.
"""

from datetime import datetime
from pydantic import AliasChoices, BaseModel, Field


class EventResponse(BaseModel):
    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    title: str
    slug: str
    description: str
    overview: str
    image: str
    venue: str
    location: str
    date: str
    time: str
    mode: str
    audience: str
    agenda: list[str]
    organizer: str
    tags: list[str]
    createdAt: datetime
    updatedAt: datetime


class EventListResponse(BaseModel):
    message: str = "Events fetched successfully"
    events: list[EventResponse]
    total: int
