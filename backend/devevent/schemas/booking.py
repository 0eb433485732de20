"""
Pydantic schemas for booking responses.
"""

from datetime import datetime
from pydantic import AliasChoices, BaseModel, Field


class BookingResponse(BaseModel):
    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    eventId: str
    email: str
    createdAt: datetime
    updatedAt: datetime
