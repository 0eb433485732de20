"""
Field-shape and business-rule checks for Event records.
"""

from typing import Annotated, Any

from pydantic import BaseModel, Field, StringConstraints, field_validator
from pydantic_core import PydanticCustomError

from devevent.models.event import DESCRIPTION_MAX_LENGTH, EVENT_MODES, OVERVIEW_MAX_LENGTH
from devevent.validation.base import ValidationResult, validate_with

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class EventFields(BaseModel):
    """Writable Event fields. Unknown keys (including slug) are dropped."""

    title: NonEmptyStr
    description: Annotated[NonEmptyStr, Field(max_length=DESCRIPTION_MAX_LENGTH)]
    overview: Annotated[NonEmptyStr, Field(max_length=OVERVIEW_MAX_LENGTH)]
    image: NonEmptyStr
    venue: NonEmptyStr
    location: NonEmptyStr
    date: NonEmptyStr
    time: NonEmptyStr
    mode: NonEmptyStr
    audience: NonEmptyStr
    agenda: list[NonEmptyStr] = Field(min_length=1)
    organizer: NonEmptyStr
    tags: list[NonEmptyStr] = Field(min_length=1)

    @field_validator("mode")
    @classmethod
    def check_mode(cls, value: str) -> str:
        if value not in EVENT_MODES:
            raise PydanticCustomError(
                "event_mode",
                "Mode must be one of {modes}",
                {"modes": ", ".join(EVENT_MODES)},
            )
        return value


LABELS = {"image": "Image URL"}


class EventValidator:
    """Validates Event fields independently of storage."""

    def validate(self, fields: dict[str, Any]) -> ValidationResult:
        return validate_with(EventFields, fields, LABELS)
