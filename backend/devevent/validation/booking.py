"""
Field-shape checks for Booking records.
"""

from typing import Any, Callable

from pydantic import BaseModel, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from devevent.models.booking import EMAIL_PATTERN
from devevent.validation.base import ValidationResult, validate_with


class BookingFields(BaseModel):
    eventId: str
    email: str

    @field_validator("eventId")
    @classmethod
    def check_event_id(cls, value: str, info: ValidationInfo) -> str:
        value = value.strip()
        is_valid_id = (info.context or {}).get("is_valid_id")
        if not value or (is_valid_id is not None and not is_valid_id(value)):
            raise PydanticCustomError("event_reference", "Invalid event reference")
        return value

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise PydanticCustomError("email_empty", "Email cannot be empty")
        if not EMAIL_PATTERN.fullmatch(value):
            raise PydanticCustomError("email_format", "Email must be valid")
        return value


LABELS = {"eventId": "Event reference"}


class BookingValidator:
    """
    Validates Booking fields.

    `is_valid_id` is the document store's identifier syntax check; the
    validator never queries the store.
    """

    def __init__(self, is_valid_id: Callable[[str], bool]):
        self.is_valid_id = is_valid_id

    def validate(self, fields: dict[str, Any]) -> ValidationResult:
        return validate_with(
            BookingFields,
            fields,
            LABELS,
            context={"is_valid_id": self.is_valid_id},
        )
