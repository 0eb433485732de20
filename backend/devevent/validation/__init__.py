from devevent.validation.base import ValidationResult
from devevent.validation.booking import BookingValidator
from devevent.validation.event import EventValidator
from devevent.validation.normalizers import derive_slug, normalize_date, normalize_time

__all__ = [
    "ValidationResult", "EventValidator", "BookingValidator",
    "derive_slug", "normalize_date", "normalize_time",
]
