"""
Error taxonomy for the write pipeline.

Validation and normalization failures abort a write before the store is
touched. Store failures are raised by the storage collaborator and propagate
unchanged.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Violation:
    field: str
    message: str

    def as_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class DevEventError(Exception):
    """Base class for all errors raised by the persistence core."""


class ValidationError(DevEventError):
    """One or more field-level constraints were violated."""

    def __init__(self, violations: list[Violation]):
        self.violations = list(violations)
        super().__init__("; ".join(f"{v.field}: {v.message}" for v in self.violations))


class SlugDerivationError(ValidationError):
    def __init__(self, message: str = "Event title cannot produce a valid slug"):
        super().__init__([Violation("slug", message)])


class InvalidDateError(ValidationError):
    def __init__(self, message: str = "Invalid event date"):
        super().__init__([Violation("date", message)])


class InvalidTimeError(ValidationError):
    def __init__(self, message: str = "Invalid event time"):
        super().__init__([Violation("time", message)])


class DuplicateSlugError(DevEventError):
    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"An event with slug '{slug}' already exists")


class ReferentialIntegrityError(DevEventError):
    def __init__(self, message: str = "Referenced event does not exist"):
        super().__init__(message)


class NotFoundError(DevEventError):
    def __init__(self, collection: str, identifier: str):
        self.collection = collection
        self.identifier = identifier
        super().__init__(f"No document in '{collection}' matches '{identifier}'")


class StoreError(DevEventError):
    """Opaque failure from the document store (connectivity, driver errors)."""


class DuplicateKeyError(StoreError):
    """A unique index rejected the write."""

    def __init__(self, collection: str, field: Optional[str], value=None):
        self.collection = collection
        self.field = field
        self.value = value
        super().__init__(f"Duplicate key in '{collection}' on {field}={value!r}")
