"""
Booking documents referencing an event by identifier.

Key design decisions:
- `eventId` is a weak reference; existence is checked by the write
  interceptor, not by the store
- Index on `eventId` for "bookings of this event" lookups
- `email` is stored trimmed and lowercased
"""

import re

BOOKING_COLLECTION = "bookings"

BOOKING_FIELDS = ("eventId", "email")

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

# (field, unique)
BOOKING_INDEXES = (
    ("eventId", False),
)
