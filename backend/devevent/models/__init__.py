from devevent.models.event import EVENT_COLLECTION, EVENT_INDEXES
from devevent.models.booking import BOOKING_COLLECTION, BOOKING_INDEXES

INDEXES = {
    EVENT_COLLECTION: EVENT_INDEXES,
    BOOKING_COLLECTION: BOOKING_INDEXES,
}

__all__ = ["EVENT_COLLECTION", "BOOKING_COLLECTION", "INDEXES"]
