from devevent.schemas.event import EventResponse, EventListResponse
from devevent.schemas.booking import BookingResponse

__all__ = [
    "EventResponse", "EventListResponse",
    "BookingResponse",
]
