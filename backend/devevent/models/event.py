"""
Event documents.

Key design decisions:
- `slug` carries a unique index; the store rejects a second event whose
  title derives to an existing slug
- `date` and `time` are stored as canonical strings (YYYY-MM-DD, HH:MM)
- `createdAt` / `updatedAt` are managed by the store
"""

EVENT_COLLECTION = "events"

EVENT_MODES = ("online", "offline", "hybrid")

DESCRIPTION_MAX_LENGTH = 1000
OVERVIEW_MAX_LENGTH = 500

EVENT_FIELDS = (
    "title",
    "slug",
    "description",
    "overview",
    "image",
    "venue",
    "location",
    "date",
    "time",
    "mode",
    "audience",
    "agenda",
    "organizer",
    "tags",
)

# (field, unique)
EVENT_INDEXES = (
    ("slug", True),
)
