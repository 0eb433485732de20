"""DevEvent: event and booking persistence with write-time validation."""

__version__ = "1.0.0"
