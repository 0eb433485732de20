"""
Infrastructure layer - document store integrations.
Keeps the write pipeline clean from driver details.
"""

from .store import DocumentStore, ASCENDING, DESCENDING
from .memory_store import MemoryDocumentStore

__all__ = ['DocumentStore', 'MemoryDocumentStore', 'ASCENDING', 'DESCENDING']
