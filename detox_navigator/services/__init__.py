"""
Core services for the navigator.

This package contains the record store, its derived views (severity,
timeline, summary) and the persistence adapter that mirrors it to storage.
"""

from .collaborators import Clock, IdGenerator, SystemClock, UuidGenerator
from .persistence import PersistenceAdapter
from .record_store import RecordStore
from .result import Result
from .severity import SeverityClassifier, classify
from .summary import SummaryGenerator
from .timeline import timeline_for

__all__ = [
    "Clock",
    "IdGenerator",
    "PersistenceAdapter",
    "RecordStore",
    "Result",
    "SeverityClassifier",
    "SummaryGenerator",
    "SystemClock",
    "UuidGenerator",
    "classify",
    "timeline_for",
]
