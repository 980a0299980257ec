"""Mini README: Domain model for income and expense tracking.

This package holds the plain data types shared by the store and the HTTP
layer, plus the pure statistics used by the analytics summary. Nothing here
touches the database, which keeps the percentile maths easy to test.
"""

from .models import AnalyticsSummary, Entry, EntryKind
from .statistics import continuous_percentile, summarise

__all__ = [
    "AnalyticsSummary",
    "Entry",
    "EntryKind",
    "continuous_percentile",
    "summarise",
]
