"""
Centralized enum definitions for the application.

All enums are organized by domain:
- api.py: Rate limit categories
- graph.py: Network summary entry kinds, update modes

Usage:
    from scholar_graph.enums import RateLimitType, UpdateMode
"""

from scholar_graph.enums.api import RateLimitType
from scholar_graph.enums.graph import SummaryEntryType, UpdateMode

__all__ = [
    "RateLimitType",
    "SummaryEntryType",
    "UpdateMode",
]
