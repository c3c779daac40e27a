"""
Observability module for the HR policy assistant.

Provides per-query tracking and answered/escalated analytics.
"""

from .query_log import QueryTracker, QueryRecord, get_tracker

__all__ = ["QueryTracker", "QueryRecord", "get_tracker"]
