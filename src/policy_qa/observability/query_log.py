"""
Query Tracking Module

Records every chat turn (query, outcome, confidence, latency) and derives the
analytics HR admins use:
- answered vs escalated counts and average confidence
- most frequently answered and unanswered questions
- policy gap suggestions from escalated questions

Records are kept in memory, oldest dropped beyond `max_records`;
`export_metrics` writes them out as JSON.
"""

import json
import logging
import time
import uuid
from collections import Counter, defaultdict, deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Deque, Dict, List, Optional

from ..agent.models import ChatResult, ResponseType

logger = logging.getLogger(__name__)


@dataclass
class QueryRecord:
    """One tracked chat turn."""

    query_id: str
    timestamp: datetime
    query_text: str
    user_id: Optional[str] = None
    session_id: Optional[str] = None

    # Outcome
    response_type: Optional[str] = None
    confidence: float = 0.0
    matched_policies: List[str] = field(default_factory=list)
    response_time_ms: float = 0.0
    error: Optional[str] = None

    def set_result(self, result: ChatResult):
        """Copy the outcome of a chat turn onto the record."""
        self.response_type = result.response_type.value
        self.confidence = result.confidence
        self.matched_policies = list(result.matched_policy_ids)

    def to_dict(self) -> Dict:
        """Convert to dictionary for logging/storage."""
        return {
            "query_id": self.query_id,
            "timestamp": self.timestamp.isoformat(),
            "user_id": self.user_id,
            "session_id": self.session_id,
            "query_text": self.query_text,
            "response_type": self.response_type,
            "confidence": self.confidence,
            "matched_policies": self.matched_policies,
            "response_time_ms": round(self.response_time_ms, 1),
            "error": self.error,
        }


class QueryTracker:
    """
    Tracks chat turns and aggregates them.

    Usage:
        tracker = QueryTracker()

        with tracker.track_query("How many leave days do I get?", user_id="u1") as record:
            result = await workflow.arun(query)
            record.set_result(result)

        print(tracker.get_summary())
    """

    def __init__(self, enable_logging: bool = True, max_records: Optional[int] = 10000):
        """
        Args:
            enable_logging: Log each record as it is stored
            max_records: Keep only the most recent records; None keeps everything
        """
        self.enable_logging = enable_logging
        self.records: Deque[QueryRecord] = deque(maxlen=max_records)

    @contextmanager
    def track_query(self, query_text: str, user_id: Optional[str] = None, session_id: Optional[str] = None):
        """Context manager timing one chat turn and storing its record."""
        record = QueryRecord(
            query_id=str(uuid.uuid4())[:8],
            timestamp=datetime.now(),
            query_text=query_text,
            user_id=user_id,
            session_id=session_id,
        )
        start_time = time.perf_counter()

        try:
            yield record
        except Exception as e:
            record.response_type = ResponseType.ERROR.value
            record.error = str(e)
            raise
        finally:
            record.response_time_ms = (time.perf_counter() - start_time) * 1000
            self.records.append(record)

            if self.enable_logging:
                logger.info(f"Query record: {json.dumps(record.to_dict())}")

    def get_summary(self) -> Dict[str, Any]:
        """Aggregate counts, confidence and latency over all tracked queries."""
        records = self.records
        if not records:
            return {"total_queries": 0}

        successful = [r for r in records if r.response_type == ResponseType.POLICY_MATCH.value]
        escalated = [r for r in records if r.response_type == ResponseType.ESCALATION.value]

        return {
            "total_queries": len(records),
            "successful_queries": len(successful),
            "escalated_queries": len(escalated),
            "failed_queries": sum(1 for r in records if r.response_type == ResponseType.ERROR.value),
            "avg_confidence_score": round(sum(r.confidence for r in records) / len(records), 3),
            "avg_response_time_ms": round(sum(r.response_time_ms for r in records) / len(records), 1),
            "unique_users": len({r.user_id for r in records if r.user_id}),
        }

    def top_answered_queries(self, limit: int = 10) -> List[Dict[str, Any]]:
        """Most frequent answered questions, ties broken by average confidence."""
        confidences = defaultdict(list)
        for r in self.records:
            if r.response_type == ResponseType.POLICY_MATCH.value:
                confidences[r.query_text].append(r.confidence)

        rows = [
            {"query": query, "frequency": len(scores), "avg_confidence": sum(scores) / len(scores)}
            for query, scores in confidences.items()
        ]
        rows.sort(key=lambda row: (row["frequency"], row["avg_confidence"]), reverse=True)
        return rows[:limit]

    def top_unanswered_queries(self, limit: int = 10) -> List[Dict[str, Any]]:
        """Most frequent escalated questions."""
        counts = Counter(r.query_text for r in self.records if r.response_type == ResponseType.ESCALATION.value)
        return [{"query": query, "frequency": freq} for query, freq in counts.most_common(limit)]

    def suggest_policy_gaps(self, message: str, limit: int = 3) -> List[Dict[str, Any]]:
        """
        Suggest missing policies from escalated questions resembling a message.

        Args:
            message: Text to look for (case-insensitive) in escalated questions
            limit: Maximum suggestions

        Returns:
            Suggestions with the question, how often it was escalated, and a
            suggested policy label
        """
        needle = message.lower()
        counts = Counter(
            r.query_text
            for r in self.records
            if r.response_type == ResponseType.ESCALATION.value and needle in r.query_text.lower()
        )
        return [
            {"query": query, "frequency": freq, "suggestedPolicy": f"Policy needed for: {query}"}
            for query, freq in counts.most_common(limit)
        ]

    def export_metrics(self, filepath: str):
        """Export all records to JSON file."""
        data = {
            "exported_at": datetime.now().isoformat(),
            "summary": self.get_summary(),
            "queries": [r.to_dict() for r in self.records],
        }

        with open(filepath, "w") as f:
            json.dump(data, f, indent=2)

        logger.info(f"Exported {len(self.records)} query records to {filepath}")


# Global tracker instance
_global_tracker: Optional[QueryTracker] = None


def get_tracker() -> QueryTracker:
    """Get or create global tracker instance."""
    global _global_tracker
    if _global_tracker is None:
        _global_tracker = QueryTracker()
    return _global_tracker
