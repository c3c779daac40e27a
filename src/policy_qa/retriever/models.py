from dataclasses import dataclass

from ..store.models import Policy


@dataclass
class ScoredCandidate:
    """Policy retrieved for a query, with its relevance score in [0, 1]."""

    policy: Policy
    relevance_score: float

    @property
    def policy_id(self) -> str:
        return self.policy.id
