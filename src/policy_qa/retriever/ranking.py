from typing import List

from .models import ScoredCandidate


def select_candidates(candidates: List[ScoredCandidate], min_score: float = 0.1, top_n: int = 3) -> List[ScoredCandidate]:
    """
    Keep the best-scoring candidates.

    Drops candidates scoring at or below `min_score`, sorts the rest by score
    descending (stable, so ties keep retrieval order) and truncates to `top_n`.
    An empty result means the query should be escalated.
    """
    kept = [c for c in candidates if c.relevance_score > min_score]
    kept.sort(key=lambda c: c.relevance_score, reverse=True)
    return kept[:top_n]
