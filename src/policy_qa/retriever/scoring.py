from typing import Optional

from ..store.models import Policy
from .config import ScoringWeights


def score_policy(query: str, policy: Policy, weights: Optional[ScoringWeights] = None) -> float:
    """
    Lexical relevance of a policy to a query, in [0, 1].

    Sums three independently bounded signals and caps the total at 1.0:
    - title: the whole query appears in the title
    - tag: some tag appears in the query (note the reversed direction)
    - content: fraction of query tokens longer than three characters that
      appear in the content

    Matching is plain substring containment, so partial-word hits count.

    Raises:
        AttributeError, TypeError: if the policy is missing text fields
    """
    weights = weights or ScoringWeights()

    query_lower = query.lower()
    title_lower = policy.title.lower()
    content_lower = policy.content.lower()

    score = 0.0

    if query_lower in title_lower:
        score += weights.title

    if any(tag.lower() in query_lower for tag in policy.tags or []):
        score += weights.tag

    query_tokens = [t for t in query_lower.split() if len(t) >= weights.min_content_token_length]
    if query_tokens:
        matches = sum(1 for t in query_tokens if t in content_lower)
        score += weights.content * (matches / len(query_tokens))

    return min(score, 1.0)
