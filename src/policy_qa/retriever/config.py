"""Configuration for retrieval system."""

import os
from dataclasses import dataclass, field
from typing import FrozenSet

DEFAULT_STOP_WORDS: FrozenSet[str] = frozenset({"what", "how", "can", "the", "for", "and", "are", "is"})


@dataclass(frozen=True)
class ScoringWeights:
    """Weights of the lexical relevance signals.

    These values are part of the scoring contract; changing them changes which
    queries are answered and which are escalated.
    """

    title: float = 0.8  # Whole query contained in title
    tag: float = 0.6  # Any tag contained in query
    content: float = 0.4  # Scaled by fraction of long query tokens found in content
    min_content_token_length: int = 4


@dataclass
class RetrievalConfig:
    """Configuration for retrieval behavior."""

    # Keyword extraction
    min_keyword_length: int = 3
    stop_words: FrozenSet[str] = DEFAULT_STOP_WORDS

    # Selection settings
    min_score: float = 0.1  # Candidates must score strictly above this
    top_n: int = 3

    # Store lookups
    max_concurrent_lookups: int = 4
    fail_closed: bool = True  # Any failed lookup drops all candidates

    weights: ScoringWeights = field(default_factory=ScoringWeights)

    @classmethod
    def from_env(cls) -> "RetrievalConfig":
        """Build config from environment variables, keeping defaults for unset ones."""
        defaults = cls()
        return cls(
            min_score=float(os.getenv("POLICY_QA_MIN_SCORE", defaults.min_score)),
            top_n=int(os.getenv("POLICY_QA_TOP_N", defaults.top_n)),
            max_concurrent_lookups=int(
                os.getenv("POLICY_QA_MAX_CONCURRENT_LOOKUPS", defaults.max_concurrent_lookups)
            ),
            fail_closed=os.getenv("POLICY_QA_FAIL_CLOSED", "true").lower() in ("1", "true", "yes"),
        )
