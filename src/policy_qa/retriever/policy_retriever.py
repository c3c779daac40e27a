import logging
from typing import List, Optional

from ..store.base import PolicyStore
from ..store.models import Policy
from .candidates import CandidateRetriever
from .config import RetrievalConfig
from .keywords import extract_keywords
from .models import ScoredCandidate
from .ranking import select_candidates
from .scoring import score_policy

logger = logging.getLogger(__name__)


class PolicyRetriever:
    """
    Keyword-driven policy retriever.

    Runs one retrieval pass per query against the store:
    keywords -> candidate lookup -> scoring -> selection.
    Nothing is cached between calls, so every query sees the store as it is now.
    """

    def __init__(self, store: PolicyStore, config: Optional[RetrievalConfig] = None):
        """
        Args:
            store: Policy store to search
            config: Retrieval settings (threshold, top-N, stop words, concurrency)
        """
        self.store = store
        self.config = config or RetrievalConfig()
        self.candidates = CandidateRetriever(store, self.config)

    def retrieve(self, query: str) -> List[ScoredCandidate]:
        """
        Retrieve the policies that should ground the answer to a query.

        Args:
            query: User question

        Returns:
            Up to `top_n` scored candidates, best first. Empty when the query
            should be escalated.
        """
        keywords = extract_keywords(query, self.config)
        logger.info(f"Retrieving policies for query: '{query}' (keywords: {keywords})")
        if not keywords:
            return []

        policies = self.candidates.retrieve(keywords)
        return self._rank(query, policies)

    async def aretrieve(self, query: str) -> List[ScoredCandidate]:
        """Async version of `retrieve`; store lookups run concurrently."""
        keywords = extract_keywords(query, self.config)
        logger.info(f"Retrieving policies for query: '{query}' (keywords: {keywords})")
        if not keywords:
            return []

        policies = await self.candidates.aretrieve(keywords)
        return self._rank(query, policies)

    def score_candidates(self, query: str, policies: List[Policy]) -> List[ScoredCandidate]:
        """Score policies against the query, skipping malformed records."""
        scored = []
        for policy in policies:
            try:
                score = score_policy(query, policy, self.config.weights)
            except (AttributeError, TypeError) as e:
                logger.warning(f"Skipping malformed policy {getattr(policy, 'id', '?')}: {e}")
                continue
            logger.debug(f"Policy '{policy.title}' scored: {score:.3f}")
            scored.append(ScoredCandidate(policy=policy, relevance_score=score))
        return scored

    def _rank(self, query: str, policies: List[Policy]) -> List[ScoredCandidate]:
        scored = self.score_candidates(query, policies)
        selected = select_candidates(scored, min_score=self.config.min_score, top_n=self.config.top_n)
        logger.info(f"Selected {len(selected)} of {len(scored)} scored candidates")
        return selected
