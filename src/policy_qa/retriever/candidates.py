import asyncio
import logging
from typing import Dict, Iterable, List, Optional

from ..store.base import PolicyStore
from ..store.models import Policy
from .config import RetrievalConfig

logger = logging.getLogger(__name__)


class CandidateRetriever:
    """
    Fetches candidate policies for a set of keywords.

    Issues one store search per keyword, unions the results in keyword order
    and deduplicates by policy id (first occurrence wins). Store failures are
    logged and never raised: with `fail_closed` any failure yields no
    candidates, otherwise only the failing keyword contributes nothing.
    """

    def __init__(self, store: PolicyStore, config: Optional[RetrievalConfig] = None):
        self.store = store
        self.config = config or RetrievalConfig()

    def retrieve(self, keywords: Iterable[str]) -> List[Policy]:
        """Look up keywords sequentially."""
        results: List[Optional[List[Policy]]] = [self._search(keyword) for keyword in keywords]
        return self._merge(results)

    async def aretrieve(self, keywords: Iterable[str]) -> List[Policy]:
        """Look up keywords concurrently, bounded by `max_concurrent_lookups`."""
        keywords = list(keywords)
        if not keywords:
            return []

        semaphore = asyncio.Semaphore(max(1, self.config.max_concurrent_lookups))

        async def lookup(keyword: str) -> Optional[List[Policy]]:
            async with semaphore:
                return await asyncio.to_thread(self._search, keyword)

        # gather keeps keyword order regardless of completion order
        results = await asyncio.gather(*(lookup(k) for k in keywords))
        return self._merge(results)

    def _search(self, keyword: str) -> Optional[List[Policy]]:
        """Search one keyword. Returns None if the lookup failed."""
        try:
            return self.store.search(keyword)
        except Exception as e:
            logger.error(f"Policy search failed for keyword '{keyword}': {e}")
            return None

    def _merge(self, results: List[Optional[List[Policy]]]) -> List[Policy]:
        failed = sum(1 for r in results if r is None)
        if failed and self.config.fail_closed:
            logger.warning(f"{failed} policy lookup(s) failed; returning no candidates")
            return []

        unique: Dict[str, Policy] = {}
        for policies in results:
            for policy in policies or []:
                try:
                    seen = policy.id in unique
                except (AttributeError, TypeError) as e:
                    logger.warning(f"Skipping malformed policy record {policy!r}: {e}")
                    continue
                if not seen:
                    unique[policy.id] = policy

        logger.info(f"Retrieved {len(unique)} unique candidate policies from {len(results)} lookups")
        return list(unique.values())
