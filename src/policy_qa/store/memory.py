import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from .base import PolicyStore, policy_matches
from .models import Policy

logger = logging.getLogger(__name__)


def _copy(policy: Policy) -> Policy:
    return replace(policy, tags=list(policy.tags or []))


class InMemoryPolicyStore(PolicyStore):
    """Policy store backed by a dict, for local runs and tests.

    Search results are copies, so callers cannot mutate stored policies.
    """

    def __init__(self, policies: Optional[Iterable[Policy]] = None):
        self._policies: Dict[str, Policy] = {}
        if policies:
            self.upsert(policies)

    def search(self, term: str, category: Optional[str] = None) -> List[Policy]:
        results = [
            _copy(p)
            for p in self._policies.values()
            if p.active and policy_matches(p, term) and (category is None or p.category == category)
        ]
        results.sort(key=lambda p: p.title)
        logger.debug(f"search('{term}', category={category}) -> {len(results)} policies")
        return results

    def get(self, policy_id: str) -> Optional[Policy]:
        policy = self._policies.get(policy_id)
        if policy is None or not policy.active:
            return None
        return _copy(policy)

    def list_policies(self, category: Optional[str] = None) -> List[Policy]:
        results = [
            _copy(p) for p in self._policies.values() if p.active and (category is None or p.category == category)
        ]
        results.sort(key=lambda p: (p.category, p.title))
        return results

    def upsert(self, policies: Iterable[Policy]) -> int:
        count = 0
        for policy in policies:
            self._policies[policy.id] = _copy(policy)
            count += 1
        logger.info(f"Upserted {count} policies (total: {len(self._policies)})")
        return count

    def deactivate(self, policy_id: str) -> bool:
        policy = self._policies.get(policy_id)
        if policy is None:
            return False
        policy.active = False
        logger.info(f"Policy deactivated: {policy_id} ({policy.title})")
        return True

    def __len__(self) -> int:
        return len(self._policies)
