from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from .models import Policy


def policy_matches(policy: Policy, term: str) -> bool:
    """Case-insensitive match of a search term against a policy.

    A policy matches when the term appears in its title or content, or equals
    one of its tags.
    """
    needle = term.lower()
    if needle in (policy.title or "").lower() or needle in (policy.content or "").lower():
        return True
    return any(needle == tag.lower() for tag in policy.tags or [])


class PolicyStore(ABC):
    """Abstract policy store.

    Implementations return only active policies from `search` and must return an
    empty list, not raise, when nothing matches. Backend failures are raised as
    `PolicyStoreError`.
    """

    @abstractmethod
    def search(self, term: str, category: Optional[str] = None) -> List[Policy]:
        """
        Search active policies.

        Args:
            term: Search term, matched case-insensitively against title and content
                (substring) and tags (equality)
            category: Optional category filter

        Returns:
            Matching policies ordered by title
        """
        pass

    @abstractmethod
    def get(self, policy_id: str) -> Optional[Policy]:
        """Return the active policy with this id, if any."""
        pass

    @abstractmethod
    def list_policies(self, category: Optional[str] = None) -> List[Policy]:
        """Return all active policies ordered by category and title."""
        pass

    @abstractmethod
    def upsert(self, policies: Iterable[Policy]) -> int:
        """Insert or replace policies by id. Returns the number written."""
        pass

    @abstractmethod
    def deactivate(self, policy_id: str) -> bool:
        """Mark a policy inactive. Returns False if the id is unknown."""
        pass

    def categories(self) -> List[str]:
        """Distinct categories of active policies, sorted."""
        return sorted({p.category for p in self.list_policies()})

    def close(self):
        """Release backend resources."""
        pass
