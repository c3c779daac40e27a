from .models import Policy
from .base import PolicyStore, policy_matches
from .memory import InMemoryPolicyStore
from .weaviate_store import WeaviatePolicyStore

__all__ = ["Policy", "PolicyStore", "policy_matches", "InMemoryPolicyStore", "WeaviatePolicyStore"]
