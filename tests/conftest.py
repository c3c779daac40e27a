"""Shared fixtures."""

import os

import pytest

# Keep langfuse-decorated code from trying to export traces during tests
os.environ.setdefault("LANGFUSE_TRACING_ENABLED", "false")

from policy_qa.ingestion.sample_data import load_sample_policies
from policy_qa.retriever.models import ScoredCandidate
from policy_qa.store.memory import InMemoryPolicyStore
from policy_qa.store.models import Policy


@pytest.fixture
def sample_policies():
    """Bundled sample policies."""
    return load_sample_policies()


@pytest.fixture
def sample_store(sample_policies):
    """In-memory store holding the sample policies."""
    return InMemoryPolicyStore(sample_policies)


@pytest.fixture
def travel_policy():
    """Travel policy as used in the acceptance scenario."""
    return Policy(
        id="pol_travel",
        title="Travel Policy - India Operations",
        content="Employees are entitled to economy class flights for domestic travel within India.",
        category="travel",
        tags=["travel", "india"],
    )


@pytest.fixture
def make_candidate():
    """Factory for scored candidates."""

    def _make(policy_id: str, score: float, title: str = None, content: str = "Policy text") -> ScoredCandidate:
        policy = Policy(id=policy_id, title=title or f"Policy {policy_id}", content=content)
        return ScoredCandidate(policy=policy, relevance_score=score)

    return _make
