"""
Tests for CandidateRetriever.
"""

import asyncio
import threading
import time
from unittest.mock import Mock

import pytest

from policy_qa.errors import PolicyStoreError
from policy_qa.retriever.candidates import CandidateRetriever
from policy_qa.retriever.config import RetrievalConfig
from policy_qa.store.base import PolicyStore
from policy_qa.store.models import Policy


def policy(policy_id: str, title: str = None) -> Policy:
    return Policy(id=policy_id, title=title or f"Policy {policy_id}", content="text")


@pytest.fixture
def store():
    """Mock store answering from a keyword -> policies table."""
    table = {
        "travel": [policy("a", "Travel A v1")],
        "policy": [policy("a", "Travel A v2"), policy("b")],
        "leave": [policy("c")],
    }
    mock = Mock(spec=PolicyStore)
    mock.search.side_effect = lambda term, category=None: list(table.get(term, []))
    return mock


class TestSyncRetrieve:
    """Tests for sequential retrieval."""

    def test_union_deduplicated_first_wins(self, store):
        """Test that duplicates across keywords keep the first copy."""
        retriever = CandidateRetriever(store)
        results = retriever.retrieve(["travel", "policy"])

        assert [p.id for p in results] == ["a", "b"]
        assert results[0].title == "Travel A v1"

    def test_one_lookup_per_keyword_without_category(self, store):
        """Test that each keyword is searched once with no category filter."""
        retriever = CandidateRetriever(store)
        retriever.retrieve(["travel", "leave"])

        assert store.search.call_count == 2
        store.search.assert_any_call("travel")
        store.search.assert_any_call("leave")

    def test_no_keywords(self, store):
        """Test that no keywords means no lookups and no candidates."""
        retriever = CandidateRetriever(store)
        assert retriever.retrieve([]) == []
        store.search.assert_not_called()

    def test_malformed_records_skipped(self):
        """Test that records without a usable id are dropped, not fatal."""
        unhashable = Mock(id=["not", "hashable"])
        mock = Mock(spec=PolicyStore)
        mock.search.return_value = [None, unhashable, policy("good")]
        retriever = CandidateRetriever(mock)

        assert [p.id for p in retriever.retrieve(["travel"])] == ["good"]

    def test_no_matches(self, store):
        """Test that unmatched keywords yield no candidates."""
        retriever = CandidateRetriever(store)
        assert retriever.retrieve(["gibberish"]) == []


class TestFailureHandling:
    """Tests for store failures."""

    @pytest.fixture
    def flaky_store(self):
        def search(term, category=None):
            if term == "broken":
                raise PolicyStoreError("connection refused")
            return [policy(term)]

        mock = Mock(spec=PolicyStore)
        mock.search.side_effect = search
        return mock

    def test_fail_closed_drops_all_candidates(self, flaky_store):
        """Test that any failed lookup empties the candidate list by default."""
        retriever = CandidateRetriever(flaky_store)
        assert retriever.retrieve(["travel", "broken", "leave"]) == []

    def test_fail_open_skips_failed_keyword(self, flaky_store):
        """Test that with fail_closed off, only the failed keyword is lost."""
        retriever = CandidateRetriever(flaky_store, RetrievalConfig(fail_closed=False))
        results = retriever.retrieve(["travel", "broken", "leave"])
        assert [p.id for p in results] == ["travel", "leave"]

    def test_unexpected_exception_is_absorbed(self):
        """Test that non-store exceptions from the backend do not propagate."""
        mock = Mock(spec=PolicyStore)
        mock.search.side_effect = RuntimeError("boom")
        retriever = CandidateRetriever(mock)
        assert retriever.retrieve(["travel"]) == []

    def test_async_fail_closed(self, flaky_store):
        """Test failure handling on the concurrent path."""
        retriever = CandidateRetriever(flaky_store)
        assert asyncio.run(retriever.aretrieve(["travel", "broken"])) == []


class TestAsyncRetrieve:
    """Tests for concurrent retrieval."""

    def test_matches_sync_result(self, store):
        """Test that concurrent retrieval returns the same union as sequential."""
        retriever = CandidateRetriever(store)
        keywords = ["travel", "policy", "leave"]

        sync_ids = [p.id for p in retriever.retrieve(keywords)]
        async_ids = [p.id for p in asyncio.run(retriever.aretrieve(keywords))]

        assert async_ids == sync_ids == ["a", "b", "c"]

    def test_order_independent_of_completion(self):
        """Test that slower lookups do not change the merged order."""
        delays = {"slow": 0.1, "fast": 0.0}

        def search(term, category=None):
            time.sleep(delays[term])
            return [policy("shared", title=f"from {term}")]

        mock = Mock(spec=PolicyStore)
        mock.search.side_effect = search
        retriever = CandidateRetriever(mock)

        results = asyncio.run(retriever.aretrieve(["slow", "fast"]))
        assert len(results) == 1
        assert results[0].title == "from slow"

    def test_bounded_concurrency(self):
        """Test that no more than max_concurrent_lookups searches run at once."""
        lock = threading.Lock()
        state = {"active": 0, "peak": 0}

        def search(term, category=None):
            with lock:
                state["active"] += 1
                state["peak"] = max(state["peak"], state["active"])
            time.sleep(0.05)
            with lock:
                state["active"] -= 1
            return []

        mock = Mock(spec=PolicyStore)
        mock.search.side_effect = search
        retriever = CandidateRetriever(mock, RetrievalConfig(max_concurrent_lookups=2))

        asyncio.run(retriever.aretrieve([f"kw{i}" for i in range(6)]))

        assert mock.search.call_count == 6
        assert state["peak"] <= 2

    def test_no_keywords(self, store):
        """Test that no keywords means no lookups."""
        retriever = CandidateRetriever(store)
        assert asyncio.run(retriever.aretrieve([])) == []
        store.search.assert_not_called()

    def test_cancellation_abandons_pending_lookups(self):
        """Test that cancelling the caller stops queued lookups and merges nothing."""
        started = threading.Event()
        release = threading.Event()
        calls = []

        def search(term, category=None):
            calls.append(term)
            started.set()
            release.wait(timeout=5)
            return [policy(term)]

        mock = Mock(spec=PolicyStore)
        mock.search.side_effect = search
        retriever = CandidateRetriever(mock, RetrievalConfig(max_concurrent_lookups=1))

        async def cancel_mid_flight():
            task = asyncio.create_task(retriever.aretrieve(["k1", "k2", "k3"]))
            while not started.is_set():
                await asyncio.sleep(0.01)
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                return None
            finally:
                release.set()
            return task.result()

        assert asyncio.run(cancel_mid_flight()) is None
        assert calls == ["k1"]
