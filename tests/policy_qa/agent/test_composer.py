"""
Tests for response composers.
"""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from policy_qa.agent.composer import LexicalComposer, LLMComposer, build_escalation_response
from policy_qa.retriever.models import ScoredCandidate


class TestLexicalComposer:
    """Tests for the deterministic composer."""

    def test_formats_top_candidate(self, travel_policy):
        """Test that the answer quotes the top policy's title and content."""
        composer = LexicalComposer()
        text, confidence = composer.compose("travel?", [ScoredCandidate(travel_policy, 0.93)])

        assert text == f"Based on our **{travel_policy.title}** policy:\n\n{travel_policy.content}..."
        assert confidence == 0.93

    def test_excerpt_truncated(self, make_candidate):
        """Test that only the first excerpt_length characters are quoted."""
        content = "a" * 499 + "b" + "c" * 100
        composer = LexicalComposer()
        text, _ = composer.compose("q", [make_candidate("p1", 0.5, title="Long", content=content)])

        assert text.endswith("a" * 499 + "b...")
        assert "c" not in text.split("\n\n", 1)[1]

    def test_custom_excerpt_length(self, make_candidate):
        """Test that excerpt length is configurable."""
        composer = LexicalComposer(excerpt_length=5)
        text, _ = composer.compose("q", [make_candidate("p1", 0.5, title="T", content="Hello world")])
        assert text == "Based on our **T** policy:\n\nHello..."

    def test_uses_first_candidate_only(self, make_candidate):
        """Test that the best candidate drives both text and confidence."""
        candidates = [
            make_candidate("p1", 0.75, title="First"),
            make_candidate("p2", 0.55, title="Second"),
        ]
        text, confidence = LexicalComposer().compose("q", candidates)

        assert "**First**" in text
        assert "Second" not in text
        assert confidence == 0.75

    def test_empty_candidates(self):
        """Test that composing without candidates is rejected."""
        with pytest.raises(ValueError):
            LexicalComposer().compose("q", [])

    def test_async_matches_sync(self, make_candidate):
        """Test that acompose returns the sync result."""
        composer = LexicalComposer()
        candidates = [make_candidate("p1", 0.4)]
        assert asyncio.run(composer.acompose("q", candidates)) == composer.compose("q", candidates)


class TestEscalationResponse:
    """Tests for the escalation text."""

    def test_quotes_query_and_contact(self):
        """Test that escalation text includes the query and HR address."""
        text = build_escalation_response("asdkjasd random gibberish", "people@example.com")

        assert '"asdkjasd random gibberish"' in text
        assert "You can contact HR at: people@example.com" in text


class TestLLMComposer:
    """Tests for the LLM composer."""

    @pytest.fixture
    def candidates(self, make_candidate):
        return [
            make_candidate("p1", 0.75, title="Leave Policy", content="15 days"),
            make_candidate("p2", 0.55, title="Holiday Policy", content="10 holidays"),
        ]

    def test_answer_from_model(self, candidates):
        """Test that generated text is returned with scaled mean confidence."""
        llm = Mock()
        llm.ainvoke = AsyncMock(return_value=AIMessage(content="  You get 15 days.  "))
        composer = LLMComposer(llm)

        text, confidence = asyncio.run(composer.acompose("How much leave?", candidates))

        assert text == "You get 15 days."
        assert confidence == pytest.approx(min((0.75 + 0.55) / 2 * 1.2, 1.0))

    def test_prompt_contains_all_policies(self, candidates):
        """Test that every selected policy is passed to the model."""
        llm = Mock()
        llm.ainvoke = AsyncMock(return_value=AIMessage(content="ok"))
        asyncio.run(LLMComposer(llm).acompose("How much leave?", candidates))

        messages = llm.ainvoke.await_args.args[0]
        assert isinstance(messages[0], SystemMessage)
        assert isinstance(messages[1], HumanMessage)
        assert "How much leave?" in messages[1].content
        assert "Policy: Leave Policy" in messages[1].content
        assert "Policy: Holiday Policy" in messages[1].content

    def test_confidence_capped(self, make_candidate):
        """Test that scaled confidence never exceeds 1.0."""
        llm = Mock()
        llm.ainvoke = AsyncMock(return_value=AIMessage(content="ok"))
        _, confidence = asyncio.run(LLMComposer(llm).acompose("q", [make_candidate("p1", 0.95)]))
        assert confidence == 1.0

    def test_retries_then_falls_back(self, candidates):
        """Test that repeated model failures fall back to the lexical answer."""
        llm = Mock()
        llm.ainvoke = AsyncMock(side_effect=RuntimeError("rate limited"))
        composer = LLMComposer(llm, max_retries=2, retry_min_wait=0, retry_max_wait=0)

        text, confidence = asyncio.run(composer.acompose("How much leave?", candidates))

        assert llm.ainvoke.await_count == 2
        assert text == "Based on our **Leave Policy** policy:\n\n15 days..."
        assert confidence == 0.75

    def test_retry_recovers(self, candidates):
        """Test that a transient failure is retried."""
        llm = Mock()
        llm.ainvoke = AsyncMock(side_effect=[RuntimeError("timeout"), AIMessage(content="Recovered")])
        composer = LLMComposer(llm, max_retries=3, retry_min_wait=0, retry_max_wait=0)

        text, _ = asyncio.run(composer.acompose("q", candidates))
        assert text == "Recovered"
        assert llm.ainvoke.await_count == 2

    def test_empty_completion_falls_back(self, candidates):
        """Test that a blank completion is treated as a failure."""
        llm = Mock()
        llm.ainvoke = AsyncMock(return_value=AIMessage(content="   "))
        text, _ = asyncio.run(LLMComposer(llm, max_retries=1).acompose("q", candidates))
        assert text.startswith("Based on our **Leave Policy** policy")

    def test_empty_candidates(self):
        """Test that composing without candidates is rejected."""
        with pytest.raises(ValueError):
            asyncio.run(LLMComposer(Mock()).acompose("q", []))
