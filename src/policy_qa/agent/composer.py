"""
Response composition strategies.

A composer turns the selected candidates for a query into answer text and a
confidence value. `LexicalComposer` is deterministic and always available;
`LLMComposer` asks a chat model to answer from the selected policies and falls
back to the lexical answer whenever the model call fails.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI
from langfuse import observe
from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential

from ..retriever.models import ScoredCandidate
from .prompt import COMPOSITION_PROMPT, COMPOSITION_SYSTEM_PROMPT, ESCALATION_TEMPLATE, POLICY_MATCH_TEMPLATE

logger = logging.getLogger(__name__)


def build_escalation_response(query: str, hr_email: str) -> str:
    """Escalation text quoting the user's query and the HR contact address."""
    return ESCALATION_TEMPLATE.format(query=query, hr_email=hr_email)


class ResponseComposer(ABC):
    """Strategy for composing an answer from selected policy candidates."""

    @abstractmethod
    async def acompose(self, query: str, candidates: List[ScoredCandidate]) -> Tuple[str, float]:
        """
        Compose an answer.

        Args:
            query: User question
            candidates: Selected candidates, best first; never empty

        Returns:
            (response text, confidence)
        """
        pass


class LexicalComposer(ResponseComposer):
    """Quotes the opening of the top-scoring policy."""

    def __init__(self, excerpt_length: int = 500):
        self.excerpt_length = excerpt_length

    def compose(self, query: str, candidates: List[ScoredCandidate]) -> Tuple[str, float]:
        if not candidates:
            raise ValueError("Cannot compose a policy answer without candidates")

        top = candidates[0]
        text = POLICY_MATCH_TEMPLATE.format(
            title=top.policy.title,
            excerpt=top.policy.content[: self.excerpt_length],
        )
        return text, top.relevance_score

    async def acompose(self, query: str, candidates: List[ScoredCandidate]) -> Tuple[str, float]:
        return self.compose(query, candidates)


class LLMComposer(ResponseComposer):
    """
    Answers from all selected policies with a chat model.

    Confidence is the mean relevance of the selected policies scaled by 1.2 and
    capped at 1.0.
    """

    def __init__(
        self,
        llm: ChatOpenAI,
        fallback: Optional[LexicalComposer] = None,
        max_retries: int = 3,
        retry_min_wait: float = 1.0,
        retry_max_wait: float = 10.0,
    ):
        """
        Args:
            llm: Chat model used for generation
            fallback: Composer used when generation fails
            max_retries: Attempts per generation
            retry_min_wait: Minimum backoff between attempts (seconds)
            retry_max_wait: Maximum backoff between attempts (seconds)
        """
        self.llm = llm
        self.fallback = fallback or LexicalComposer()
        self.max_retries = max_retries
        self.retry_min_wait = retry_min_wait
        self.retry_max_wait = retry_max_wait

    async def acompose(self, query: str, candidates: List[ScoredCandidate]) -> Tuple[str, float]:
        if not candidates:
            raise ValueError("Cannot compose a policy answer without candidates")

        try:
            text = await self._generate(query, candidates)
        except Exception as e:
            logger.error(f"LLM composition failed, using lexical answer: {e}")
            return await self.fallback.acompose(query, candidates)

        avg_relevance = sum(c.relevance_score for c in candidates) / len(candidates)
        return text, min(avg_relevance * 1.2, 1.0)

    @observe(as_type="generation")
    async def _generate(self, query: str, candidates: List[ScoredCandidate]) -> str:
        policy_context = "\n\n---\n\n".join(
            f"Policy: {c.policy.title}\nContent: {c.policy.content}\nCategory: {c.policy.category}" for c in candidates
        )
        messages = [
            SystemMessage(content=COMPOSITION_SYSTEM_PROMPT),
            HumanMessage(content=COMPOSITION_PROMPT.format(query=query, policy_context=policy_context)),
        ]

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=1, min=self.retry_min_wait, max=self.retry_max_wait),
            reraise=True,
        ):
            with attempt:
                response = await self.llm.ainvoke(messages)

        text = response.content.strip()
        if not text:
            raise ValueError("Empty completion")
        logger.info(f"Generated answer ({len(text)} chars) from {len(candidates)} policies")
        return text
