import logging
from typing import Dict

from ..retriever.policy_retriever import PolicyRetriever
from .composer import ResponseComposer, build_escalation_response
from .config import AgentConfig
from .models import ChatResult, ResponseType
from .prompt import ERROR_MESSAGE
from .state import ChatState

logger = logging.getLogger(__name__)


class RetrievalNode:
    """Handles policy retrieval."""

    def __init__(self, retriever: PolicyRetriever):
        self.retriever = retriever

    async def search_policies(self, state: ChatState) -> Dict:
        """Retrieve and rank candidate policies for the query."""
        try:
            candidates = await self.retriever.aretrieve(state["query"])
            return {"candidates": candidates}
        except Exception as e:
            logger.exception(f"Policy retrieval failed: {e}")
            return {"error": f"Policy retrieval failed: {e}"}


class CompositionNode:
    """Handles the terminal outcomes of a chat turn."""

    def __init__(self, composer: ResponseComposer, config: AgentConfig):
        self.composer = composer
        self.config = config

    async def compose_answer(self, state: ChatState) -> Dict:
        """Answer from the selected policies."""
        candidates = state["candidates"]
        try:
            text, confidence = await self.composer.acompose(state["query"], candidates)
        except Exception as e:
            logger.exception(f"Response composition failed: {e}")
            return {"error": f"Response composition failed: {e}"}

        result = ChatResult(
            response_text=text,
            response_type=ResponseType.POLICY_MATCH,
            confidence=confidence,
            matched_policy_ids=[c.policy.id for c in candidates],
        )
        return {"result": result}

    async def escalate(self, state: ChatState) -> Dict:
        """Point the user to HR when no policy matched."""
        result = ChatResult(
            response_text=build_escalation_response(state["query"], self.config.hr_email),
            response_type=ResponseType.ESCALATION,
            confidence=0.0,
        )
        return {"result": result}

    async def handle_error(self, state: ChatState) -> Dict:
        """Graceful degradation when errors occur."""
        logger.warning(f"Returning error response: {state.get('error')}")
        result = ChatResult(
            response_text=ERROR_MESSAGE.format(hr_email=self.config.hr_email),
            response_type=ResponseType.ERROR,
            confidence=0.0,
        )
        return {"result": result}
