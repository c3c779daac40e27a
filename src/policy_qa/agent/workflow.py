import asyncio
import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

from langchain_openai import ChatOpenAI
from langfuse import observe
from langfuse.langchain import CallbackHandler
from langgraph.graph import END, START, StateGraph

from ..retriever.policy_retriever import PolicyRetriever
from .composer import LexicalComposer, LLMComposer, ResponseComposer
from .config import AgentConfig
from .models import ChatResult
from .nodes import CompositionNode, RetrievalNode
from .state import ChatState

if TYPE_CHECKING:
    from ..observability.query_log import QueryTracker

logger = logging.getLogger(__name__)


class PolicyChatWorkflow:
    """
    Single-turn workflow answering an HR policy question.

    search_policies -> compose_answer | escalate, with handle_error catching
    pipeline faults. Each call runs independently; no state is kept between
    turns.
    """

    def __init__(
        self,
        retriever: PolicyRetriever,
        config: Optional[AgentConfig] = None,
        composer: Optional[ResponseComposer] = None,
        tracker: Optional["QueryTracker"] = None,
    ):
        """
        Args:
            retriever: Policy retriever bound to a store
            config: Agent settings; defaults to `AgentConfig()`
            composer: Answer composition strategy; built from config if omitted
            tracker: Optional query tracker recording every turn
        """
        self.retriever = retriever
        self.config = config or AgentConfig()
        self.composer = composer or self._build_composer()
        self.tracker = tracker

        self.retrieval_node = RetrievalNode(self.retriever)
        self.composition_node = CompositionNode(self.composer, self.config)

        self.graph = self._build_graph()
        logger.info(f"PolicyChatWorkflow initialized with composer: {type(self.composer).__name__}")

    def _build_composer(self) -> ResponseComposer:
        lexical = LexicalComposer(excerpt_length=self.config.excerpt_length)
        if not self.config.enable_llm_composition:
            return lexical

        try:
            llm = ChatOpenAI(
                model=self.config.model_name,
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
            )
        except Exception as e:
            logger.warning(f"LLM composition unavailable, using lexical answers: {e}")
            return lexical

        return LLMComposer(
            llm,
            fallback=lexical,
            max_retries=self.config.max_retries,
            retry_min_wait=self.config.retry_min_wait,
            retry_max_wait=self.config.retry_max_wait,
        )

    def _build_graph(self):
        """Build the LangGraph workflow."""
        graph = StateGraph(ChatState)

        graph.add_node("search_policies", self.retrieval_node.search_policies)
        graph.add_node("compose_answer", self.composition_node.compose_answer)
        graph.add_node("escalate", self.composition_node.escalate)
        graph.add_node("handle_error", self.composition_node.handle_error)

        graph.add_edge(START, "search_policies")

        def route_after_retrieval(state):
            if state.get("error"):
                return "handle_error"
            if state.get("candidates"):
                return "compose_answer"
            return "escalate"

        graph.add_conditional_edges(
            "search_policies",
            route_after_retrieval,
            {"compose_answer": "compose_answer", "escalate": "escalate", "handle_error": "handle_error"},
        )

        def route_after_composition(state):
            if state.get("error"):
                return "handle_error"
            return END

        graph.add_conditional_edges("compose_answer", route_after_composition, {"handle_error": "handle_error", END: END})

        graph.add_edge("escalate", END)
        graph.add_edge("handle_error", END)

        return graph.compile()

    @observe(name="policy_chat_turn")
    async def arun(self, message: str, user_id: Optional[str] = None, session_id: Optional[str] = None) -> ChatResult:
        """
        Answer one message.

        Args:
            message: User question
            user_id: Optional user identifier, recorded by the tracker
            session_id: Optional session identifier, recorded by the tracker

        Returns:
            ChatResult for the turn
        """
        if self.tracker is None:
            return await self._invoke(message)

        with self.tracker.track_query(message, user_id=user_id, session_id=session_id) as record:
            result = await self._invoke(message)
            record.set_result(result)
        return result

    def run(self, message: str, user_id: Optional[str] = None, session_id: Optional[str] = None) -> ChatResult:
        """Sync wrapper around `arun` for callers without an event loop."""
        return asyncio.run(self.arun(message, user_id=user_id, session_id=session_id))

    async def _invoke(self, message: str) -> ChatResult:
        logger.info(f"Processing message: {message}")

        initial_state: ChatState = {
            "query": message,
            "candidates": None,
            "result": None,
            "error": None,
        }

        run_config: Dict[str, Any] = {}
        if self.config.enable_langfuse:
            run_config["callbacks"] = [CallbackHandler()]

        final_state = await self.graph.ainvoke(initial_state, config=run_config)
        result = final_state["result"]

        logger.info(f"Response type: {result.response_type.value}, confidence: {result.confidence:.3f}")
        return result
