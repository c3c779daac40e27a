"""Agent module for the HR policy assistant.

Provides:
- PolicyChatWorkflow: Single-turn chat workflow (retrieve, then answer or escalate)
- Response composers: LexicalComposer (default) and LLMComposer
- ChatResult: Chat turn result
"""

from .models import ChatResult, ResponseType, POLICY_EXPLANATION_INTENT
from .config import AgentConfig
from .composer import ResponseComposer, LexicalComposer, LLMComposer, build_escalation_response
from .workflow import PolicyChatWorkflow

__all__ = [
    # Workflow
    "PolicyChatWorkflow",
    # Results
    "ChatResult",
    "ResponseType",
    "POLICY_EXPLANATION_INTENT",
    # Config
    "AgentConfig",
    # Composition
    "ResponseComposer",
    "LexicalComposer",
    "LLMComposer",
    "build_escalation_response",
]
