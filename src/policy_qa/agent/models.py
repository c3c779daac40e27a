from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

POLICY_EXPLANATION_INTENT = "policy_explanation"


class ResponseType(Enum):
    """Outcome of a chat turn."""

    POLICY_MATCH = "policy_match"  # Answered from a stored policy
    ESCALATION = "escalation"  # No policy matched; user pointed to HR
    ERROR = "error"  # Pipeline fault; generic apology


@dataclass
class ChatResult:
    """Result of one chat turn, handed to the caller for delivery and logging."""

    response_text: str
    response_type: ResponseType
    confidence: float
    matched_policy_ids: List[str] = field(default_factory=list)
    intent: str = POLICY_EXPLANATION_INTENT
    suggestions: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Chat turn payload as consumed by the transport and logging layers."""
        return {
            "response": self.response_text,
            "type": self.response_type.value,
            "confidence": self.confidence,
            "matchedPolicies": list(self.matched_policy_ids),
            "intent": self.intent,
            "suggestions": list(self.suggestions),
        }
