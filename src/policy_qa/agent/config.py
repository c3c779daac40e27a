"""Configuration for the HR policy chat agent."""

import os
from dataclasses import dataclass


@dataclass
class AgentConfig:
    """Configuration for the policy chat workflow."""

    # Escalation
    hr_email: str = "hr@yourcompany.com"

    # Response composition
    excerpt_length: int = 500
    enable_llm_composition: bool = False

    # LLM settings
    model_name: str = "gpt-4"
    temperature: float = 0.3
    max_tokens: int = 500

    # Retry settings
    max_retries: int = 3
    retry_min_wait: float = 1.0
    retry_max_wait: float = 10.0

    # Observability
    enable_langfuse: bool = False

    @classmethod
    def from_env(cls) -> "AgentConfig":
        """Build config from environment variables, keeping defaults for unset ones."""
        defaults = cls()
        has_openai = bool(os.getenv("OPENAI_API_KEY", "").strip())
        llm_requested = os.getenv("POLICY_QA_ENABLE_LLM", "false").lower() in ("1", "true", "yes")
        return cls(
            hr_email=os.getenv("HR_EMAIL", defaults.hr_email),
            excerpt_length=int(os.getenv("POLICY_QA_EXCERPT_LENGTH", defaults.excerpt_length)),
            enable_llm_composition=has_openai and llm_requested,
            model_name=os.getenv("OPENAI_MODEL", defaults.model_name),
            enable_langfuse=bool(os.getenv("LANGFUSE_PUBLIC_KEY")),
        )
