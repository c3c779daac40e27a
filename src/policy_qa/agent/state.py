from typing import List, Optional, TypedDict

from ..retriever.models import ScoredCandidate
from .models import ChatResult


class ChatState(TypedDict):
    """State that flows through the chat turn graph."""

    query: str

    # Retrieval
    candidates: Optional[List[ScoredCandidate]]

    # Output
    result: Optional[ChatResult]
    error: Optional[str]
