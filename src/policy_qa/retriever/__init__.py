from .config import RetrievalConfig, ScoringWeights, DEFAULT_STOP_WORDS
from .models import ScoredCandidate
from .keywords import extract_keywords
from .candidates import CandidateRetriever
from .scoring import score_policy
from .ranking import select_candidates
from .policy_retriever import PolicyRetriever

__all__ = [
    "RetrievalConfig",
    "ScoringWeights",
    "DEFAULT_STOP_WORDS",
    "ScoredCandidate",
    "extract_keywords",
    "CandidateRetriever",
    "score_policy",
    "select_candidates",
    "PolicyRetriever",
]
