from .config import IngestionConfig
from .categorization import categorize_policy, extract_tags, is_policy_document
from .sample_data import SAMPLE_POLICIES, load_sample_policies
from .pipeline import IngestionPipeline, generate_policy_id

__all__ = [
    "IngestionConfig",
    "IngestionPipeline",
    "generate_policy_id",
    "categorize_policy",
    "extract_tags",
    "is_policy_document",
    "SAMPLE_POLICIES",
    "load_sample_policies",
]
