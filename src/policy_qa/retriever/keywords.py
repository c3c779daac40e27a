import re
from typing import List, Optional

from .config import RetrievalConfig

_NON_WORD = re.compile(r"[^\w\s]")


def extract_keywords(text: str, config: Optional[RetrievalConfig] = None) -> List[str]:
    """
    Extract significant search tokens from a query.

    Lower-cases the text, turns punctuation into spaces, and drops short tokens
    and stop words. Duplicates collapse to their first occurrence, so the result
    behaves as a set with a stable iteration order.

    Args:
        text: Raw query text
        config: Retrieval config providing stop words and minimum token length

    Returns:
        Unique keywords in order of first appearance
    """
    config = config or RetrievalConfig()
    if not text:
        return []

    tokens = _NON_WORD.sub(" ", text.lower()).split()
    keywords = [t for t in tokens if len(t) >= config.min_keyword_length and t not in config.stop_words]
    return list(dict.fromkeys(keywords))
