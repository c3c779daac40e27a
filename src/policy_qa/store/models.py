from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Policy:
    """HR policy document as held by a policy store."""

    id: str
    title: str
    content: str
    category: str = "general"
    tags: List[str] = field(default_factory=list)
    active: bool = True
    version: str = "1.0"
    source: Optional[str] = None  # File name or external document id
    last_updated: Optional[str] = None
