"""Category and tag assignment for policy documents."""

from typing import List, Tuple

# Evaluated in order; the first category with a keyword in the text wins.
CATEGORY_KEYWORDS: List[Tuple[str, Tuple[str, ...]]] = [
    ("leave", ("leave", "vacation", "pto", "time off", "holiday")),
    ("travel", ("travel", "expense", "reimbursement", "trip")),
    ("benefits", ("benefit", "insurance", "health", "dental", "vision", "401k", "retirement")),
    ("conduct", ("conduct", "behavior", "ethics", "harassment", "discrimination")),
    ("remote", ("remote", "work from home", "wfh", "hybrid", "flexible")),
    ("compensation", ("salary", "bonus", "pay", "compensation", "raise")),
]
DEFAULT_CATEGORY = "general"

TAG_KEYWORDS: Tuple[str, ...] = (
    "annual leave",
    "sick leave",
    "maternity",
    "paternity",
    "travel allowance",
    "meal allowance",
    "accommodation",
    "health insurance",
    "dental",
    "vision",
    "401k",
    "remote work",
    "hybrid",
    "office hours",
    "performance review",
    "promotion",
    "disciplinary",
)

POLICY_FILENAME_KEYWORDS: Tuple[str, ...] = ("policy", "handbook", "guide", "procedure", "manual")
POLICY_FILE_EXTENSIONS: Tuple[str, ...] = (".pdf", ".docx", ".doc", ".txt", ".md", ".json")


def categorize_policy(title: str, content: str) -> str:
    """Assign the first category whose keywords appear in the title or content."""
    text = f"{title} {content}".lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return category
    return DEFAULT_CATEGORY


def extract_tags(content: str) -> List[str]:
    """Return the known HR tags mentioned in the content."""
    text = content.lower()
    return [tag for tag in TAG_KEYWORDS if tag in text]


def is_policy_document(filename: str) -> bool:
    """Whether a file name looks like a policy document in a supported format."""
    name = filename.lower()
    has_keyword = any(keyword in name for keyword in POLICY_FILENAME_KEYWORDS)
    has_valid_extension = name.endswith(POLICY_FILE_EXTENSIONS)
    return has_keyword and has_valid_extension
