"""
HR Policy Assistant.

Answers HR policy questions by retrieving matching policy documents with a
keyword-driven relevance pass, or escalating to a human HR contact.

Components:
- store: Policy store contract with in-memory and Weaviate implementations
- retriever: Keyword extraction, candidate retrieval, scoring and selection
- agent: Response composition and the chat turn workflow
- ingestion: Policy document loading, categorization and tagging
- observability: Query tracking and analytics
"""

__version__ = "1.0.0"
