from dataclasses import dataclass
from pathlib import Path
from typing import Tuple


@dataclass
class IngestionConfig:
    """Configuration for ingestion pipeline."""

    docs_dir: Path = Path("./documents")
    weaviate_url: str = "http://localhost:8080"
    collection_name: str = "Policy"
    supported_extensions: Tuple[str, ...] = (".json", ".md", ".txt")
    recreate_collection: bool = False
    default_version: str = "1.0"
    require_policy_filename: bool = True  # Only ingest files named like policy documents
