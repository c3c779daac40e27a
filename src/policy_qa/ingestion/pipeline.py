import datetime
import hashlib
import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..errors import IngestionError
from ..store.base import PolicyStore
from ..store.models import Policy
from ..store.weaviate_store import WeaviatePolicyStore
from .categorization import categorize_policy, extract_tags, is_policy_document
from .config import IngestionConfig
from .sample_data import load_sample_policies

logger = logging.getLogger(__name__)

_H1 = re.compile(r"^#\s+(.+)$", re.MULTILINE)


def generate_policy_id(source: str) -> str:
    """Generate idempotent policy id from the source file name."""
    return hashlib.sha256(source.encode()).hexdigest()[:16]


class IngestionPipeline:
    """Loads policy documents from a directory into a policy store."""

    def __init__(self, config: IngestionConfig, store: Optional[PolicyStore] = None):
        """
        Args:
            config: Ingestion settings
            store: Target store. Defaults to a Weaviate store built from config.
        """
        self.config = config
        self.failed: List[str] = []

        if store is None:
            weaviate_store = WeaviatePolicyStore(config.weaviate_url, config.collection_name)
            weaviate_store.setup_collection(recreate=config.recreate_collection)
            store = weaviate_store
        self.store = store

        logger.info(f"Initializing IngestionPipeline, docs directory: {self.config.docs_dir}")

    def load_document(self, file_path: Path) -> Policy:
        """
        Load one policy file.

        JSON files hold `{"metadata": {...}, "content": "..."}`; markdown and text
        files hold the policy text, titled by their first `#` heading or file name.

        Raises:
            IngestionError: if the file cannot be read or parsed
        """
        logger.info(f"Loading document: {file_path.name}")
        try:
            raw = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise IngestionError(f"Cannot read {file_path.name}: {e}", source=file_path.name) from e

        if file_path.suffix.lower() == ".json":
            try:
                document = json.loads(raw)
            except json.JSONDecodeError as e:
                raise IngestionError(f"Invalid JSON in {file_path.name}: {e}", source=file_path.name) from e
            if not isinstance(document, dict) or not isinstance(document.get("content"), str):
                raise IngestionError(f"{file_path.name} has no text 'content' field", source=file_path.name)
            metadata = document.get("metadata") or {}
            if not isinstance(metadata, dict):
                raise IngestionError(f"{file_path.name} has non-object 'metadata'", source=file_path.name)
            content = document["content"]
        else:
            metadata, content = {}, raw

        try:
            return self.build_policy(metadata, content, file_path)
        except (AttributeError, TypeError, ValueError) as e:
            raise IngestionError(f"Malformed policy fields in {file_path.name}: {e}", source=file_path.name) from e

    def build_policy(self, metadata: Dict[str, Any], content: str, file_path: Path) -> Policy:
        """Build a Policy, deriving missing title, category and tags."""
        title = metadata.get("title") or metadata.get("document_name")
        if not title:
            heading = _H1.search(content)
            title = heading.group(1).strip() if heading else file_path.stem

        last_modified = metadata.get("last_modified") or datetime.datetime.fromtimestamp(
            file_path.stat().st_mtime
        ).isoformat()

        return Policy(
            id=metadata.get("policy_id") or metadata.get("document_id") or generate_policy_id(file_path.name),
            title=title,
            content=content.strip(),
            category=metadata.get("category") or categorize_policy(title, content),
            tags=list(metadata.get("tags") or extract_tags(content)),
            active=metadata.get("active", True),
            version=str(metadata.get("version", self.config.default_version)),
            source=file_path.name,
            last_updated=last_modified,
        )

    def discover_files(self) -> List[Path]:
        """Policy files in the docs directory, sorted by name."""
        docs_dir = Path(self.config.docs_dir)
        if not docs_dir.is_dir():
            raise IngestionError(f"Docs directory not found: {docs_dir}", source=str(docs_dir))

        files = []
        for path in sorted(docs_dir.iterdir()):
            if not path.is_file() or path.suffix.lower() not in self.config.supported_extensions:
                continue
            if self.config.require_policy_filename and not is_policy_document(path.name):
                logger.info(f"Skipping non-policy file: {path.name}")
                continue
            files.append(path)
        return files

    def run(self) -> List[Policy]:
        """Run the full ingestion pipeline. Returns the policies written."""
        logger.info("=" * 80)
        logger.info("Starting policy ingestion")
        logger.info("=" * 80)

        files = self.discover_files()
        logger.info(f"Found {len(files)} policy files")

        policies = []
        for file_path in files:
            try:
                policy = self.load_document(file_path)
            except IngestionError as e:
                logger.error(f"Failed to load {file_path.name}: {e}")
                self.failed.append(file_path.name)
                continue

            # Skip deprecated policies (not active)
            if not policy.active:
                logger.info(f"Skipping inactive document: {file_path.name}")
                continue

            policies.append(policy)
            logger.info(f"Loaded policy: {policy.title} [{policy.category}]")

        if policies:
            self.store.upsert(policies)

        logger.info("=" * 80)
        logger.info(f"Ingestion complete! Policies: {len(policies)}, failed: {len(self.failed)}")
        logger.info("=" * 80)
        return policies

    def ingest_samples(self) -> List[Policy]:
        """Write the bundled sample policies to the store."""
        policies = load_sample_policies()
        self.store.upsert(policies)
        logger.info(f"Ingested {len(policies)} sample policies")
        return policies

    def close(self):
        self.store.close()
