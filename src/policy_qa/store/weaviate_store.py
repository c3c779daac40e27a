import logging
import re
from dataclasses import asdict
from typing import Any, Iterable, List, Optional
from urllib.parse import urlparse

import weaviate
from weaviate.classes.config import Configure, DataType, Property, Tokenization
from weaviate.classes.query import Filter
from weaviate.util import generate_uuid5

from ..errors import PolicyStoreError
from .base import PolicyStore, policy_matches
from .models import Policy

logger = logging.getLogger(__name__)

# Separators of Weaviate word tokenization
_WORD_SPLIT = re.compile(r"[\W_]+")


class WeaviatePolicyStore(PolicyStore):
    """
    Policy store backed by a Weaviate collection.

    Weaviate filters narrow the candidate set (`like` on title and content,
    `contains_any` on tags); results are then re-checked with `policy_matches`
    so the store honours the exact substring-or-tag contract.
    """

    def __init__(
        self,
        weaviate_url: str = "http://localhost:8080",
        collection_name: str = "Policy",
        search_limit: int = 500,
    ):
        """
        Args:
            weaviate_url: Weaviate server URL
            collection_name: Weaviate collection holding policies
            search_limit: Maximum objects fetched per query
        """
        self.weaviate_url = weaviate_url
        self.collection_name = collection_name
        self.search_limit = search_limit

        parsed = urlparse(weaviate_url)
        host = parsed.hostname or "localhost"
        port = parsed.port or 8080

        logger.info(f"Connecting to Weaviate at {host}:{port}, collection: {collection_name}")
        self.client = weaviate.connect_to_local(host=host, port=port)

    def setup_collection(self, recreate: bool = False):
        """Create the policy collection, optionally dropping an existing one."""
        if self.client.collections.exists(self.collection_name):
            if not recreate:
                logger.info(f"Collection already exists: {self.collection_name}")
                return
            logger.info(f"Deleting existing collection: {self.collection_name}")
            self.client.collections.delete(self.collection_name)

        # FIELD tokenization keeps ids and categories as single exact-match tokens.
        self.client.collections.create(
            name=self.collection_name,
            properties=[
                Property(name="policy_id", data_type=DataType.TEXT, tokenization=Tokenization.FIELD),
                Property(name="title", data_type=DataType.TEXT),
                Property(name="content", data_type=DataType.TEXT),
                Property(name="category", data_type=DataType.TEXT, tokenization=Tokenization.FIELD),
                Property(name="tags", data_type=DataType.TEXT_ARRAY, tokenization=Tokenization.LOWERCASE),
                Property(name="active", data_type=DataType.BOOL),
                Property(name="version", data_type=DataType.TEXT, tokenization=Tokenization.FIELD),
                Property(name="source", data_type=DataType.TEXT, tokenization=Tokenization.FIELD),
                Property(name="last_updated", data_type=DataType.TEXT),
            ],
            vectorizer_config=Configure.Vectorizer.none(),
        )
        logger.info(f"Collection created: {self.collection_name}")

    def _collection(self):
        return self.client.collections.get(self.collection_name)

    @staticmethod
    def _substring_filter(prop: str, needle: str):
        """
        `like` filter matching every object whose text may contain `needle`.

        Text properties use word tokenization, so a needle spanning several
        words (`work_from_home`) never lies inside one token. Each word part
        must then appear inside some token; `policy_matches` re-checks the hits.
        """
        parts = [p for p in _WORD_SPLIT.split(needle) if p] or [needle]
        part_filter = Filter.by_property(prop).like(f"*{parts[0]}*")
        for part in parts[1:]:
            part_filter = part_filter & Filter.by_property(prop).like(f"*{part}*")
        return part_filter

    def search(self, term: str, category: Optional[str] = None) -> List[Policy]:
        needle = term.lower()
        term_filter = (
            self._substring_filter("title", needle)
            | self._substring_filter("content", needle)
            | Filter.by_property("tags").contains_any([needle])
        )
        filters = Filter.by_property("active").equal(True) & term_filter
        if category:
            filters = filters & Filter.by_property("category").equal(category)

        try:
            response = self._collection().query.fetch_objects(filters=filters, limit=self.search_limit)
        except Exception as e:
            raise PolicyStoreError(f"Policy search failed for '{term}': {e}") from e

        policies = [self._to_policy(obj) for obj in response.objects]
        policies = [p for p in policies if policy_matches(p, term)]
        policies.sort(key=lambda p: p.title)
        return policies

    def get(self, policy_id: str) -> Optional[Policy]:
        try:
            obj = self._collection().query.fetch_object_by_id(generate_uuid5(policy_id))
        except Exception as e:
            raise PolicyStoreError(f"Failed to fetch policy {policy_id}: {e}") from e

        if obj is None:
            return None
        policy = self._to_policy(obj)
        return policy if policy.active else None

    def list_policies(self, category: Optional[str] = None) -> List[Policy]:
        filters = Filter.by_property("active").equal(True)
        if category:
            filters = filters & Filter.by_property("category").equal(category)

        try:
            response = self._collection().query.fetch_objects(filters=filters, limit=self.search_limit)
        except Exception as e:
            raise PolicyStoreError(f"Failed to list policies: {e}") from e

        policies = [self._to_policy(obj) for obj in response.objects]
        policies.sort(key=lambda p: (p.category, p.title))
        return policies

    def upsert(self, policies: Iterable[Policy]) -> int:
        collection = self._collection()
        count = 0
        try:
            with collection.batch.dynamic() as batch:
                for policy in policies:
                    batch.add_object(properties=self._to_properties(policy), uuid=generate_uuid5(policy.id))
                    count += 1
        except Exception as e:
            raise PolicyStoreError(f"Failed to upsert policies: {e}") from e

        logger.info(f"Upserted {count} policies into {self.collection_name}")
        return count

    def deactivate(self, policy_id: str) -> bool:
        collection = self._collection()
        uuid = generate_uuid5(policy_id)
        try:
            if collection.query.fetch_object_by_id(uuid) is None:
                return False
            collection.data.update(uuid=uuid, properties={"active": False})
        except Exception as e:
            raise PolicyStoreError(f"Failed to deactivate policy {policy_id}: {e}") from e

        logger.info(f"Policy deactivated: {policy_id}")
        return True

    @staticmethod
    def _to_properties(policy: Policy) -> dict:
        props = asdict(policy)
        props["policy_id"] = props.pop("id")
        # Weaviate rejects null text properties
        return {k: v for k, v in props.items() if v is not None}

    @staticmethod
    def _to_policy(obj: Any) -> Policy:
        """Convert Weaviate object to Policy."""
        props = obj.properties
        return Policy(
            id=props.get("policy_id", ""),
            title=props.get("title", ""),
            content=props.get("content", ""),
            category=props.get("category", "general"),
            tags=list(props.get("tags") or []),
            active=props.get("active", True),
            version=props.get("version", "1.0"),
            source=props.get("source"),
            last_updated=props.get("last_updated"),
        )

    def close(self):
        """Close Weaviate client connection."""
        if self.client:
            self.client.close()
            logger.info("Weaviate client closed")
