"""Answer one HR policy question from the command line.

    python -m policy_qa "How many sick leave days do I get?" --sample
"""

import argparse
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

from .agent import AgentConfig, PolicyChatWorkflow
from .ingestion import IngestionConfig, IngestionPipeline
from .retriever import PolicyRetriever, RetrievalConfig
from .store import InMemoryPolicyStore, WeaviatePolicyStore

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


def build_store(args):
    if args.weaviate_url:
        return WeaviatePolicyStore(weaviate_url=args.weaviate_url)

    store = InMemoryPolicyStore()
    pipeline = IngestionPipeline(IngestionConfig(docs_dir=args.docs_dir or Path("./documents")), store=store)
    if args.sample or not args.docs_dir:
        pipeline.ingest_samples()
    if args.docs_dir:
        pipeline.run()
    return store


if __name__ == "__main__":
    load_dotenv()

    parser = argparse.ArgumentParser(description="Ask the HR policy assistant a question.")
    parser.add_argument("question", type=str, help="Question to answer")
    parser.add_argument("--docs-dir", type=Path, default=None, help="Load policies from this directory")
    parser.add_argument("--sample", action="store_true", help="Load the bundled sample policies")
    parser.add_argument("--weaviate-url", type=str, default=None, help="Query an existing Weaviate store instead")
    args = parser.parse_args()

    store = build_store(args)
    try:
        retriever = PolicyRetriever(store, RetrievalConfig.from_env())
        workflow = PolicyChatWorkflow(retriever, AgentConfig.from_env())
        result = workflow.run(args.question)
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    finally:
        store.close()
