import argparse
import logging
from pathlib import Path

from dotenv import load_dotenv

from .config import IngestionConfig
from .pipeline import IngestionPipeline

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

if __name__ == "__main__":
    load_dotenv()

    parser = argparse.ArgumentParser(description="Ingest HR policy documents into Weaviate.")
    parser.add_argument("--docs-dir", type=Path, default=None, help="Directory of .json/.md/.txt policy files")
    parser.add_argument("--sample", action="store_true", help="Ingest the bundled sample policies")
    parser.add_argument("--weaviate-url", type=str, default="http://localhost:8080", help="Weaviate server URL")
    parser.add_argument("--recreate", action="store_true", help="Drop and recreate the policy collection")
    args = parser.parse_args()

    if not args.docs_dir and not args.sample:
        parser.error("Nothing to ingest: pass --docs-dir and/or --sample")

    config = IngestionConfig(weaviate_url=args.weaviate_url, recreate_collection=args.recreate)
    if args.docs_dir:
        config.docs_dir = args.docs_dir

    pipeline = IngestionPipeline(config=config)
    try:
        if args.sample:
            pipeline.ingest_samples()
        if args.docs_dir:
            pipeline.run()
    finally:
        pipeline.close()
