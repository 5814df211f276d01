"""
Summary Search Engine command line

RUN AS: python -m summary_search.main --corpus summaries.json --user-id U "question"
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from summary_search.config import settings
from summary_search.services.search_engine import SummarySearchEngine
from summary_search.utils.corpus import InMemoryCorpus

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging to stdout"""
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def load_corpus_file(path: Path, user_id: str) -> InMemoryCorpus:
    """
    Load summary rows for one user from a JSON file

    The file holds either a list of rows or an object keyed by user ID.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, list):
        return InMemoryCorpus({user_id: data})

    if isinstance(data, dict):
        return InMemoryCorpus(data)

    raise ValueError(f"Unsupported corpus file layout in {path}")


async def run(args: argparse.Namespace) -> dict:
    engine = SummarySearchEngine(corpus=load_corpus_file(args.corpus, args.user_id))

    if args.suggestions:
        return {"suggestions": await engine.get_search_suggestions(args.user_id)}

    response = await engine.search(args.query or "", args.user_id)
    await engine.analytics.drain()
    return response.model_dump(mode="json")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Ask questions about your summaries")
    parser.add_argument("query", nargs="?", help="Natural language question")
    parser.add_argument("--corpus", type=Path, required=True, help="JSON file of summary rows")
    parser.add_argument("--user-id", default="local", help="User whose summaries to search")
    parser.add_argument("--suggestions", action="store_true", help="Print personalised suggestions instead of searching")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    args = parser.parse_args(argv)

    if not args.suggestions and not args.query:
        parser.error("a query is required unless --suggestions is given")

    configure_logging(args.log_level)

    output = asyncio.run(run(args))
    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
