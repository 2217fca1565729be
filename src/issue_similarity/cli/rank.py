"""
Command-line interface for duplicate-candidate ranking.

Reads a JSON file holding a query issue and its candidate issues, ranks the
candidates and prints the scored results.

Usage:
    # Rank with defaults (min score 50, corpus key from the query id prefix)
    python -m issue_similarity.cli.rank input.json

    # Explicit corpus key and threshold, JSON array output
    python -m issue_similarity.cli.rank input.json --corpus-key PROJ --min-score 40 -f json

Input format:
    {"query": {"id": "PROJ-1", "summary": "...", ...},
     "candidates": [{"id": "PROJ-2", ...}, ...]}
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import structlog
from pydantic import ValidationError

from issue_similarity.config import settings
from issue_similarity.logging_config import setup_logging
from issue_similarity.models.document import Document
from issue_similarity.models.scoring import ScoredCandidate
from issue_similarity.ranking.ranker import SimilarityRanker, format_explanation


logger = structlog.get_logger(__name__)


# ============================================================================
# CLI FUNCTIONS
# ============================================================================

def load_input(path: Path) -> Tuple[Document, List[Document]]:
    """
    Load query and candidates from a JSON file.

    Raises:
        ValueError: If the file is not valid JSON or misses required fields
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    if "query" not in payload:
        raise ValueError(f"Missing 'query' in {path}")

    try:
        query = Document.model_validate(payload["query"])
        candidates = [Document.model_validate(c) for c in payload.get("candidates", [])]
    except ValidationError as e:
        raise ValueError(f"Invalid issue document in {path}: {e}") from e

    return query, candidates


def default_corpus_key(query: Document) -> str:
    """Project key of an issue id: 'PROJ-123' → 'PROJ'."""
    return query.id.rsplit("-", 1)[0] if "-" in query.id else query.id


def write_output(
    results: List[ScoredCandidate],
    format: str = "jsonl",
    include_breakdown: bool = False,
):
    """
    Print results to stdout.

    Args:
        results: Ranked candidates
        format: "json", "jsonl" or "text"
        include_breakdown: Include the raw signal breakdown
    """
    exclude = None if include_breakdown else {"breakdown"}
    rows = [r.model_dump(mode="json", exclude=exclude) for r in results]

    if format == "text":
        for result in results:
            print(format_explanation(result))
    elif format == "jsonl":
        for row in rows:
            print(json.dumps(row, ensure_ascii=False))
    else:
        print(json.dumps(rows, ensure_ascii=False, indent=2))


# ============================================================================
# MAIN CLI
# ============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Rank candidate issues as likely duplicates of a query issue",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s input.json
  %(prog)s input.json --corpus-key PROJ --min-score 40
  %(prog)s input.json --format text --limit 5
        """
    )

    parser.add_argument("input", type=str, help="Path to JSON file with 'query' and 'candidates'")

    parser.add_argument(
        "--corpus-key",
        "-k",
        type=str,
        default=None,
        help="Corpus key for frequency statistics (default: project prefix of the query id)"
    )

    parser.add_argument(
        "--min-score",
        "-s",
        type=float,
        default=settings.default_min_score,
        help=f"Minimum score to report (default: {settings.default_min_score:g})"
    )

    parser.add_argument(
        "--limit",
        "-n",
        type=int,
        default=settings.default_max_results,
        help=f"Maximum number of results (default: {settings.default_max_results})"
    )

    parser.add_argument(
        "--format",
        "-f",
        type=str,
        choices=["json", "jsonl", "text"],
        default="jsonl",
        help="Output format (default: jsonl)"
    )

    parser.add_argument(
        "--debug",
        "-d",
        action="store_true",
        help="Log one structured record per scored pair and include breakdowns"
    )

    args = parser.parse_args(argv)

    setup_logging(level="DEBUG" if args.debug else None)

    input_path = Path(args.input)
    if not input_path.is_file():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        query, candidates = load_input(input_path)
        corpus_key = args.corpus_key or default_corpus_key(query)

        ranker = SimilarityRanker(debug=args.debug or None)
        results = ranker.rank(
            query, candidates, corpus_key, min_score=args.min_score, limit=args.limit
        )

        write_output(results, args.format, include_breakdown=args.debug)

    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        logger.error("cli_failed", error=str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
