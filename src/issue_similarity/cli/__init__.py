"""
CLI module for duplicate ranking.

Provides command-line tools for ranking issue exports.
"""

from issue_similarity.cli.rank import main as rank_main

__all__ = ["rank_main"]
