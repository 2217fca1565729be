"""
Candidate ranking over the scoring engine.
"""

from .ranker import SimilarityRanker, explain, format_explanation, rank

__all__ = ["SimilarityRanker", "rank", "explain", "format_explanation"]
