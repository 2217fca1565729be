"""
Duplicate-issue similarity engine.

Ranks candidate issues against a query issue with an explainable 0-100 score.
"""

from .models.document import Document
from .models.scoring import CorpusFrequencies, ScoredCandidate, SignalBreakdown
from .ranking.ranker import SimilarityRanker, explain, format_explanation, rank
from .version import ENGINE_VERSION

__version__ = ENGINE_VERSION

__all__ = [
    "Document",
    "CorpusFrequencies",
    "ScoredCandidate",
    "SignalBreakdown",
    "SimilarityRanker",
    "rank",
    "explain",
    "format_explanation",
]
