# Data models for the similarity engine

from .document import Document
from .scoring import CorpusFrequencies, ScoredCandidate, SignalBreakdown

__all__ = [
    "Document",
    "CorpusFrequencies",
    "ScoredCandidate",
    "SignalBreakdown",
]
