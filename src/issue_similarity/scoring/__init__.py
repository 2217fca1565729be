"""
Similarity scoring: corpus frequencies, text and metadata signals, fusion.
"""

from .frequency import (
    CacheInvariantError,
    FrequencyModel,
    build_corpus_frequencies,
    get_token_weight,
)
from .fusion import FusionWeights, build_reasons, fuse
from .metadata import MetadataWeights, recency_score, status_multiplier
from .text_similarity import SummaryWeights, jaccard, shingles

__all__ = [
    "CacheInvariantError",
    "FrequencyModel",
    "build_corpus_frequencies",
    "get_token_weight",
    "FusionWeights",
    "build_reasons",
    "fuse",
    "MetadataWeights",
    "recency_score",
    "status_multiplier",
    "SummaryWeights",
    "jaccard",
    "shingles",
]
