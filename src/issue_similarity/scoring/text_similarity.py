"""
Textual similarity sub-scores.

Summary (cap 40):
- Weighted keyword overlap: sum of IDF weights of shared tokens, x 8 points
  per unit of weight (`keyword_points`)
- Bigram overlap: shared adjacent pairs score (w_a + w_b) x 8 x 2.5
- Containment: +5 when one raw summary contains the other

Weights never exceed 1.0, so without the x 8 scale two matching words and
their phrase could never lift a strong duplicate (same reporter, same labels)
into the 70+ band.

Description (cap 15): Jaccard similarity of 3-token shingle sets.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Sequence, Set, Tuple

import numpy as np

from ..config import settings
from ..text.analyzer import AnalyzedText


@dataclass
class SummaryWeights:
    """
    Point scale for the summary sub-score.

    `keyword_points` converts one unit of IDF weight into score points.
    """
    cap: float = 40.0
    keyword_points: float = 8.0
    bigram_multiplier: float = 2.5
    containment_bonus: float = 5.0

    @classmethod
    def from_config(cls) -> "SummaryWeights":
        """Load weights from settings."""
        return cls(
            cap=settings.summary_cap,
            keyword_points=settings.keyword_points,
            bigram_multiplier=settings.bigram_multiplier,
            containment_bonus=settings.containment_bonus,
        )


@dataclass
class SummarySimilarity:
    score: float = 0.0
    keyword_score: float = 0.0
    bigram_score: float = 0.0
    containment_bonus: float = 0.0
    shared_tokens: List[str] = field(default_factory=list)
    shared_bigrams: List[Tuple[str, str]] = field(default_factory=list)


# ============================================================================
# SET HELPERS
# ============================================================================

def bigrams(tokens: Sequence[str]) -> List[Tuple[str, str]]:
    """
    Adjacent token pairs.

    Examples:
        >>> bigrams(["a", "b", "c"])
        [('a', 'b'), ('b', 'c')]
    """
    return [(tokens[i], tokens[i + 1]) for i in range(len(tokens) - 1)]


def shingles(tokens: Sequence[str], size: int = 3) -> Set[Tuple[str, ...]]:
    """
    Set of contiguous `size`-token windows (step 1).

    Sequences shorter than `size` have no shingles.
    """
    if size < 1 or len(tokens) < size:
        return set()
    return {tuple(tokens[i : i + size]) for i in range(len(tokens) - size + 1)}


def jaccard(a: Set, b: Set) -> float:
    """|A ∩ B| / |A ∪ B|, defined as 0.0 when both sets are empty."""
    union = len(a | b)
    if union == 0:
        return 0.0
    return len(a & b) / union


def _ordered_unique(items: Sequence) -> List:
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def _contains(query_raw: str, candidate_raw: str) -> bool:
    q = query_raw.strip().lower()
    c = candidate_raw.strip().lower()
    if not q or not c:
        return False
    return q in c or c in q


# ============================================================================
# SUB-SCORES
# ============================================================================

def summary_similarity(
    query: AnalyzedText,
    candidate: AnalyzedText,
    query_raw: str,
    candidate_raw: str,
    token_weight: Callable[[str], float],
    weights: SummaryWeights,
) -> SummarySimilarity:
    """
    Summary sub-score from keyword, bigram and containment components.

    Args:
        query: Analyzed query summary
        candidate: Analyzed candidate summary
        query_raw: Raw query summary (for containment)
        candidate_raw: Raw candidate summary (for containment)
        token_weight: Token → IDF weight for the current corpus
        weights: Point scale

    Returns:
        SummarySimilarity with the clamped total and its components
    """
    candidate_tokens = set(candidate.tokens)
    shared_tokens = [t for t in _ordered_unique(query.tokens) if t in candidate_tokens]
    keyword_score = sum(token_weight(t) for t in shared_tokens) * weights.keyword_points

    candidate_bigrams = set(bigrams(candidate.tokens))
    shared_bigrams = [b for b in _ordered_unique(bigrams(query.tokens)) if b in candidate_bigrams]
    bigram_score = sum(
        (token_weight(a) + token_weight(b)) * weights.keyword_points * weights.bigram_multiplier
        for a, b in shared_bigrams
    )

    containment = weights.containment_bonus if _contains(query_raw, candidate_raw) else 0.0

    raw_total = keyword_score + bigram_score + containment
    return SummarySimilarity(
        score=float(np.clip(raw_total, 0.0, weights.cap)),
        keyword_score=keyword_score,
        bigram_score=bigram_score,
        containment_bonus=containment,
        shared_tokens=shared_tokens,
        shared_bigrams=shared_bigrams,
    )


def description_similarity(
    query_tokens: Sequence[str],
    candidate_tokens: Sequence[str],
    cap: float = 15.0,
    shingle_size: int = 3,
) -> Tuple[float, float]:
    """
    Description sub-score from shingle-set Jaccard similarity.

    Returns:
        (score, jaccard) tuple, score clamped to [0, cap]
    """
    similarity = jaccard(
        shingles(query_tokens, shingle_size), shingles(candidate_tokens, shingle_size)
    )
    return float(np.clip(similarity * cap, 0.0, cap)), similarity
