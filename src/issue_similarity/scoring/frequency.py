"""
Corpus document-frequency model for IDF token weighting.

Statistics are computed over the summary token sequences of a corpus (the
candidate issues of one project) and cached per corpus key with a TTL:

    weight(token) = clip(1 + ln(N / (df + 1)), 0.01, 1.0)

where N is the number of corpus documents and df the number of documents
containing the token. Corpora with fewer than two documents carry no
usable frequency information, so every token weighs 1.0.
"""

import math
from collections import Counter
from datetime import datetime, timezone
from typing import Iterable, Mapping, Optional, Sequence

import numpy as np
import structlog

from ..cache.frequency_cache import FrequencyCache
from ..config import settings
from ..models.document import Document
from ..models.scoring import CorpusFrequencies
from ..text.analyzer import TextAnalyzer

logger = structlog.get_logger(__name__)

MIN_WEIGHT = 0.01
MAX_WEIGHT = 1.0


class CacheInvariantError(RuntimeError):
    """Raised when cached corpus statistics violate 0 <= count <= total."""


def build_corpus_frequencies(
    corpus_key: str,
    token_sequences: Iterable[Sequence[str]],
    computed_at: Optional[datetime] = None,
) -> CorpusFrequencies:
    """
    Count, for every token, how many sequences contain it at least once.

    Args:
        corpus_key: Corpus identifier
        token_sequences: One token sequence per corpus document
        computed_at: Timestamp to record (default: now, UTC)

    Returns:
        CorpusFrequencies for the corpus

    Examples:
        >>> freqs = build_corpus_frequencies("PROJ", [["login", "fail"], ["login"]])
        >>> freqs.document_counts["login"], freqs.total_documents
        (2, 2)
    """
    counts: Counter = Counter()
    total = 0
    for tokens in token_sequences:
        total += 1
        counts.update(set(tokens))

    return CorpusFrequencies(
        corpus_key=corpus_key,
        document_counts=dict(counts),
        total_documents=total,
        computed_at=computed_at or datetime.now(timezone.utc),
    )


def get_token_weight(
    token: str,
    frequencies: Mapping[str, int],
    total_docs: int,
    strict: Optional[bool] = None,
) -> float:
    """
    IDF weight of `token`, clamped to [0.01, 1.0].

    Args:
        token: Stemmed token
        frequencies: Token → document count
        total_docs: Number of documents in the corpus
        strict: Raise on corrupt counts instead of clamping
            (default: settings.strict_invariants)

    Returns:
        Weight in [0.01, 1.0]; rarer tokens weigh more

    Raises:
        CacheInvariantError: If a count is outside [0, total_docs] in strict mode
    """
    if total_docs < 2:
        return 1.0

    count = frequencies.get(token, 0)
    if count < 0 or count > total_docs:
        if strict is None:
            strict = settings.strict_invariants
        if strict:
            raise CacheInvariantError(
                f"Document count {count} for token '{token}' outside [0, {total_docs}]"
            )
        logger.warning(
            "cache_invariant_violation",
            token=token,
            count=count,
            total_docs=total_docs,
        )
        count = min(max(count, 0), total_docs)

    idf = 1.0 + math.log(total_docs / (count + 1))
    return float(np.clip(idf, MIN_WEIGHT, MAX_WEIGHT))


class FrequencyModel:
    """
    Computes and caches CorpusFrequencies per corpus key.
    """

    def __init__(self, analyzer: TextAnalyzer, cache: Optional[FrequencyCache] = None):
        self.analyzer = analyzer
        self.cache = cache if cache is not None else FrequencyCache(
            ttl_seconds=settings.corpus_cache_ttl_seconds
        )

    def frequencies(self, corpus_key: str, documents: Sequence[Document]) -> CorpusFrequencies:
        """
        Statistics for `corpus_key`, reusing a cached entry younger than the TTL.
        """
        cached = self.cache.get(corpus_key)
        if cached is not None:
            logger.debug(
                "corpus_frequencies_cache_hit",
                corpus_key=corpus_key,
                total_documents=cached.total_documents,
            )
            return cached

        frequencies = build_corpus_frequencies(
            corpus_key, (self.analyzer.tokens(doc.summary) for doc in documents)
        )
        self.cache.put(frequencies)

        logger.debug(
            "corpus_frequencies_computed",
            corpus_key=corpus_key,
            total_documents=frequencies.total_documents,
            vocabulary_size=len(frequencies.document_counts),
        )
        return frequencies

    @staticmethod
    def weight(token: str, frequencies: CorpusFrequencies) -> float:
        return get_token_weight(token, frequencies.document_counts, frequencies.total_documents)
