"""
Duplicate-candidate ranking.

Public API:
- SimilarityRanker: owns the analyzer, caches and weights; ranks candidates
- rank(): convenience wrapper around a SimilarityRanker
- explain() / format_explanation(): reason helpers for a ScoredCandidate

The engine performs no I/O: documents and corpus membership are supplied by
the caller, already bounded to a manageable candidate list.
"""

import time
from datetime import datetime, timezone
from typing import List, Optional, Sequence

import structlog

from ..cache.frequency_cache import FrequencyCache
from ..config import settings
from ..models.document import Document
from ..models.scoring import CorpusFrequencies, ScoredCandidate, SignalBreakdown
from ..scoring.frequency import FrequencyModel
from ..scoring.fusion import (
    FusionWeights,
    build_reasons,
    count_active_signals,
    extract_action_verbs,
    fuse,
    round_half_up,
    shared_object_terms,
    structural_penalties,
)
from ..scoring.metadata import (
    MetadataWeights,
    days_between,
    labels_score,
    recency_score,
    reporter_score,
    status_multiplier,
)
from ..scoring.text_similarity import (
    SummaryWeights,
    description_similarity,
    summary_similarity,
)
from ..text.analyzer import TextAnalyzer

logger = structlog.get_logger(__name__)


class SimilarityRanker:
    """
    Scores and ranks candidate issues against a query issue.

    Construct once per process and share: the token and corpus caches live
    on the instance.
    """

    def __init__(
        self,
        analyzer: Optional[TextAnalyzer] = None,
        frequency_cache: Optional[FrequencyCache] = None,
        summary_weights: Optional[SummaryWeights] = None,
        metadata_weights: Optional[MetadataWeights] = None,
        fusion_weights: Optional[FusionWeights] = None,
        debug: Optional[bool] = None,
    ):
        self.analyzer = analyzer or TextAnalyzer()
        self.frequency_model = FrequencyModel(self.analyzer, frequency_cache)
        self.summary_weights = summary_weights or SummaryWeights.from_config()
        self.metadata_weights = metadata_weights or MetadataWeights.from_config()
        self.fusion_weights = fusion_weights or FusionWeights.from_config()
        self.debug = settings.debug_scoring if debug is None else debug
        self.shingle_size = settings.shingle_size
        self.description_cap = settings.description_cap

        self.logger = logger.bind(component="similarity_ranker")

    # ------------------------------------------------------------------
    # Ranking
    # ------------------------------------------------------------------

    def rank(
        self,
        query: Document,
        candidates: Sequence[Document],
        corpus_key: str,
        min_score: Optional[float] = None,
        limit: Optional[int] = None,
    ) -> List[ScoredCandidate]:
        """
        Rank candidates by descending score, ties broken by id ascending.

        Args:
            query: The issue to find duplicates of
            candidates: Candidate issues from the same corpus
            corpus_key: Corpus identifier for frequency statistics
            min_score: Drop candidates scoring below this (default 50)
            limit: Maximum number of results (default 100)

        Returns:
            Ordered list of ScoredCandidate

        Raises:
            ValueError: On negative min_score or limit < 1
        """
        if min_score is None:
            min_score = settings.default_min_score
        if limit is None:
            limit = settings.default_max_results
        if min_score < 0:
            raise ValueError(f"min_score must be non-negative, got {min_score}")
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")

        start_time = time.time()

        if not candidates:
            return []

        frequencies = self.frequency_model.frequencies(corpus_key, candidates)

        results = []
        for candidate in candidates:
            if candidate.id == query.id:
                continue
            scored = self._score(query, candidate, frequencies, min_score)
            if scored is not None and scored.final_score >= min_score:
                results.append(scored)

        results.sort(key=lambda s: (-s.final_score, s.document_id))
        results = results[:limit]

        self.logger.info(
            "ranking_completed",
            query_id=query.id,
            corpus_key=corpus_key,
            candidates_count=len(candidates),
            returned_count=len(results),
            processing_time_ms=round((time.time() - start_time) * 1000, 2),
            text_versions=self.analyzer.versions,
        )

        return results

    def score_pair(
        self,
        query: Document,
        candidate: Document,
        frequencies: Optional[CorpusFrequencies] = None,
    ) -> ScoredCandidate:
        """
        Score one pair without thresholding.

        Without `frequencies`, every token weighs 1.0.
        """
        if frequencies is None:
            frequencies = CorpusFrequencies(
                corpus_key="", total_documents=0, computed_at=datetime.now(timezone.utc)
            )
        return self._score(query, candidate, frequencies, None)

    def clear_caches(self) -> None:
        self.analyzer.clear_cache()
        self.frequency_model.cache.clear()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _score(
        self,
        query: Document,
        candidate: Document,
        frequencies: CorpusFrequencies,
        min_score: Optional[float],
    ) -> Optional[ScoredCandidate]:
        query_summary = self.analyzer.analyze(query.summary)
        candidate_summary = self.analyzer.analyze(candidate.summary)

        summary = summary_similarity(
            query_summary,
            candidate_summary,
            query.summary,
            candidate.summary,
            lambda token: self.frequency_model.weight(token, frequencies),
            self.summary_weights,
        )

        reporter = reporter_score(
            query.reporter, candidate.reporter, self.metadata_weights.reporter_points
        )
        labels, shared_labels = labels_score(
            query.labels, candidate.labels, self.metadata_weights.labels_points
        )
        days = days_between(query.created, candidate.created)
        recency = recency_score(days, self.metadata_weights)
        multiplier = status_multiplier(candidate.status_category, self.metadata_weights)

        # Penalties and gates only lower the score, so this bounds it from above.
        if min_score is not None:
            upper_bound = (
                summary.score + self.description_cap + reporter + labels + recency
            ) * multiplier
            # Compared as rounded, since the final score is rounded half up.
            if round_half_up(upper_bound) < min_score:
                self.logger.debug(
                    "candidate_skipped_upper_bound",
                    candidate_id=candidate.id,
                    upper_bound=round(upper_bound, 1),
                    min_score=min_score,
                )
                return None

        description, _ = description_similarity(
            self.analyzer.tokens(query.description),
            self.analyzer.tokens(candidate.description),
            cap=self.description_cap,
            shingle_size=self.shingle_size,
        )

        vocabulary = self.analyzer.vocabulary
        penalties, penalty_reasons = structural_penalties(
            query,
            candidate,
            extract_action_verbs(query_summary, vocabulary),
            extract_action_verbs(candidate_summary, vocabulary),
            self.fusion_weights,
        )
        shared_objects = shared_object_terms(query_summary, candidate_summary, vocabulary)

        breakdown = SignalBreakdown(
            summary_score=summary.score,
            keyword_score=summary.keyword_score,
            bigram_score=summary.bigram_score,
            containment_bonus=summary.containment_bonus,
            description_score=description,
            reporter_score=reporter,
            labels_score=labels,
            recency_score=recency,
            status_multiplier=multiplier,
            penalties=penalties,
            shared_object=bool(shared_objects),
            shared_keywords=[query_summary.display(t) for t in summary.shared_tokens],
            shared_phrases=[
                f"{query_summary.display(a)} {query_summary.display(b)}"
                for a, b in summary.shared_bigrams
            ],
            shared_labels=shared_labels,
            shared_objects=shared_objects,
            days_apart=days or 0.0,
            penalty_reasons=penalty_reasons,
        )
        breakdown.active_signal_count = count_active_signals(breakdown)

        final_score = fuse(breakdown, self.fusion_weights)

        if self.debug:
            self.logger.info(
                "candidate_scored",
                candidate_id=candidate.id,
                summary=round(breakdown.summary_score, 1),
                description=round(breakdown.description_score, 1),
                reporter=round(breakdown.reporter_score, 1),
                labels=round(breakdown.labels_score, 1),
                recency=round(breakdown.recency_score, 1),
                status_multiplier=breakdown.status_multiplier,
                penalties=round(breakdown.penalties, 1),
                active_signals=breakdown.active_signal_count,
                final_score=final_score,
            )

        return ScoredCandidate(
            document_id=candidate.id,
            final_score=final_score,
            reasons=build_reasons(breakdown),
            breakdown=breakdown,
        )


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

def rank(
    query: Document,
    candidates: Sequence[Document],
    corpus_key: str,
    min_score: Optional[float] = None,
    limit: Optional[int] = None,
    ranker: Optional[SimilarityRanker] = None,
) -> List[ScoredCandidate]:
    """
    Rank candidates using a provided ranker or a fresh one with cold caches.
    """
    if ranker is None:
        ranker = SimilarityRanker()
    return ranker.rank(query, candidates, corpus_key, min_score=min_score, limit=limit)


def explain(scored: ScoredCandidate) -> List[str]:
    return list(scored.reasons)


def format_explanation(scored: ScoredCandidate) -> str:
    """
    One-line summary of a scored candidate.

    Examples:
        >>> format_explanation(scored)
        'PROJ-2 (89%): Shared keywords: login, unresponsive; Same reporter'
    """
    reasons = "; ".join(scored.reasons) if scored.reasons else "no supporting signals"
    return f"{scored.document_id} ({scored.final_score}%): {reasons}"
