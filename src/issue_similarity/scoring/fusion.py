"""
Signal fusion, structural penalties and confidence gating.

Evaluation order for one scored pair:
1. Sum summary, description, reporter, labels and recency sub-scores
2. Subtract structural penalties (issue type, components, action verb)
3. Apply the status multiplier
4. Count active signals (recency excluded)
5. Single-signal cap: 65 when only the summary fires, else 60
6. Round half up
7. Intent gate: >= 70 requires two active signals and a shared object
8. Clamp to [0, 100]

Reasons are emitted in the same order.
"""

from dataclasses import dataclass
from typing import FrozenSet, List, Tuple

import numpy as np

from ..config import settings
from ..models.document import Document
from ..models.scoring import SignalBreakdown
from ..text.analyzer import AnalyzedText
from ..text.vocabulary import Vocabulary

MAX_NAMED_KEYWORDS = 3


@dataclass
class FusionWeights:
    """
    Penalty sizes and gate thresholds.
    """
    penalty_issue_type: float = 15.0
    penalty_components: float = 10.0
    penalty_action_verb: float = 10.0
    single_signal_cap_summary: float = 65.0
    single_signal_cap_other: float = 60.0
    high_confidence_threshold: float = 70.0

    @classmethod
    def from_config(cls) -> "FusionWeights":
        """Load weights from settings."""
        return cls(
            penalty_issue_type=settings.penalty_issue_type,
            penalty_components=settings.penalty_components,
            penalty_action_verb=settings.penalty_action_verb,
            single_signal_cap_summary=settings.single_signal_cap_summary,
            single_signal_cap_other=settings.single_signal_cap_other,
            high_confidence_threshold=settings.high_confidence_threshold,
        )


# ============================================================================
# INTENT EXTRACTION
# ============================================================================

def extract_action_verbs(summary: AnalyzedText, vocabulary: Vocabulary) -> FrozenSet[str]:
    """Action verbs (as stems) present in a summary, stopwords included."""
    return frozenset(s for s in summary.stems if s in vocabulary.stemmed_action_verbs)


def shared_object_terms(
    query: AnalyzedText, candidate: AnalyzedText, vocabulary: Vocabulary
) -> List[str]:
    """Object terms named by both summaries, in query order."""
    candidate_stems = set(candidate.stems)
    shared = []
    for stem in query.stems:
        term = vocabulary.stemmed_objects.get(stem)
        if term is not None and stem in candidate_stems and term not in shared:
            shared.append(term)
    return shared


# ============================================================================
# PENALTIES
# ============================================================================

def structural_penalties(
    query: Document,
    candidate: Document,
    query_verbs: FrozenSet[str],
    candidate_verbs: FrozenSet[str],
    weights: FusionWeights,
) -> Tuple[float, List[str]]:
    """
    Penalties for structurally different issues.

    A penalty applies only when both sides carry the field being compared;
    missing metadata is not evidence of a mismatch.

    Returns:
        (total penalty, reason per applied penalty)
    """
    total = 0.0
    reasons = []

    if query.issue_type and candidate.issue_type and query.issue_type != candidate.issue_type:
        total += weights.penalty_issue_type
        reasons.append(
            f"Different issue type: {query.issue_type} vs {candidate.issue_type} "
            f"(-{weights.penalty_issue_type:g})"
        )

    if query.components and candidate.components and query.components.isdisjoint(candidate.components):
        total += weights.penalty_components
        reasons.append(f"No shared components (-{weights.penalty_components:g})")

    if query_verbs and candidate_verbs and query_verbs.isdisjoint(candidate_verbs):
        total += weights.penalty_action_verb
        reasons.append(
            f"Different failure mode: {', '.join(sorted(query_verbs))} vs "
            f"{', '.join(sorted(candidate_verbs))} (-{weights.penalty_action_verb:g})"
        )

    return total, reasons


# ============================================================================
# FUSION
# ============================================================================

def round_half_up(score: float) -> int:
    """Round to the nearest integer, halves upward (49.5 -> 50)."""
    return int(np.floor(score + 0.5))


def summary_signal_active(breakdown: SignalBreakdown) -> bool:
    return breakdown.keyword_score > 0 or breakdown.bigram_score > 0


def count_active_signals(breakdown: SignalBreakdown) -> int:
    """Corroborating signals: summary, description, reporter, labels."""
    return sum([
        summary_signal_active(breakdown),
        breakdown.description_score > 0,
        breakdown.reporter_score > 0,
        breakdown.labels_score > 0,
    ])


def fuse(breakdown: SignalBreakdown, weights: FusionWeights) -> int:
    """
    Fold a signal breakdown into a final 0-100 integer score.

    `breakdown.active_signal_count` and `breakdown.shared_object` must already
    be populated.
    """
    score = (
        breakdown.summary_score
        + breakdown.description_score
        + breakdown.reporter_score
        + breakdown.labels_score
        + breakdown.recency_score
    )
    score -= breakdown.penalties
    score *= breakdown.status_multiplier

    if breakdown.active_signal_count == 1:
        if summary_signal_active(breakdown):
            score = min(score, weights.single_signal_cap_summary)
        else:
            score = min(score, weights.single_signal_cap_other)

    # Round before gating so 69.5 cannot slip into the high band.
    final = round_half_up(score)
    threshold = int(weights.high_confidence_threshold)
    corroborated = breakdown.active_signal_count >= 2 and breakdown.shared_object
    if final >= threshold and not corroborated:
        final = threshold - 1

    return int(np.clip(final, 0, 100))


def build_reasons(breakdown: SignalBreakdown) -> List[str]:
    """
    Human-readable reasons for each signal actually present.
    """
    reasons = []

    if breakdown.shared_keywords:
        named = ", ".join(breakdown.shared_keywords[:MAX_NAMED_KEYWORDS])
        reasons.append(f"Shared keywords: {named}")

    if breakdown.shared_phrases:
        reasons.append(f"Phrase match: \"{breakdown.shared_phrases[0]}\"")

    if breakdown.containment_bonus > 0:
        reasons.append("One summary contains the other")

    if breakdown.description_score > 0:
        reasons.append("Similar description wording")

    if breakdown.reporter_score > 0:
        reasons.append("Same reporter")

    if breakdown.shared_labels:
        reasons.append(f"Shared labels: {', '.join(breakdown.shared_labels)}")

    if breakdown.recency_score > 0:
        reasons.append(f"Created {breakdown.days_apart:.0f} days apart")

    reasons.extend(breakdown.penalty_reasons)

    if breakdown.shared_object:
        reasons.append(f"Shared intent object: {', '.join(breakdown.shared_objects)}")

    return reasons
