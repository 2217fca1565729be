"""
Metadata signals: reporter, labels, recency and status.

Reporter, labels and recency are additive points; status is a multiplier
applied to the fused score.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import AbstractSet, List, Optional, Tuple

from ..config import settings
from .text_similarity import jaccard

DONE_STATUSES = frozenset({"done", "closed", "resolved"})
IN_PROGRESS_STATUSES = frozenset({"in progress", "indeterminate"})


@dataclass
class MetadataWeights:
    """
    Point values and decay constants for metadata signals.
    """
    reporter_points: float = 20.0
    labels_points: float = 20.0
    recency_max_points: float = 10.0
    recency_decay_days: float = 30.0
    recency_cutoff_days: float = 90.0
    done_multiplier: float = 0.95
    in_progress_multiplier: float = 0.9

    @classmethod
    def from_config(cls) -> "MetadataWeights":
        """Load weights from settings."""
        return cls(
            reporter_points=settings.reporter_points,
            labels_points=settings.labels_points,
            recency_max_points=settings.recency_max_points,
            recency_decay_days=settings.recency_decay_days,
            recency_cutoff_days=settings.recency_cutoff_days,
            done_multiplier=settings.status_multiplier_done,
            in_progress_multiplier=settings.status_multiplier_in_progress,
        )


def reporter_score(
    query_reporter: Optional[str],
    candidate_reporter: Optional[str],
    points: float = 20.0,
) -> float:
    if query_reporter and query_reporter == candidate_reporter:
        return points
    return 0.0


def labels_score(
    query_labels: AbstractSet[str],
    candidate_labels: AbstractSet[str],
    points: float = 20.0,
) -> Tuple[float, List[str]]:
    """
    Label-set Jaccard similarity scaled to `points`.

    Returns:
        (score, sorted shared labels)
    """
    shared = sorted(set(query_labels) & set(candidate_labels))
    return jaccard(set(query_labels), set(candidate_labels)) * points, shared


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are taken to be UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def days_between(first: Optional[datetime], second: Optional[datetime]) -> Optional[float]:
    """Absolute difference in days, or None if either timestamp is missing."""
    if first is None or second is None:
        return None
    delta = _as_utc(first) - _as_utc(second)
    return abs(delta.total_seconds()) / 86400.0


def recency_score(days: Optional[float], weights: MetadataWeights) -> float:
    """
    Exponential decay of creation-date distance.

    Scores round(exp(-days / 30) * 10, 2) below the 90-day cutoff and 0 at or
    beyond it.

    Examples:
        >>> recency_score(0, MetadataWeights())
        10.0
        >>> recency_score(30, MetadataWeights())
        3.68
        >>> recency_score(90, MetadataWeights())
        0.0
    """
    if days is None or days >= weights.recency_cutoff_days:
        return 0.0
    return round(math.exp(-days / weights.recency_decay_days) * weights.recency_max_points, 2)


def status_multiplier(status_category: Optional[str], weights: MetadataWeights) -> float:
    """
    Multiplier for the candidate's status category.

    Done → 0.95, In Progress → 0.9, anything else → 1.0.
    """
    if not status_category:
        return 1.0
    status = status_category.strip().lower()
    if status in DONE_STATUSES:
        return weights.done_multiplier
    if status in IN_PROGRESS_STATUSES:
        return weights.in_progress_multiplier
    return 1.0
