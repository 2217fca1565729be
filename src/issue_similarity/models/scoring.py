"""
Data models for similarity scoring.

Defines corpus statistics, per-pair signal breakdowns and the ranked output.
"""

from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel, Field

from ..version import SCORING_VERSION


class CorpusFrequencies(BaseModel):
    """
    Document-frequency statistics for one corpus (e.g. a project).

    `document_counts[token]` is the number of corpus documents containing the
    stemmed token at least once, so every count lies in [0, total_documents].
    """

    model_config = {"frozen": True}

    corpus_key: str = Field(description="Corpus identifier, e.g. a project key")
    document_counts: Dict[str, int] = Field(default_factory=dict)
    total_documents: int = Field(default=0, ge=0)
    computed_at: datetime = Field(description="When the statistics were computed (UTC)")

    def count(self, token: str) -> int:
        return self.document_counts.get(token, 0)


class SignalBreakdown(BaseModel):
    """
    Raw per-pair signals consumed by fusion, gating and reason generation.
    """

    summary_score: float = Field(default=0.0, ge=0.0)
    keyword_score: float = Field(default=0.0, ge=0.0, description="Weighted shared-token part")
    bigram_score: float = Field(default=0.0, ge=0.0, description="Shared-phrase part")
    containment_bonus: float = Field(default=0.0, ge=0.0)
    description_score: float = Field(default=0.0, ge=0.0)
    reporter_score: float = Field(default=0.0, ge=0.0)
    labels_score: float = Field(default=0.0, ge=0.0)
    recency_score: float = Field(default=0.0, ge=0.0)
    status_multiplier: float = Field(default=1.0, gt=0.0)
    penalties: float = Field(default=0.0, ge=0.0, description="Total structural penalty")
    active_signal_count: int = Field(default=0, ge=0)
    shared_object: bool = False

    # Evidence kept for explanations
    shared_keywords: List[str] = Field(default_factory=list)
    shared_phrases: List[str] = Field(default_factory=list)
    shared_labels: List[str] = Field(default_factory=list)
    shared_objects: List[str] = Field(default_factory=list)
    days_apart: float = Field(default=0.0, ge=0.0)
    penalty_reasons: List[str] = Field(default_factory=list)


class ScoredCandidate(BaseModel):
    """
    One ranked candidate with its explainable score.
    """

    model_config = {"frozen": True}

    document_id: str
    final_score: int = Field(ge=0, le=100)
    reasons: List[str] = Field(default_factory=list)
    breakdown: SignalBreakdown
    scoring_version: str = SCORING_VERSION
