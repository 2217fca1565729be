"""
Engine configuration management.

This module handles configuration from environment variables using Pydantic Settings.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Engine configuration from environment variables.

    All settings can be overridden via environment variables with the same name.
    """

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Debug instrumentation
    debug_scoring: bool = False  # Emit one structured record per scored pair
    strict_invariants: bool = False  # Raise on cache corruption instead of clamping

    # Caches
    token_cache_size: int = 1000
    sequence_cache_size: int = 2000  # Raw text → token sequence
    corpus_cache_ttl_seconds: float = 300.0

    # Ranking defaults
    default_min_score: float = 50.0
    default_max_results: int = 100

    # Summary sub-score
    summary_cap: float = 40.0
    keyword_points: float = 8.0  # Points per unit of IDF weight
    bigram_multiplier: float = 2.5
    containment_bonus: float = 5.0

    # Description sub-score
    description_cap: float = 15.0
    shingle_size: int = 3

    # Metadata signals
    reporter_points: float = 20.0
    labels_points: float = 20.0
    recency_max_points: float = 10.0
    recency_decay_days: float = 30.0
    recency_cutoff_days: float = 90.0

    # Structural penalties
    penalty_issue_type: float = 15.0
    penalty_components: float = 10.0
    penalty_action_verb: float = 10.0

    # Gating
    single_signal_cap_summary: float = 65.0
    single_signal_cap_other: float = 60.0
    high_confidence_threshold: float = 70.0

    # Status multipliers
    status_multiplier_done: float = 0.95
    status_multiplier_in_progress: float = 0.9

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


# Global settings instance
settings = Settings()
