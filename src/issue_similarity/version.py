"""
Version constants for the similarity engine.

Bump a component version whenever its output can change for the same input,
so scored results stay traceable to the rules that produced them.
"""

ENGINE_VERSION = "1.0.0"

NORMALIZER_VERSION = "normalizer-1.0.0"
STEMMER_VERSION = "porter-1.0.0"
STOPLIST_VERSION = "stopwords-en-2025.1"
SCORING_VERSION = "similarity-scoring-1.0.0"
