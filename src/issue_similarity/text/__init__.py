"""
Text processing: normalization, Porter stemming and stopword filtering.
"""

from .analyzer import AnalyzedText, TextAnalyzer
from .normalizer import normalize
from .stemmer import PorterStemmer, stem_word
from .stopwords import STOPWORDS, filter_stopwords
from .vocabulary import Vocabulary

__all__ = [
    "AnalyzedText",
    "TextAnalyzer",
    "normalize",
    "PorterStemmer",
    "stem_word",
    "STOPWORDS",
    "filter_stopwords",
    "Vocabulary",
]
