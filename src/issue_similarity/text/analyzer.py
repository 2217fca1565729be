"""
Text analysis pipeline: normalize → stem → filter stopwords.

Results are cached per raw text, so a summary that appears in many ranking
passes is tokenized once.
"""

from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

from ..cache.token_cache import BoundedCache
from ..config import settings
from ..version import NORMALIZER_VERSION, STOPLIST_VERSION
from .normalizer import normalize
from .stemmer import PorterStemmer
from .stopwords import filter_stopwords
from .vocabulary import Vocabulary


@dataclass(frozen=True)
class AnalyzedText:
    """
    Derived token views of one text field.

    Attributes:
        stems: Normalized and stemmed tokens, stopwords still present
        tokens: The token sequence used for similarity (stopwords removed)
        surface: Stem → first normalized word that produced it, for display
    """

    stems: Tuple[str, ...]
    tokens: Tuple[str, ...]
    surface: Mapping[str, str]

    def display(self, stem: str) -> str:
        return self.surface.get(stem, stem)


class TextAnalyzer:
    """
    Turns raw text into token sequences using a shared stemmer and vocabulary.
    """

    def __init__(
        self,
        stemmer: Optional[PorterStemmer] = None,
        vocabulary: Optional[Vocabulary] = None,
        cache: Optional[BoundedCache] = None,
    ):
        self.stemmer = stemmer or PorterStemmer()
        self.vocabulary = vocabulary or Vocabulary.build(self.stemmer.stem)
        self.cache = cache if cache is not None else BoundedCache(settings.sequence_cache_size)

    def analyze(self, text: Optional[str]) -> AnalyzedText:
        key = text or ""
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        surface = {}
        stems = []
        for word in normalize(key, self.vocabulary.synonyms):
            stem = self.stemmer.stem(word)
            surface.setdefault(stem, word)
            stems.append(stem)

        tokens = filter_stopwords(stems, self.vocabulary.stemmed_stopwords)
        analyzed = AnalyzedText(stems=tuple(stems), tokens=tuple(tokens), surface=surface)
        self.cache.put(key, analyzed)
        return analyzed

    @property
    def versions(self) -> Dict[str, str]:
        """Versions of the normalizer, stemmer and stoplist in use."""
        return {
            "normalizer": NORMALIZER_VERSION,
            "stemmer": self.stemmer.version,
            "stoplist": STOPLIST_VERSION,
        }

    def tokens(self, text: Optional[str]) -> Tuple[str, ...]:
        return self.analyze(text).tokens

    def clear_cache(self) -> None:
        self.cache.clear()
        self.stemmer.cache.clear()
