"""
Porter stemmer for English.

Implements the reference suffix-stripping algorithm by M.F. Porter (the
tartarus.org reference implementation, including its 'bli' → 'ble' and
'logi' → 'log' departures from the 1980 paper):
https://tartarus.org/martin/PorterStemmer/

Each step is a pure function from word to word, so the pipeline can be
audited and tested one step at a time. `PorterStemmer` wraps the pipeline
with a bounded memoization cache.

Examples:
- "running" → "run"
- "flies" → "fli"
- "relational" → "relat"
- "adjustment" → "adjust"
"""

from typing import Callable, Optional, Tuple

from ..cache.token_cache import TokenCache
from ..config import settings
from ..version import STEMMER_VERSION

VOWELS = frozenset("aeiou")

STEP2_RULES: Tuple[Tuple[str, str], ...] = (
    ("ational", "ate"),
    ("tional", "tion"),
    ("enci", "ence"),
    ("anci", "ance"),
    ("izer", "ize"),
    ("bli", "ble"),
    ("alli", "al"),
    ("entli", "ent"),
    ("eli", "e"),
    ("ousli", "ous"),
    ("ization", "ize"),
    ("ation", "ate"),
    ("ator", "ate"),
    ("alism", "al"),
    ("iveness", "ive"),
    ("fulness", "ful"),
    ("ousness", "ous"),
    ("aliti", "al"),
    ("iviti", "ive"),
    ("biliti", "ble"),
    ("logi", "log"),
)

STEP3_RULES: Tuple[Tuple[str, str], ...] = (
    ("icate", "ic"),
    ("ative", ""),
    ("alize", "al"),
    ("iciti", "ic"),
    ("ical", "ic"),
    ("ful", ""),
    ("ness", ""),
)

# Longer suffixes precede their own tails ("ement" before "ment" before "ent")
STEP4_SUFFIXES: Tuple[str, ...] = (
    "al", "ance", "ence", "er", "ic", "able", "ible", "ant", "ement",
    "ment", "ent", "ion", "ou", "ism", "ate", "iti", "ous", "ive", "ize",
)


# ============================================================================
# WORD SHAPE PREDICATES
# ============================================================================

def is_consonant(word: str, i: int) -> bool:
    """'y' is a consonant at the start of a word or after a vowel."""
    ch = word[i]
    if ch in VOWELS:
        return False
    if ch == "y":
        return i == 0 or not is_consonant(word, i - 1)
    return True


def measure(stem: str) -> int:
    """
    Count VC sequences in `stem`, the m of [C](VC)^m[V].

    Examples:
        >>> measure("tr"), measure("trouble"), measure("troubles")
        (0, 1, 2)
    """
    length = len(stem)
    i = 0
    while i < length and is_consonant(stem, i):
        i += 1

    m = 0
    while i < length:
        while i < length and not is_consonant(stem, i):
            i += 1
        if i >= length:
            break
        while i < length and is_consonant(stem, i):
            i += 1
        m += 1
    return m


def has_vowel(stem: str) -> bool:
    return any(not is_consonant(stem, i) for i in range(len(stem)))


def ends_double_consonant(word: str) -> bool:
    return (
        len(word) >= 2
        and word[-1] == word[-2]
        and is_consonant(word, len(word) - 1)
    )


def ends_cvc(word: str) -> bool:
    """consonant-vowel-consonant ending where the last letter is not w, x or y."""
    n = len(word)
    if n < 3:
        return False
    return (
        is_consonant(word, n - 1)
        and not is_consonant(word, n - 2)
        and is_consonant(word, n - 3)
        and word[-1] not in "wxy"
    )


def _replace_suffix(word: str, rules: Tuple[Tuple[str, str], ...]) -> str:
    # The first matching suffix decides, even when its condition fails.
    for suffix, replacement in rules:
        if word.endswith(suffix):
            stem = word[: -len(suffix)]
            if measure(stem) > 0:
                return stem + replacement
            return word
    return word


# ============================================================================
# STEPS
# ============================================================================

def step1a(word: str) -> str:
    """Plurals: sses → ss, ies → i, ss → ss, s → ''."""
    if word.endswith("sses"):
        return word[:-2]
    if word.endswith("ies"):
        return word[:-2]
    if word.endswith("ss"):
        return word
    if word.endswith("s"):
        return word[:-1]
    return word


def step1b(word: str) -> str:
    """Past tense and gerunds: (m>0) eed → ee, (*v*) ed → '', (*v*) ing → ''."""
    if word.endswith("eed"):
        if measure(word[:-3]) > 0:
            return word[:-1]
        return word

    for suffix in ("ed", "ing"):
        if word.endswith(suffix):
            stem = word[: -len(suffix)]
            if not has_vowel(stem):
                return word
            return _repair_step1b(stem)
    return word


def _repair_step1b(stem: str) -> str:
    if stem.endswith(("at", "bl", "iz")):
        return stem + "e"
    if ends_double_consonant(stem) and stem[-1] not in "lsz":
        return stem[:-1]
    if measure(stem) == 1 and ends_cvc(stem):
        return stem + "e"
    return stem


def step1c(word: str) -> str:
    """(*v*) y → i."""
    if word.endswith("y") and has_vowel(word[:-1]):
        return word[:-1] + "i"
    return word


def step2(word: str) -> str:
    """Double suffixes to single ones, gated by m > 0."""
    return _replace_suffix(word, STEP2_RULES)


def step3(word: str) -> str:
    """-ic-, -full, -ness and friends, gated by m > 0."""
    return _replace_suffix(word, STEP3_RULES)


def step4(word: str) -> str:
    """Strip residual suffixes when m > 1; 'ion' only after s or t."""
    for suffix in STEP4_SUFFIXES:
        if word.endswith(suffix):
            stem = word[: -len(suffix)]
            if suffix == "ion" and not stem.endswith(("s", "t")):
                return word
            if measure(stem) > 1:
                return stem
            return word
    return word


def step5a(word: str) -> str:
    """(m>1) e → '', (m=1 and not *o) e → ''."""
    if word.endswith("e"):
        stem = word[:-1]
        m = measure(stem)
        if m > 1 or (m == 1 and not ends_cvc(stem)):
            return stem
    return word


def step5b(word: str) -> str:
    """(m>1 and *d and *L) → single letter."""
    if word.endswith("ll") and measure(word) > 1:
        return word[:-1]
    return word


STEPS: Tuple[Callable[[str], str], ...] = (
    step1a, step1b, step1c, step2, step3, step4, step5a, step5b,
)


def stem_word(word: str) -> str:
    """
    Stem a single lowercase word without caching.

    Words shorter than 3 characters are returned unchanged.
    """
    if len(word) < 3:
        return word
    for step in STEPS:
        word = step(word)
    return word


# ============================================================================
# MEMOIZED STEMMER
# ============================================================================

class PorterStemmer:
    """
    Porter stemmer backed by a bounded TokenCache.

    The cache is injected so tests can start cold and so every analyzer in
    a process can share one.
    """

    version = STEMMER_VERSION

    def __init__(self, cache: Optional[TokenCache] = None):
        self.cache = cache if cache is not None else TokenCache(settings.token_cache_size)

    def stem(self, word: str) -> str:
        cached = self.cache.get(word)
        if cached is not None:
            return cached
        result = stem_word(word)
        self.cache.put(word, result)
        return result
