"""
Static lexical configuration for the similarity engine.

Groups the synonym table, stopwords, action verbs and intent-object terms
into one immutable object built once and shared by every analyzer. The
stemmed views of each table are derived at construction so that matching
is always stem-to-stem.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, FrozenSet, Iterable, Mapping

from .stopwords import STOPWORDS

# Canonical forms: variants on the left collapse to the term on the right
SYNONYM_GROUPS: Dict[str, tuple] = {
    "login": ("signin", "sign", "auth", "authentication", "logon", "logins"),
    "failure": (
        "fail", "fails", "failed", "failing", "bug", "glitch", "crash",
        "crashes", "crashed", "crashing",
    ),
    "performance": ("latency", "lag", "laggy", "slow", "slowness", "sluggish"),
    "ui": ("screen", "view", "modal", "dialog", "popup"),
    "unresponsive": (
        "responding", "respond", "responds", "hang", "hangs", "hanging",
        "frozen", "freeze", "freezes",
    ),
    "logout": ("signout", "logoff"),
}

ACTION_VERBS: FrozenSet[str] = frozenset({
    "fail", "crash", "error", "timeout", "slow", "stuck", "broken",
    "freeze", "leak", "missing", "unresponsive", "duplicate", "blank",
})

OBJECT_TERMS: FrozenSet[str] = frozenset({
    "login", "logout", "password", "api", "upload", "download", "dashboard",
    "payment", "checkout", "cart", "invoice", "search", "export", "import",
    "notification", "email", "profile", "account", "session", "webhook",
})


def expand_synonyms(groups: Mapping[str, Iterable[str]]) -> Dict[str, str]:
    table = {}
    for canonical, variants in groups.items():
        for variant in variants:
            table[variant] = canonical
    return table


@dataclass(frozen=True)
class Vocabulary:
    """
    Immutable lexical tables.

    `synonyms` maps a normalized word to its canonical form. The `stemmed_*`
    views hold the same entries after canonicalization and stemming.
    """

    synonyms: Mapping[str, str]
    stopwords: FrozenSet[str]
    action_verbs: FrozenSet[str]
    object_terms: FrozenSet[str]
    stemmed_stopwords: FrozenSet[str] = field(default=frozenset())
    stemmed_action_verbs: FrozenSet[str] = field(default=frozenset())
    stemmed_objects: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        stem: Callable[[str], str],
        synonym_groups: Mapping[str, Iterable[str]] = SYNONYM_GROUPS,
        stopwords: Iterable[str] = STOPWORDS,
        action_verbs: Iterable[str] = ACTION_VERBS,
        object_terms: Iterable[str] = OBJECT_TERMS,
    ) -> "Vocabulary":
        """
        Build a vocabulary and derive its stemmed views with `stem`.
        """
        synonyms = expand_synonyms(synonym_groups)
        stopwords = frozenset(stopwords)
        action_verbs = frozenset(action_verbs)
        object_terms = frozenset(object_terms)

        def canonical_stem(word: str) -> str:
            return stem(synonyms.get(word, word))

        return cls(
            synonyms=MappingProxyType(synonyms),
            stopwords=stopwords,
            action_verbs=action_verbs,
            object_terms=object_terms,
            stemmed_stopwords=stopwords | frozenset(stem(w) for w in stopwords),
            stemmed_action_verbs=frozenset(canonical_stem(w) for w in action_verbs),
            stemmed_objects=MappingProxyType(
                {canonical_stem(term): term for term in sorted(object_terms)}
            ),
        )
