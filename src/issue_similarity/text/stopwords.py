"""
Stopwords for issue text.

General English function words plus domain-noise words that show up in
nearly every ticket ("issue", "error", "page", "button") and therefore
cannot tell one ticket from another.
"""

from typing import FrozenSet, Iterable, List

from ..version import STOPLIST_VERSION

__all__ = ["STOPWORDS", "STOPLIST_VERSION", "filter_stopwords"]

_GENERAL = [
    # Articles and determiners
    "the", "this", "that", "these", "those", "some", "any", "all", "each",
    "every", "both", "either", "neither", "another", "such", "other",
    # Prepositions
    "about", "above", "after", "against", "along", "among", "around",
    "before", "behind", "below", "beneath", "beside", "between", "beyond",
    "during", "for", "from", "into", "near", "off", "onto", "out", "over",
    "since", "than", "through", "toward", "towards", "under", "until",
    "upon", "via", "with", "within", "without",
    # Conjunctions
    "and", "but", "nor", "yet", "because", "although", "though", "while",
    "whether", "unless", "when", "where", "which", "who", "whom", "whose",
    "what", "why", "how", "then", "also", "just", "only", "very",
    # Pronouns
    "you", "your", "yours", "she", "her", "hers", "him", "his", "its",
    "our", "ours", "they", "them", "their", "theirs", "mine", "myself",
    "itself", "themselves",
    # Auxiliary and modal verbs
    "are", "was", "were", "been", "being", "has", "have", "had", "having",
    "does", "did", "doing", "done", "can", "could", "shall", "should",
    "will", "would", "may", "might", "must", "get", "gets", "got",
    # Negation and fillers
    "not", "don", "doesn", "didn", "isn", "aren", "wasn", "won", "cannot",
    "please", "thanks", "still", "again", "now", "here", "there", "more",
    "most", "much", "many", "few", "same", "new",
]

_DOMAIN_NOISE = [
    "issue", "issues", "bug", "bugs", "error", "errors", "problem",
    "problems", "page", "pages", "button", "buttons", "user", "users",
    "ticket", "tickets", "app", "application", "feature", "work", "working",
    "works", "happen", "happens", "seems", "trying", "tried", "try",
    "when", "time", "times", "nothing", "something", "thing", "things",
]

STOPWORDS: FrozenSet[str] = frozenset(_GENERAL + _DOMAIN_NOISE)


def filter_stopwords(tokens: Iterable[str], stopwords: FrozenSet[str]) -> List[str]:
    """
    Drop stopword tokens, preserving order.

    Args:
        tokens: Stemmed tokens
        stopwords: Set to filter against (stemmed forms included)

    Returns:
        Tokens not present in `stopwords`

    Examples:
        >>> filter_stopwords(["login", "button", "respond"], frozenset({"button"}))
        ['login', 'respond']
    """
    return [token for token in tokens if token not in stopwords]
