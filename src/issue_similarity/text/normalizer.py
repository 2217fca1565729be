"""
Text normalization for issue summaries and descriptions.

Steps, in order:
1. Lowercase
2. Replace every character outside [a-z0-9\\s] with a space
3. Split on whitespace runs
4. Drop tokens of length <= 2
5. Map each token through the synonym table
"""

import re
from typing import List, Mapping, Optional

from .vocabulary import SYNONYM_GROUPS, expand_synonyms

MIN_TOKEN_LENGTH = 3

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")

DEFAULT_SYNONYMS: Mapping[str, str] = expand_synonyms(SYNONYM_GROUPS)


def normalize(text: Optional[str], synonyms: Optional[Mapping[str, str]] = None) -> List[str]:
    """
    Turn raw text into canonical lowercase tokens.

    Args:
        text: Raw text (None and "" yield no tokens)
        synonyms: Variant → canonical table (default: built-in table)

    Returns:
        Ordered list of normalized tokens

    Examples:
        >>> normalize("Sign-in button unresponsive!")
        ['login', 'button', 'unresponsive']
        >>> normalize("UI is slow")
        ['performance']
    """
    if not text:
        return []
    if synonyms is None:
        synonyms = DEFAULT_SYNONYMS

    text = _NON_ALNUM.sub(" ", text.lower())
    tokens = [t for t in text.split() if len(t) >= MIN_TOKEN_LENGTH]
    return [synonyms.get(t, t) for t in tokens]
