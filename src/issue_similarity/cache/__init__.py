"""
In-memory caches shared across scoring requests.
"""

from .frequency_cache import FrequencyCache
from .token_cache import BoundedCache, TokenCache

__all__ = ["BoundedCache", "TokenCache", "FrequencyCache"]
