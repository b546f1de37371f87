"""
Fusion caching package.

Holds the process-lifetime creature cache and the read-through manager
that sits between request handlers and PokeAPI. Entries live until the
process exits; there is no TTL and no eviction.
"""

from .cache_manager import CacheManager
from .pokemon_cache import PokemonCache
from .rwlock import RWLock

__all__ = [
    "CacheManager",
    "PokemonCache",
    "RWLock",
]
