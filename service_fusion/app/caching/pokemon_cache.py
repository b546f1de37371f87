"""
Process-lifetime creature cache.
"""

from typing import Any, Dict, Optional

from shared.logging import get_logger
from ..domain.models import Pokemon
from .rwlock import RWLock


class PokemonCache:
    """
    In-memory map from numeric ID to a fetched creature.

    Entries are never evicted or replaced: the first stored record for an
    ID is the one every later reader sees. Access is guarded by a
    reader/writer lock shared by all request tasks.
    """

    def __init__(self):
        self._entries: Dict[int, Pokemon] = {}
        self._lock = RWLock()
        self.hits = 0
        self.misses = 0
        self.logger = get_logger("fusion.pokemon_cache")

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, pokemon_id: int) -> bool:
        return pokemon_id in self._entries

    async def get(self, pokemon_id: int) -> Optional[Pokemon]:
        """Return the cached creature or ``None``."""
        async with self._lock.read():
            pokemon = self._entries.get(pokemon_id)
        if pokemon is None:
            self.misses += 1
        else:
            self.hits += 1
        return pokemon

    async def put(self, pokemon_id: int, pokemon: Pokemon) -> Pokemon:
        """
        Store ``pokemon`` unless the ID is already cached.

        Returns the record that is cached for the ID after the call.
        """
        async with self._lock.write():
            stored = self._entries.setdefault(pokemon_id, pokemon)
        if stored is not pokemon:
            self.logger.debug("Cache entry already present", pokemon_id=pokemon_id)
        return stored

    def stats(self) -> Dict[str, Any]:
        lookups = self.hits + self.misses
        return {
            "entries": len(self._entries),
            "hits": self.hits,
            "misses": self.misses,
            "hit_ratio": round(self.hits / lookups, 4) if lookups else 0.0,
        }
