"""
Read-through lookups for the Fusion Service.
"""

from typing import Any, Dict, Optional, Tuple, TYPE_CHECKING

from shared.logging import get_logger
from shared.errors import UpstreamFetchError
from ..domain.models import Pokemon
from .pokemon_cache import PokemonCache

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from ..adapters.pokeapi_client import PokeAPIClient
    from shared.metrics import MetricsCollector


CACHE_TYPE = "pokemon"


class CacheManager:
    """Resolves creature IDs through the cache, falling back to PokeAPI."""

    def __init__(
        self,
        client: "PokeAPIClient",
        cache: Optional[PokemonCache] = None,
        *,
        metrics: Optional["MetricsCollector"] = None,
    ):
        self.client = client
        self.cache = cache if cache is not None else PokemonCache()
        self.metrics = metrics
        self.logger = get_logger("fusion.cache_manager")

    async def resolve(self, pokemon_id: int) -> Optional[Pokemon]:
        """
        Return the creature for ``pokemon_id``, or ``None`` if it cannot be fetched.

        A hit is served from the cache. A miss calls PokeAPI once and stores
        the result; a failed fetch stores nothing.
        """
        cached = await self.cache.get(pokemon_id)
        if cached is not None:
            self.logger.info("Using cache for pokemon", pokemon_id=pokemon_id)
            self._count("cache_hits_total")
            return cached

        self.logger.info("Using API for pokemon", pokemon_id=pokemon_id)
        self._count("cache_misses_total")
        try:
            pokemon = await self.client.fetch_pokemon(pokemon_id)
        except UpstreamFetchError as exc:
            self.logger.warning(
                "Pokemon lookup failed",
                pokemon_id=pokemon_id,
                code=exc.code,
                error=exc.message
            )
            return None

        return await self.cache.put(pokemon_id, pokemon)

    async def resolve_pair(self, head_id: int, body_id: int) -> Tuple[Optional[Pokemon], Optional[Pokemon]]:
        """Resolve both sides of a fusion, head first.

        The body lookup starts after the head has been stored, so fusing a
        creature with itself reaches PokeAPI at most once.
        """
        head = await self.resolve(head_id)
        body = await self.resolve(body_id)
        return head, body

    async def get_cache_stats(self) -> Dict[str, Any]:
        stats = self.cache.stats()
        stats["cache_type"] = CACHE_TYPE
        return stats

    def _count(self, metric_name: str) -> None:
        if self.metrics is not None:
            self.metrics.increment_counter(metric_name, cache_type=CACHE_TYPE)
