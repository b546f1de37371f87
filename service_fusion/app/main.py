"""
Pokemon Fusion service.
"""

from typing import Annotated, Dict

from fastapi import Path
from fastapi.responses import FileResponse, PlainTextResponse

from shared.base_service import BaseService
from shared.errors import NotFoundError
from .adapters.pokeapi_client import PokeAPIClient
from .adapters.sprite_store import FusionSpriteStore
from .caching.cache_manager import CacheManager
from .domain.fusion import FusionEngine
from .domain.models import Pokemon, missing_pokemon

WELCOME_BANNER = "Welcome to the pokemon fusion API!"
NAME_LOOKUP_FAILED = "Failed to grab"

PokemonId = Annotated[int, Path(ge=0, le=65535, description="National dex number")]


class FusionService(BaseService):
    """Fusion service implementation."""

    def __init__(self):
        super().__init__("fusion", 3000)
        self.pokeapi_client = PokeAPIClient(
            self.config.pokeapi_url,
            timeout=self.config.upstream_timeout_seconds,
            metrics=self.metrics,
        )
        self.cache_manager = CacheManager(self.pokeapi_client, metrics=self.metrics)
        self.fusion_engine = FusionEngine(legacy_speed=self.config.legacy_speed_formula)
        self.sprite_store = FusionSpriteStore(self.config.assets_dir)

        @self.app.on_event("shutdown")
        async def _shutdown():
            await self.pokeapi_client.close()

        self._setup_fusion_routes()

        # Expose service instance via app state for introspection/testing
        self.app.state.fusion_service = self

    async def _check_dependencies(self) -> Dict[str, str]:
        return {
            "pokeapi": self.config.pokeapi_url,
            "assets": "ok" if self.sprite_store.assets_dir.is_dir() else "missing",
        }

    async def fuse(self, head_id: int, body_id: int) -> Pokemon:
        """Fuse two creatures by ID, or return the fallback record if either is unavailable."""
        head, body = await self.cache_manager.resolve_pair(head_id, body_id)
        if head is None or body is None:
            self.logger.warning(
                "Fusion input unavailable, returning fallback",
                head_id=head_id,
                body_id=body_id,
                head_found=head is not None,
                body_found=body is not None
            )
            self.metrics.increment_counter("fusions_total", result="missing")
            return missing_pokemon()

        self.metrics.increment_counter("fusions_total", result="fused")
        return self.fusion_engine.fuse(head, body)

    def _setup_fusion_routes(self):
        """Set up the creature lookup and fusion routes."""

        @self.app.get("/", response_class=PlainTextResponse)
        async def root():
            """Root endpoint."""
            return WELCOME_BANNER

        @self.app.get("/pokemon/name/{pokemon_id}", response_class=PlainTextResponse)
        async def get_pokemon_name(pokemon_id: PokemonId):
            """Return the name of one creature as plain text."""
            pokemon = await self.cache_manager.resolve(pokemon_id)
            if pokemon is None:
                return NAME_LOOKUP_FAILED
            return pokemon.name

        @self.app.get("/pokemon/fuse/{head_id}/{body_id}", response_model=Pokemon)
        async def fuse_pokemon(head_id: PokemonId, body_id: PokemonId):
            """Fuse two creatures."""
            return await self.fuse(head_id, body_id)

        @self.app.get("/pokemon/fuse/{head_id}/{body_id}/image")
        async def get_fusion_image(head_id: PokemonId, body_id: PokemonId):
            """Stream the pre-rendered sprite for a fusion pair."""
            try:
                path = await self.sprite_store.resolve(head_id, body_id)
            except NotFoundError as exc:
                return PlainTextResponse(exc.message, status_code=exc.status_code)

            return FileResponse(
                path,
                media_type=FusionSpriteStore.media_type,
                filename=FusionSpriteStore.file_name(head_id, body_id),
            )

        @self.app.get("/pokemon/{pokemon_id}", response_model=Pokemon)
        async def get_pokemon(pokemon_id: PokemonId):
            """Return one creature record."""
            pokemon = await self.cache_manager.resolve(pokemon_id)
            if pokemon is None:
                raise NotFoundError(
                    f"Pokemon {pokemon_id} could not be retrieved",
                    details={"pokemon_id": pokemon_id}
                )
            return pokemon

        @self.app.get("/api/v1/cache/stats")
        async def get_cache_stats():
            """Get cache statistics."""
            return await self.cache_manager.get_cache_stats()


def create_app():
    """Create FastAPI application."""
    service = FusionService()
    return service.app


if __name__ == "__main__":
    service = FusionService()
    service.run()
