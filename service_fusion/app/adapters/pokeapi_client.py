"""
PokeAPI client for the Fusion Service.
"""

import time
from typing import Any, List, Optional, Tuple

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

from shared.logging import get_logger
from shared.errors import UpstreamFetchError
from ..domain.models import NO_TYPE, Pokemon, Stats

STAT_FIELDS = ("hp", "attack", "defense", "special_attack", "special_defense", "speed")

_U64_MAX = 2 ** 64 - 1


def _coerce_base_stat(value: Any) -> int:
    """Map a raw ``base_stat`` JSON value onto the unsigned 16-bit domain.

    Anything that is not a non-negative JSON integer becomes 0; larger
    integers keep their low 16 bits.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    if value < 0 or value > _U64_MAX:
        return 0
    return value & 0xFFFF


class NamedResource(BaseModel):
    """``{"name": ...}`` reference as used throughout PokeAPI."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""

    @field_validator("name", mode="before")
    @classmethod
    def _name_or_empty(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""


class TypeSlot(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: NamedResource = Field(default_factory=NamedResource)

    @field_validator("type", mode="before")
    @classmethod
    def _object_or_empty(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else {}


class StatSlot(BaseModel):
    model_config = ConfigDict(extra="ignore")

    base_stat: int = 0

    @field_validator("base_stat", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> int:
        return _coerce_base_stat(value)


def _objects_only(value: Any) -> List[Any]:
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, dict) else {} for item in value]


class PokeAPIPokemon(BaseModel):
    """
    The subset of ``GET /api/v2/pokemon/{id}`` the service relies on.

    Every field is optional: missing or mistyped values fall back to an
    empty string or zero instead of rejecting the whole document.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    stats: List[StatSlot] = Field(default_factory=list)
    types: List[TypeSlot] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def _name_or_empty(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("stats", "types", mode="before")
    @classmethod
    def _list_of_objects(cls, value: Any) -> List[Any]:
        return _objects_only(value)

    def base_stats(self) -> Stats:
        # Stats are positional; a short list leaves the remaining ones at 0.
        values = [slot.base_stat for slot in self.stats[:len(STAT_FIELDS)]]
        values += [0] * (len(STAT_FIELDS) - len(values))
        return Stats(**dict(zip(STAT_FIELDS, values)))

    def type_pair(self) -> Tuple[str, str]:
        names = [slot.type.name for slot in self.types]
        primary = names[0] if names else ""
        if len(names) == 1:
            return primary, NO_TYPE
        secondary = names[1] if len(names) > 1 else ""
        return primary, secondary

    def to_pokemon(self) -> Pokemon:
        return Pokemon(name=self.name, stats=self.base_stats(), types=self.type_pair())


class PokeAPIClient:
    """Client for retrieving creature records from PokeAPI."""

    SERVICE = "pokeapi"

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        metrics=None,
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.metrics = metrics
        self.logger = get_logger("fusion.pokeapi_client")
        self._client = http_client

    def _get_client(self) -> httpx.AsyncClient:
        """Get the shared HTTP client, creating it on first use."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)
        return self._client

    def pokemon_url(self, pokemon_id: int) -> str:
        return f"{self.base_url}/api/v2/pokemon/{pokemon_id}"

    async def fetch_pokemon(self, pokemon_id: int) -> Pokemon:
        """
        Fetch one creature by its numeric ID.

        Issues exactly one request. Raises ``UpstreamFetchError`` on a
        network failure, a non-2xx status, or a body that is not a JSON
        object.
        """
        url = self.pokemon_url(pokemon_id)
        start_time = time.time()
        try:
            pokemon = await self._request(url, pokemon_id)
        except UpstreamFetchError:
            self._record("error", time.time() - start_time)
            raise
        self._record("ok", time.time() - start_time)
        return pokemon

    async def _request(self, url: str, pokemon_id: int) -> Pokemon:
        try:
            response = await self._get_client().get(url)
        except httpx.HTTPError as exc:
            self.logger.warning("PokeAPI request failed", url=url, error=str(exc))
            raise UpstreamFetchError(
                service=self.SERVICE,
                message=f"Request failed: {exc}",
                details={"pokemon_id": pokemon_id}
            ) from exc

        if not response.is_success:
            self.logger.warning(
                "PokeAPI returned unexpected status",
                url=url,
                status_code=response.status_code
            )
            raise UpstreamFetchError(
                service=self.SERVICE,
                message=f"Unexpected status {response.status_code}",
                details={"pokemon_id": pokemon_id, "status_code": response.status_code}
            )

        try:
            payload = response.json()
        except ValueError as exc:
            self.logger.warning("PokeAPI returned malformed JSON", url=url, error=str(exc))
            raise UpstreamFetchError(
                service=self.SERVICE,
                message="Malformed JSON body",
                details={"pokemon_id": pokemon_id}
            ) from exc

        if not isinstance(payload, dict):
            raise UpstreamFetchError(
                service=self.SERVICE,
                message="Expected a JSON object",
                details={"pokemon_id": pokemon_id}
            )

        pokemon = PokeAPIPokemon.model_validate(payload).to_pokemon()
        self.logger.debug("PokeAPI record retrieved", url=url, name=pokemon.name)
        return pokemon

    def _record(self, outcome: str, duration: float) -> None:
        if self.metrics is None:
            return
        self.metrics.increment_counter("upstream_fetch_total", outcome=outcome)
        self.metrics.observe_histogram("upstream_fetch_duration_seconds", duration, outcome=outcome)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
