"""
Unit tests for the PokeAPI client.
"""

import pytest
import httpx
from unittest.mock import MagicMock

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from service_fusion.app.adapters.pokeapi_client import PokeAPIClient, PokeAPIPokemon
from service_fusion.app.domain.models import Pokemon, Stats
from shared.errors import UpstreamFetchError


BASE_URL = "https://pokeapi.test"


def stat(value):
    return {"base_stat": value, "effort": 0, "stat": {"name": "x", "url": ""}}


def type_slot(slot, name):
    return {"slot": slot, "type": {"name": name, "url": f"{BASE_URL}/api/v2/type/{name}/"}}


def make_client(handler, metrics=None):
    transport = httpx.MockTransport(handler)
    return PokeAPIClient(
        BASE_URL,
        http_client=httpx.AsyncClient(transport=transport),
        metrics=metrics,
    )


class TestPokeAPIPokemon:
    """Test cases for upstream document mapping."""

    @pytest.fixture
    def bulbasaur_payload(self):
        """Trimmed /api/v2/pokemon/1 document."""
        return {
            "id": 1,
            "name": "bulbasaur",
            "height": 7,
            "stats": [stat(45), stat(49), stat(49), stat(65), stat(65), stat(45)],
            "types": [type_slot(1, "grass"), type_slot(2, "poison")],
        }

    def test_full_document(self, bulbasaur_payload):
        pokemon = PokeAPIPokemon.model_validate(bulbasaur_payload).to_pokemon()

        assert pokemon == Pokemon(
            name="bulbasaur",
            stats=Stats(hp=45, attack=49, defense=49, special_attack=65, special_defense=65, speed=45),
            types=("grass", "poison"),
        )

    def test_single_type_uses_none_sentinel(self, bulbasaur_payload):
        bulbasaur_payload["types"] = [type_slot(1, "fire")]

        pokemon = PokeAPIPokemon.model_validate(bulbasaur_payload).to_pokemon()

        assert pokemon.types == ("fire", "none")

    def test_extra_types_are_ignored(self, bulbasaur_payload):
        bulbasaur_payload["types"].append(type_slot(3, "dragon"))

        pokemon = PokeAPIPokemon.model_validate(bulbasaur_payload).to_pokemon()

        assert pokemon.types == ("grass", "poison")

    def test_short_stat_list_defaults_to_zero(self, bulbasaur_payload):
        bulbasaur_payload["stats"] = [stat(10), stat(20)]

        stats = PokeAPIPokemon.model_validate(bulbasaur_payload).to_pokemon().stats

        assert stats == Stats(hp=10, attack=20)

    def test_long_stat_list_is_truncated(self, bulbasaur_payload):
        bulbasaur_payload["stats"].append(stat(999))

        stats = PokeAPIPokemon.model_validate(bulbasaur_payload).to_pokemon().stats

        assert stats.speed == 45

    def test_malformed_stat_values(self, bulbasaur_payload):
        bulbasaur_payload["stats"] = [
            {"effort": 0},
            stat("49"),
            stat(-3),
            stat(12.5),
            stat(True),
            "not-an-object",
        ]

        stats = PokeAPIPokemon.model_validate(bulbasaur_payload).to_pokemon().stats

        assert stats == Stats()

    def test_oversized_stat_keeps_low_bits(self, bulbasaur_payload):
        bulbasaur_payload["stats"][0] = stat(65536 + 7)

        stats = PokeAPIPokemon.model_validate(bulbasaur_payload).to_pokemon().stats

        assert stats.hp == 7

    def test_missing_fields_default(self):
        pokemon = PokeAPIPokemon.model_validate({}).to_pokemon()

        assert pokemon.name == ""
        assert pokemon.stats == Stats()
        assert pokemon.types == ("", "")

    def test_mistyped_fields_default(self):
        pokemon = PokeAPIPokemon.model_validate({
            "name": 25,
            "stats": {"hp": 35},
            "types": [{"type": "electric"}],
        }).to_pokemon()

        assert pokemon.name == ""
        assert pokemon.stats == Stats()
        assert pokemon.types == ("", "none")


class TestPokeAPIClient:
    """Test cases for PokeAPIClient."""

    @pytest.fixture
    def pikachu_payload(self):
        """Trimmed /api/v2/pokemon/25 document."""
        return {
            "name": "pikachu",
            "stats": [stat(35), stat(55), stat(40), stat(50), stat(50), stat(90)],
            "types": [type_slot(1, "electric")],
        }

    @pytest.mark.asyncio
    async def test_fetch_pokemon_success(self, pikachu_payload):
        """One GET to /api/v2/pokemon/{id} mapped onto the domain model."""
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=pikachu_payload)

        client = make_client(handler)
        pokemon = await client.fetch_pokemon(25)

        assert len(requests) == 1
        assert requests[0].method == "GET"
        assert str(requests[0].url) == f"{BASE_URL}/api/v2/pokemon/25"
        assert pokemon.name == "pikachu"
        assert pokemon.stats.speed == 90
        assert pokemon.types == ("electric", "none")

        await client.close()

    @pytest.mark.asyncio
    async def test_fetch_pokemon_not_found(self):
        client = make_client(lambda request: httpx.Response(404, text="Not Found"))

        with pytest.raises(UpstreamFetchError) as exc_info:
            await client.fetch_pokemon(0)

        assert exc_info.value.code == "UPSTREAM_FETCH_ERROR"
        assert exc_info.value.details["status_code"] == 404

    @pytest.mark.asyncio
    async def test_fetch_pokemon_server_error_is_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(503, text="unavailable")

        client = make_client(handler)

        with pytest.raises(UpstreamFetchError):
            await client.fetch_pokemon(1)

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_fetch_pokemon_malformed_json(self):
        client = make_client(lambda request: httpx.Response(200, content=b"<html>oops</html>"))

        with pytest.raises(UpstreamFetchError) as exc_info:
            await client.fetch_pokemon(1)

        assert "Malformed JSON" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_fetch_pokemon_non_object_body(self):
        client = make_client(lambda request: httpx.Response(200, json=["bulbasaur"]))

        with pytest.raises(UpstreamFetchError):
            await client.fetch_pokemon(1)

    @pytest.mark.asyncio
    async def test_fetch_pokemon_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)

        with pytest.raises(UpstreamFetchError) as exc_info:
            await client.fetch_pokemon(1)

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_fetch_records_metrics(self, pikachu_payload):
        metrics = MagicMock()
        client = make_client(lambda request: httpx.Response(200, json=pikachu_payload), metrics=metrics)

        await client.fetch_pokemon(25)

        metrics.increment_counter.assert_called_once_with("upstream_fetch_total", outcome="ok")
        metrics.observe_histogram.assert_called_once()

    @pytest.mark.asyncio
    async def test_fetch_failure_records_metrics(self):
        metrics = MagicMock()
        client = make_client(lambda request: httpx.Response(500), metrics=metrics)

        with pytest.raises(UpstreamFetchError):
            await client.fetch_pokemon(25)

        metrics.increment_counter.assert_called_once_with("upstream_fetch_total", outcome="error")

    def test_base_url_trailing_slash(self):
        client = PokeAPIClient("https://pokeapi.co/")

        assert client.pokemon_url(151) == "https://pokeapi.co/api/v2/pokemon/151"

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self):
        client = PokeAPIClient(BASE_URL)
        client._get_client()

        await client.close()
        await client.close()

        assert client._client is None
