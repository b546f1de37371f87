"""
Adapters package for the Fusion Service.

Contains the outbound PokeAPI client and the on-disk sprite store. These
adapters encapsulate:

- Base URLs, paths and request shapes
- Mapping of upstream documents onto domain models
- Error handling that maps to shared errors

Keep adapters thin and side-effect free outside of explicit calls.
"""

from .pokeapi_client import PokeAPIClient, PokeAPIPokemon
from .sprite_store import FusionSpriteStore

__all__ = [
    "PokeAPIClient",
    "PokeAPIPokemon",
    "FusionSpriteStore",
]
