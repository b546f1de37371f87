"""
Domain models and rules for the Fusion Service.

Nothing in this package performs I/O; adapters and caching build on it.
"""

from .models import Pokemon, Stats, missing_pokemon
from .fusion import FusionEngine, fuse_pokemon

__all__ = [
    "Pokemon",
    "Stats",
    "missing_pokemon",
    "FusionEngine",
    "fuse_pokemon",
]
