"""
Fusion Service package for the Pokemon Fusion API.

The service fronts the public PokeAPI and combines two creatures into a
synthetic "fusion":
- Lookups: read-through in-memory cache in front of the upstream API
- Fusion: pure combination of names, stats and types
- Images: pre-rendered fusion sprites served from disk

Structure:
- app.main: FastAPI app, routes, and service wiring.
- app.adapters: Upstream PokeAPI client and the sprite asset store.
- app.caching: Process-lifetime creature cache and read-through manager.
- app.domain: Creature models and the fusion engine.
"""
