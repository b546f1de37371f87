"""Pokemon Fusion service."""
