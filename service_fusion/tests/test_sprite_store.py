"""
Unit tests for the fusion sprite store.
"""

import pytest
from unittest.mock import patch

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from service_fusion.app.adapters.sprite_store import FusionSpriteStore
from shared.errors import NotFoundError


class TestFusionSpriteStore:
    """Test cases for FusionSpriteStore."""

    @pytest.fixture
    def store(self, tmp_path):
        """Create a store over an empty assets directory."""
        return FusionSpriteStore(tmp_path)

    def test_file_name(self):
        assert FusionSpriteStore.file_name(25, 133) == "25.133.png"

    @pytest.mark.asyncio
    async def test_resolve_existing_sprite(self, store, tmp_path):
        (tmp_path / "1.4.png").write_bytes(b"\x89PNG")

        path = await store.resolve(1, 4)

        assert path == tmp_path / "1.4.png"

    @pytest.mark.asyncio
    async def test_resolve_missing_sprite(self, store):
        with pytest.raises(NotFoundError) as exc_info:
            await store.resolve(4, 1)

        assert exc_info.value.status_code == 404
        assert exc_info.value.message.startswith("File not found")
        assert exc_info.value.details == {"file_name": "4.1.png"}

    @pytest.mark.asyncio
    async def test_resolve_checks_file_off_the_event_loop(self, store, tmp_path):
        (tmp_path / "1.4.png").write_bytes(b"\x89PNG")

        with patch("service_fusion.app.adapters.sprite_store.anyio.to_thread.run_sync") as run_sync:
            async def run_in_worker(func):
                return func()

            run_sync.side_effect = run_in_worker

            await store.resolve(1, 4)

        run_sync.assert_called_once()

    @pytest.mark.asyncio
    async def test_directory_with_sprite_name_is_not_a_sprite(self, store, tmp_path):
        (tmp_path / "2.2.png").mkdir()

        with pytest.raises(NotFoundError):
            await store.resolve(2, 2)
