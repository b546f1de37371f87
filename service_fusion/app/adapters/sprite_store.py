"""
Filesystem store for pre-rendered fusion sprites.
"""

from pathlib import Path
from typing import Union

import anyio

from shared.logging import get_logger
from shared.errors import NotFoundError


class FusionSpriteStore:
    """Resolves ``{head}.{body}.png`` files under a fixed assets directory."""

    media_type = "image/png"

    def __init__(self, assets_dir: Union[str, Path]):
        self.assets_dir = Path(assets_dir)
        self.logger = get_logger("fusion.sprite_store")

    @staticmethod
    def file_name(head_id: int, body_id: int) -> str:
        return f"{head_id}.{body_id}.png"

    async def resolve(self, head_id: int, body_id: int) -> Path:
        """Return the sprite path for the pair or raise ``NotFoundError``."""
        file_name = self.file_name(head_id, body_id)
        path = self.assets_dir / file_name
        # stat runs in a worker thread so the event loop keeps serving requests
        if not await anyio.to_thread.run_sync(path.is_file):
            self.logger.info("Fusion sprite not found", path=str(path))
            raise NotFoundError(
                f"File not found: {path}",
                details={"file_name": file_name}
            )
        return path
