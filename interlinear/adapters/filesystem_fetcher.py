# interlinear/adapters/filesystem_fetcher.py
import asyncio
import json
from pathlib import Path
from typing import Any

import structlog

from interlinear.core.domain.exceptions import MalformedResourceError, ResourceUnavailableError

logger = structlog.get_logger()


class FileSystemResourceFetcher:
    """
    Driven Adapter: Reads the static JSON documents from a local directory
    laid out like the web root (e.g. public/bible/kjv/Jhn.json).
    """

    def __init__(self, root: str):
        self.root = Path(root).resolve()

    def _resolve(self, path: str) -> Path:
        target = (self.root / path.lstrip("/")).resolve()
        if not target.is_relative_to(self.root):
            raise ResourceUnavailableError(path, "path escapes the resource directory")
        return target

    def _read(self, target: Path) -> bytes:
        return target.read_bytes()

    async def fetch_json(self, path: str) -> Any:
        target = self._resolve(path)
        try:
            raw = await asyncio.to_thread(self._read, target)
        except OSError as e:
            logger.warning("resource_read_failed", path=path, error=str(e))
            raise ResourceUnavailableError(path, str(e)) from e

        try:
            return json.loads(raw.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise MalformedResourceError(path, f"not UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise MalformedResourceError(path, f"invalid JSON: {e}") from e

    async def close(self) -> None:
        return None
