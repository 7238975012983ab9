"""DetourStore: saved detours persisted as a JSON list in a local file."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path

from detour.saved.types import (
    SavedDetour,
    detour_from_dict,
    detour_to_dict,
    validate_status,
)

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Reading or writing the saved detour file failed."""


class DetourStore:
    """Saved detours, newest first.

    Mutations are serialized with an ``asyncio.Lock`` so the list handed to a
    renderer is never rewritten underneath it by a concurrent save.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    # ── Public API ───────────────────────────────────────────────────

    async def save_detour(self, detour: SavedDetour) -> SavedDetour:
        async with self._lock:
            detours = self._read()
            detours.insert(0, detour)
            self._write(detours)
        logger.info("Saved detour %s", detour.id)
        return detour

    async def list_detours(self) -> list[SavedDetour]:
        try:
            return self._read()
        except StorageError:
            logger.exception("Failed to list saved detours from %s", self._path)
            return []

    async def get_detour(self, detour_id: str) -> SavedDetour | None:
        for detour in await self.list_detours():
            if detour.id == detour_id:
                return detour
        return None

    async def remove_detour(self, detour_id: str) -> list[SavedDetour]:
        async with self._lock:
            detours = self._read()
            remaining = [d for d in detours if d.id != detour_id]
            self._write(remaining)
        if len(remaining) == len(detours):
            logger.debug("No saved detour %s to remove", detour_id)
        return remaining

    async def update_status(
        self, detour_id: str, status: str
    ) -> SavedDetour | None:
        new_status = validate_status(status)
        async with self._lock:
            detours = self._read()
            for detour in detours:
                if detour.id == detour_id:
                    detour.status = new_status
                    self._write(detours)
                    return detour
        return None

    async def clear_all(self) -> None:
        async with self._lock:
            try:
                self._path.unlink(missing_ok=True)
            except OSError as exc:
                raise StorageError(f"Failed to clear detours: {exc}") from exc

    # ── Private ──────────────────────────────────────────────────────

    def _read(self) -> list[SavedDetour]:
        if not self._path.exists():
            return []
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            if not isinstance(raw, list):
                raise ValueError("expected a JSON array")
            return [detour_from_dict(d) for d in raw]
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise StorageError(f"Failed to read {self._path}: {exc}") from exc

    def _write(self, detours: list[SavedDetour]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps([detour_to_dict(d) for d in detours], indent=2, ensure_ascii=False) + "\n",
                encoding="utf-8",
            )
        except OSError as exc:
            raise StorageError(f"Failed to write {self._path}: {exc}") from exc
