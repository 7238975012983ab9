"""detour.saved: saved detours, their local store and the browsing CLI."""

from detour.saved.rows import DetourRow
from detour.saved.settings import SettingsManager
from detour.saved.store import DetourStore, StorageError
from detour.saved.types import (
    DETOUR_STATUSES,
    POI,
    DetourStatus,
    Location,
    SavedDetour,
    detour_from_dict,
    detour_to_dict,
)

__all__ = [
    "DETOUR_STATUSES",
    "DetourRow",
    "DetourStatus",
    "DetourStore",
    "Location",
    "POI",
    "SavedDetour",
    "SettingsManager",
    "StorageError",
    "detour_from_dict",
    "detour_to_dict",
]
