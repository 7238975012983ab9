from typing import Callable

import pytest

from detour.saved.types import POI, Location, SavedDetour


@pytest.fixture
def make_detour() -> Callable[..., SavedDetour]:
    """Factory for saved detours with sensible defaults."""

    def _make(detour_id: str = "d1", name: str = "Coffee detour", **overrides) -> SavedDetour:
        fields = {
            "id": detour_id,
            "name": name,
            "interest": "cafe",
            "start_location": Location(52.52, 13.405),
            "end_location": Location(52.51, 13.39),
            "poi": POI(name="Bonanza Coffee", location=Location(52.53, 13.41), extra={"rating": 4.7}),
            "encoded_polyline": "_p~iF~ps|U_ulLnnqC",
            "created_at": "2025-05-01T09:30:00+00:00",
        }
        fields.update(overrides)
        return SavedDetour(**fields)

    return _make
