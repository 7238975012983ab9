"""Saved detour records and their JSON form."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal, get_args

DetourStatus = Literal["planned", "completed"]

DETOUR_STATUSES: tuple[str, ...] = get_args(DetourStatus)


@dataclass
class Location:
    latitude: float
    longitude: float


@dataclass
class POI:
    name: str
    location: Location
    extra: dict[str, Any] = field(default_factory=dict)  # place fields kept verbatim


@dataclass
class SavedDetour:
    id: str
    name: str
    interest: str
    start_location: Location
    end_location: Location
    poi: POI
    encoded_polyline: str
    status: DetourStatus = "planned"
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )


def validate_status(status: str) -> DetourStatus:
    if status not in DETOUR_STATUSES:
        raise ValueError(
            f"Invalid detour status {status!r}, expected one of {', '.join(DETOUR_STATUSES)}"
        )
    return status  # type: ignore[return-value]


def location_from_dict(data: dict) -> Location:
    return Location(latitude=float(data["latitude"]), longitude=float(data["longitude"]))


def location_to_dict(location: Location) -> dict:
    return {"latitude": location.latitude, "longitude": location.longitude}


def poi_from_dict(data: dict) -> POI:
    extra = {k: v for k, v in data.items() if k not in ("name", "location")}
    return POI(name=data["name"], location=location_from_dict(data["location"]), extra=extra)


def poi_to_dict(poi: POI) -> dict:
    return {**poi.extra, "name": poi.name, "location": location_to_dict(poi.location)}


def detour_from_dict(data: dict) -> SavedDetour:
    """Deserialize a SavedDetour from a JSON-compatible dict."""
    return SavedDetour(
        id=data["id"],
        name=data["name"],
        created_at=data["createdAt"],
        status=validate_status(data.get("status", "planned")),
        interest=data.get("interest", ""),
        start_location=location_from_dict(data["startLocation"]),
        end_location=location_from_dict(data["endLocation"]),
        poi=poi_from_dict(data["poi"]),
        encoded_polyline=data.get("encodedPolyline", ""),
    )


def detour_to_dict(detour: SavedDetour) -> dict:
    """Serialize a SavedDetour to a JSON-compatible dict."""
    return {
        "id": detour.id,
        "name": detour.name,
        "createdAt": detour.created_at,
        "status": detour.status,
        "interest": detour.interest,
        "startLocation": location_to_dict(detour.start_location),
        "endLocation": location_to_dict(detour.end_location),
        "poi": poi_to_dict(detour.poi),
        "encodedPolyline": detour.encoded_polyline,
    }
