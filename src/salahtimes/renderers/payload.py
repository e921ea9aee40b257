"""JSON-ready payloads — the wire shape handed to collaborators."""

from typing import Any

from salahtimes.errors import NoValidSolution, PrayerTimeError
from salahtimes.models import PrayerTimeSet


def to_payload(result: PrayerTimeSet) -> dict[str, Any]:
    """Serialize a PrayerTimeSet.

    Times are "HH:MM" strings, the Qibla bearing is rounded to two decimals.
    """
    payload: dict[str, Any] = {name: str(at) for name, at in result.items()}
    payload.update(
        {
            "qibla": round(result.qibla_bearing_deg, 2),
            "date": result.date.isoformat(),
            "timezone": result.timezone,
            "location": {
                "latitude": result.coordinate.latitude,
                "longitude": result.coordinate.longitude,
            },
            "calculationMethod": {
                "id": result.method.id,
                "name": result.method.name,
            },
            "methodFallback": result.method_fell_back,
        }
    )
    return payload


def success_payload(result: PrayerTimeSet) -> dict[str, Any]:
    return {"success": True, "data": to_payload(result)}


def error_payload(error: PrayerTimeError) -> dict[str, Any]:
    """Structured failure: kind + human-readable message (+ failed fields)."""
    body: dict[str, Any] = {"kind": error.kind.value, "message": error.message}
    if isinstance(error, NoValidSolution):
        body["fields"] = list(error.fields)
    return {"success": False, "error": body}
