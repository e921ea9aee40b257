"""Calculation method registry — a closed catalog of regional conventions."""

import logging
from enum import Enum

from salahtimes.errors import UnknownMethod
from salahtimes.models import CalculationMethod, MethodResolution

logger = logging.getLogger(__name__)

DEFAULT_METHOD_ID = 1


class Method(Enum):
    """Every registered convention. Ids follow the widely used numbering
    (6 is intentionally unassigned)."""

    UMM_AL_QURA = CalculationMethod(
        id=1, name="Umm al-Qura University", fajr_angle_deg=18.5, isha_offset_minutes=90
    )
    ISNA = CalculationMethod(
        id=2,
        name="Islamic Society of North America",
        fajr_angle_deg=15,
        isha_angle_deg=15,
    )
    MUSLIM_WORLD_LEAGUE = CalculationMethod(
        id=3, name="Muslim World League", fajr_angle_deg=18, isha_angle_deg=17
    )
    EGYPT = CalculationMethod(
        id=4, name="Egyptian General Authority", fajr_angle_deg=19.5, isha_angle_deg=17.5
    )
    KARACHI = CalculationMethod(
        id=5,
        name="University of Islamic Sciences, Karachi",
        fajr_angle_deg=18,
        isha_angle_deg=18,
    )
    TEHRAN = CalculationMethod(
        id=7,
        name="Institute of Geophysics, University of Tehran",
        fajr_angle_deg=17.7,
        isha_angle_deg=14,
    )
    GULF = CalculationMethod(
        id=8, name="Gulf Region", fajr_angle_deg=19.5, isha_offset_minutes=90
    )
    KUWAIT = CalculationMethod(id=9, name="Kuwait", fajr_angle_deg=18, isha_angle_deg=17.5)
    QATAR = CalculationMethod(
        id=10, name="Qatar", fajr_angle_deg=18, isha_offset_minutes=90
    )
    SINGAPORE = CalculationMethod(
        id=11, name="Majlis Ugama Islam Singapura", fajr_angle_deg=20, isha_angle_deg=18
    )
    FRANCE = CalculationMethod(
        id=12,
        name="Union Organization islamic de France",
        fajr_angle_deg=12,
        isha_angle_deg=12,
    )
    TURKEY = CalculationMethod(
        id=13,
        name="Diyanet İşleri Başkanlığı, Turkey",
        fajr_angle_deg=18,
        isha_angle_deg=17,
    )
    RUSSIA = CalculationMethod(
        id=14,
        name="Spiritual Administration of Muslims of Russia",
        fajr_angle_deg=16,
        isha_angle_deg=15,
    )
    KARACHI_HANAFI = CalculationMethod(
        id=15,
        name="University of Islamic Sciences, Karachi (Hanafi Asr)",
        fajr_angle_deg=18,
        isha_angle_deg=18,
        asr_shadow_factor=2,
    )


_BY_ID: dict[int, CalculationMethod] = {m.value.id: m.value for m in Method}


def get_method(method_id: int) -> CalculationMethod:
    """Strict lookup. Raises UnknownMethod for an unregistered id."""
    try:
        return _BY_ID[method_id]
    except KeyError:
        raise UnknownMethod(f"No calculation method with id {method_id}") from None


def resolve_method(method_id: int | None) -> MethodResolution:
    """Look up a method, falling back to the default for unknown ids.

    The fallback is reported through ``MethodResolution.fell_back`` so the
    caller can surface it; it is never silent.

    Args:
        method_id: Registry id, or None for the default.

    Returns:
        MethodResolution with the method actually used.
    """
    if method_id is None:
        return MethodResolution(
            method=_BY_ID[DEFAULT_METHOD_ID],
            requested_id=DEFAULT_METHOD_ID,
            fell_back=False,
        )
    method = _BY_ID.get(method_id)
    if method is not None:
        return MethodResolution(method=method, requested_id=method_id, fell_back=False)
    fallback = _BY_ID[DEFAULT_METHOD_ID]
    logger.warning(
        "Unknown calculation method %r; falling back to %d (%s)",
        method_id,
        fallback.id,
        fallback.name,
    )
    return MethodResolution(method=fallback, requested_id=method_id, fell_back=True)


def list_methods() -> tuple[CalculationMethod, ...]:
    """All registered methods ordered by id."""
    return tuple(sorted(_BY_ID.values(), key=lambda m: m.id))
