"""Solar astronomy layer — Julian Day, low-order solar position, hour-angle solver.

The solar model is the classic low-precision almanac approximation: good to
roughly one minute of time for prayer boundaries, not ephemeris grade.
"""

import math

from salahtimes.errors import NoValidSolution
from salahtimes.models import CalendarDate, SolarPosition, validate_date

J2000_JD = 2451545.0  # 2000-01-01 12:00 UT
OBLIQUITY_DEG = 23.439  # Mean obliquity of the ecliptic, fixed


def to_julian_day(date: CalendarDate) -> float:
    """Julian Day of a Gregorian date at 12:00 UT.

    January and February are treated as months 13 and 14 of the previous
    year so that the leap day falls at the end of the counting year.

    Args:
        date: Gregorian calendar date (year >= 1).

    Returns:
        Julian Day as a float (2000-01-01 -> 2451545.0).

    Raises:
        InvalidDate: If month/day do not exist in that year.
    """
    validate_date(date)
    a = (14 - date.month) // 12
    y = date.year - a
    m = date.month + 12 * a - 3
    jdn = (
        date.day
        + (153 * m + 2) // 5
        + 365 * y
        + y // 4
        - y // 100
        + y // 400
        + 1721119
    )
    return float(jdn)


def solar_position(julian_day: float) -> SolarPosition:
    """Sun declination and equation of time for a Julian Day.

    Args:
        julian_day: Julian Day (see ``to_julian_day``).

    Returns:
        SolarPosition with declination in radians and equation of time in minutes.
    """
    n = julian_day - J2000_JD
    mean_lng = (280.460 + 0.9856474 * n) % 360
    g = math.radians((357.528 + 0.9856003 * n) % 360)
    ecl_lng = math.radians(mean_lng + 1.915 * math.sin(g) + 0.020 * math.sin(2 * g))
    eps = math.radians(OBLIQUITY_DEG)

    declination = math.asin(math.sin(ecl_lng) * math.sin(eps))

    right_ascension_deg = math.degrees(math.atan2(math.tan(ecl_lng), math.cos(eps)))
    # atan2(tan, cos) only fixes RA modulo 180 deg; E is a few degrees at most
    diff_deg = (mean_lng - 0.0057183 - right_ascension_deg + 90.0) % 180.0 - 90.0
    return SolarPosition(
        declination_rad=declination,
        equation_of_time_minutes=4.0 * diff_deg,
    )


def hour_angle(latitude: float, declination: float, altitude_deg: float) -> float:
    """Hour angle at which the sun reaches a given altitude.

    Args:
        latitude: Observer latitude in degrees.
        declination: Solar declination in radians.
        altitude_deg: Signed sun altitude in degrees (negative below the horizon).

    Returns:
        Hour angle in degrees, 0..180.

    Raises:
        NoValidSolution: If the sun never reaches that altitude on this day
            (polar day/night, or twilight angles at high latitude).
    """
    lat = math.radians(latitude)
    denom = math.cos(lat) * math.cos(declination)
    if denom == 0.0:
        raise NoValidSolution(
            f"Sun altitude is constant at latitude {latitude}; "
            f"no hour angle for altitude {altitude_deg}"
        )
    cos_ha = (
        math.sin(math.radians(altitude_deg)) - math.sin(lat) * math.sin(declination)
    ) / denom
    if not -1.0 <= cos_ha <= 1.0:
        raise NoValidSolution(
            f"Sun does not reach altitude {altitude_deg:.3f} deg "
            f"at latitude {latitude} (cos H = {cos_ha:.4f})"
        )
    return math.degrees(math.acos(cos_ha))


def asr_altitude(latitude: float, declination: float, shadow_factor: float) -> float:
    """Sun altitude (degrees) at which a shadow is ``shadow_factor`` lengths
    longer than the noon shadow.

    Raises:
        NoValidSolution: If the sun stays below the horizon at noon.
    """
    zenith_noon = abs(math.radians(latitude) - declination)
    if zenith_noon >= math.pi / 2:
        raise NoValidSolution(
            f"Sun does not rise at noon at latitude {latitude}; Asr is undefined"
        )
    return math.degrees(math.atan(1.0 / (shadow_factor + math.tan(zenith_noon))))

