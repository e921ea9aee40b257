"""Prayer-time computation layer — assembles the daily schedule and applies the timezone."""

import logging
import os
from datetime import datetime, timedelta

from pytz import UnknownTimeZoneError, timezone, utc
from timezonefinder import TimezoneFinder

from salahtimes.astronomy import (
    asr_altitude,
    hour_angle,
    solar_position,
    to_julian_day,
)
from salahtimes.errors import InvalidCoordinate, InvalidTimezone, NoValidSolution
from salahtimes.methods import resolve_method
from salahtimes.models import (
    PRAYER_NAMES,
    CalculationMethod,
    CalendarDate,
    ClockTime,
    GeoCoordinate,
    PrayerQuery,
    PrayerTimeSet,
    validate_coordinate,
    validate_date,
)
from salahtimes.qibla import qibla_bearing

logger = logging.getLogger(__name__)

SUNRISE_ALTITUDE_DEG = -0.833  # Refraction + solar semi-diameter

_tf = TimezoneFinder()

# Offset lookups are clamped inside datetime's range; zones only carry
# their fixed LMT offset that far out.
_EARLIEST_LOOKUP = datetime(1, 1, 2, tzinfo=utc)
_LATEST_LOOKUP = datetime(9999, 12, 29, tzinfo=utc)


def compute_prayer_hours(
    coord: GeoCoordinate, date: CalendarDate, method: CalculationMethod
) -> dict[str, float]:
    """Compute the six prayer boundaries as fractional hours of local solar time.

    Every boundary is attempted; if any has no solution the whole computation
    fails, naming all failed fields.

    Args:
        coord: Validated observer position.
        date: Validated calendar date.
        method: Calculation convention.

    Returns:
        Mapping of prayer name to fractional hours (may fall outside 0..24).

    Raises:
        NoValidSolution: If one or more boundaries cannot be solved.
    """
    pos = solar_position(to_julian_day(date))
    lat = coord.latitude
    dec = pos.declination_rad

    dhuhr = 12.0 - pos.equation_of_time_minutes / 60.0
    hours: dict[str, float] = {"dhuhr": dhuhr}
    failures: dict[str, str] = {}

    try:
        ha = hour_angle(lat, dec, SUNRISE_ALTITUDE_DEG) / 15.0
        hours["sunrise"] = dhuhr - ha
        hours["maghrib"] = dhuhr + ha
    except NoValidSolution as e:
        failures["sunrise"] = failures["maghrib"] = e.message

    try:
        hours["fajr"] = dhuhr - hour_angle(lat, dec, -method.fajr_angle_deg) / 15.0
    except NoValidSolution as e:
        failures["fajr"] = e.message

    if method.isha_angle_deg is not None:
        try:
            hours["isha"] = dhuhr + hour_angle(lat, dec, -method.isha_angle_deg) / 15.0
        except NoValidSolution as e:
            failures["isha"] = e.message
    elif "maghrib" in hours:
        hours["isha"] = hours["maghrib"] + method.isha_offset_minutes / 60.0
    else:
        failures["isha"] = "Isha is a fixed offset from Maghrib, which has no solution"

    try:
        altitude = asr_altitude(lat, dec, method.asr_shadow_factor)
        hours["asr"] = dhuhr + hour_angle(lat, dec, altitude) / 15.0
    except NoValidSolution as e:
        failures["asr"] = e.message

    if failures:
        fields = tuple(name for name in PRAYER_NAMES if name in failures)
        detail = "; ".join(f"{name}: {failures[name]}" for name in fields)
        raise NoValidSolution(
            f"No valid solution for {', '.join(fields)} at "
            f"lat={lat}, lng={coord.longitude} on {date.isoformat()} ({detail})",
            fields=fields,
        )
    return hours


def solar_to_zone_hours(
    solar_hours: float, coord: GeoCoordinate, date: CalendarDate, tz_name: str
) -> float:
    """Shift a local-solar-time value into an IANA timezone's clock.

    The UTC offset is taken at the event's own instant, so DST transitions
    during the day are honoured.

    Raises:
        InvalidTimezone: If ``tz_name`` is not a known zone.
    """
    tz = _load_timezone(tz_name)
    utc_hours = solar_hours - coord.longitude / 15.0
    midnight = datetime(date.year, date.month, date.day, tzinfo=utc)
    midnight = min(max(midnight, _EARLIEST_LOOKUP), _LATEST_LOOKUP)
    instant = midnight + timedelta(hours=utc_hours)
    offset = instant.astimezone(tz).utcoffset() or timedelta(0)
    return utc_hours + offset.total_seconds() / 3600.0


def _load_timezone(tz_name: str):
    try:
        return timezone(tz_name)
    except UnknownTimeZoneError:
        raise InvalidTimezone(f"Unknown timezone: {tz_name}") from None


def compute_prayer_times(
    coord: GeoCoordinate,
    date: CalendarDate,
    method_id: int | None = None,
    tz: str | None = None,
) -> PrayerTimeSet:
    """Compute the daily prayer schedule and Qibla bearing.

    Args:
        coord: Observer position.
        date: Gregorian date.
        method_id: Registry id; unknown ids fall back to the default and are
            flagged on the result.
        tz: IANA timezone for the clock values. None = local solar time.

    Returns:
        PrayerTimeSet with all six times resolved.

    Raises:
        InvalidCoordinate, InvalidDate, InvalidTimezone: Rejected input.
        NoValidSolution: A boundary has no solution on this date and place.
        UndefinedBearing: The observer stands on the Kaaba.
    """
    validate_coordinate(coord)
    validate_date(date)
    if tz is not None:
        _load_timezone(tz)
    resolution = resolve_method(method_id)
    method = resolution.method

    hours = compute_prayer_hours(coord, date, method)
    if tz is not None:
        hours = {
            name: solar_to_zone_hours(value, coord, date, tz)
            for name, value in hours.items()
        }
    clock = {name: ClockTime.from_hours(value) for name, value in hours.items()}

    return PrayerTimeSet(
        fajr=clock["fajr"],
        sunrise=clock["sunrise"],
        dhuhr=clock["dhuhr"],
        asr=clock["asr"],
        maghrib=clock["maghrib"],
        isha=clock["isha"],
        qibla_bearing_deg=qibla_bearing(coord),
        method=method,
        date=date,
        coordinate=coord,
        timezone=tz,
        method_fell_back=resolution.fell_back,
    )


def next_prayer(times: PrayerTimeSet, now: ClockTime) -> tuple[str, ClockTime, int]:
    """The first of the five daily prayers strictly after ``now``.

    After Isha the next prayer is tomorrow's Fajr, approximated by today's.

    Returns:
        (prayer name, its clock time, whole minutes until it starts).
    """
    for name in ("fajr", "dhuhr", "asr", "maghrib", "isha"):
        at: ClockTime = getattr(times, name)
        if at.minutes_of_day > now.minutes_of_day:
            return name, at, at.minutes_of_day - now.minutes_of_day
    return "fajr", times.fajr, times.fajr.minutes_of_day + 24 * 60 - now.minutes_of_day


def resolve_timezone(coord: GeoCoordinate, requested: str | None = None) -> str | None:
    """Pick the IANA timezone for a request.

    Order: explicit request, ``SALAHTIMES_TIMEZONE``, then the zone containing
    the coordinate. Returns None (local solar time) if nothing matches.
    """
    tz_name = requested or os.environ.get("SALAHTIMES_TIMEZONE")
    if tz_name:
        _load_timezone(tz_name)
        return tz_name
    tz_name = _tf.timezone_at(lat=coord.latitude, lng=coord.longitude)
    if tz_name is None:
        logger.warning(
            "Timezone not found: lat=%s, lng=%s; using local solar time",
            coord.latitude,
            coord.longitude,
        )
        return None
    logger.debug(
        "Resolved timezone %s for lat=%s, lng=%s",
        tz_name,
        coord.latitude,
        coord.longitude,
    )
    return tz_name


def _default_method_id() -> int | None:
    raw = os.environ.get("SALAHTIMES_METHOD_ID")
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer SALAHTIMES_METHOD_ID=%r", raw)
        return None


def run(query: PrayerQuery) -> PrayerTimeSet:
    """Top-level entry point: takes a PrayerQuery and returns a PrayerTimeSet.

    Clock values are always in the resolved timezone (see ``resolve_timezone``);
    a missing date means today in that timezone.

    Args:
        query: Caller input (coordinate, optional date/method/timezone).

    Returns:
        Fully computed PrayerTimeSet.
    """
    try:
        coord = GeoCoordinate(float(query.latitude), float(query.longitude))
    except (TypeError, ValueError):
        raise InvalidCoordinate(
            f"Latitude and longitude are required numbers: "
            f"lat={query.latitude!r}, lng={query.longitude!r}"
        ) from None
    validate_coordinate(coord)

    tz_name = resolve_timezone(coord, query.timezone)
    if query.date:
        date = CalendarDate.from_iso(query.date)
    else:
        today = datetime.now(_load_timezone(tz_name) if tz_name else utc).date()
        date = CalendarDate(today.year, today.month, today.day)

    method_id = query.method_id if query.method_id is not None else _default_method_id()
    result = compute_prayer_times(coord, date, method_id, tz=tz_name)
    logger.info(
        "Prayer times calculated for lat=%s, lng=%s on %s using %s",
        coord.latitude,
        coord.longitude,
        date.isoformat(),
        result.method.name,
    )
    return result
