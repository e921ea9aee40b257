"""Data model definitions — explicit boundaries between input, compute, and render layers."""

import calendar
import math
import re
from dataclasses import dataclass

from salahtimes.errors import InvalidCoordinate, InvalidDate

_ISO_DATE = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)


@dataclass(frozen=True)
class PrayerQuery:
    """Raw caller input. Not yet validated."""

    latitude: float  # Decimal degrees, north positive
    longitude: float  # Decimal degrees, east positive
    date: str | None = None  # "YYYY-MM-DD"; None = today in the resolved timezone
    method_id: int | None = None  # Registry id; None = configured default
    timezone: str | None = None  # IANA name ("Europe/London"); None = from coordinate


@dataclass(frozen=True)
class GeoCoordinate:
    """Observer position on the Earth's surface."""

    latitude: float  # [-90, 90]
    longitude: float  # [-180, 180]


def validate_coordinate(coord: GeoCoordinate) -> GeoCoordinate:
    """Reject coordinates outside the latitude/longitude bounds.

    Raises:
        InvalidCoordinate: If either component is out of range or not finite.
    """
    lat, lng = coord.latitude, coord.longitude
    if not (math.isfinite(lat) and math.isfinite(lng)):
        raise InvalidCoordinate(f"Coordinate must be finite: lat={lat}, lng={lng}")
    if not -90.0 <= lat <= 90.0:
        raise InvalidCoordinate(f"Latitude out of range [-90, 90]: {lat}")
    if not -180.0 <= lng <= 180.0:
        raise InvalidCoordinate(f"Longitude out of range [-180, 180]: {lng}")
    return coord


@dataclass(frozen=True)
class CalendarDate:
    """Gregorian calendar date. Only used to derive a Julian Day."""

    year: int
    month: int  # 1..12
    day: int  # 1..31, bounded by the month length

    @classmethod
    def from_iso(cls, text: str) -> "CalendarDate":
        """Parse a "YYYY-MM-DD" string.

        Raises:
            InvalidDate: If the string is malformed or names an impossible day.
        """
        match = _ISO_DATE.fullmatch(text.strip())
        if match is None:
            raise InvalidDate(f"Expected YYYY-MM-DD, got {text!r}")
        year, month, day = (int(part) for part in match.groups())
        return validate_date(cls(year, month, day))

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


def validate_date(date: CalendarDate) -> CalendarDate:
    """Check month/day against the Gregorian calendar, leap years included.

    Raises:
        InvalidDate: If the date does not exist.
    """
    if not 1 <= date.year <= 9999:
        raise InvalidDate(f"Year out of range [1, 9999]: {date.year}")
    if not 1 <= date.month <= 12:
        raise InvalidDate(f"Month out of range [1, 12]: {date.month}")
    days_in_month = calendar.monthrange(date.year, date.month)[1]
    if not 1 <= date.day <= days_in_month:
        raise InvalidDate(
            f"Day out of range for {date.year:04d}-{date.month:02d}: {date.day}"
        )
    return date


@dataclass(frozen=True)
class CalculationMethod:
    """A named set of twilight angles and Asr shadow factor."""

    id: int
    name: str
    fajr_angle_deg: float  # Sun depression below the horizon at dawn
    isha_angle_deg: float | None = None  # Sun depression at nightfall
    isha_offset_minutes: float | None = None  # Fixed delay after Maghrib
    asr_shadow_factor: float = 1.0  # 1 = standard (Shafi), 2 = Hanafi

    def __post_init__(self) -> None:
        if (self.isha_angle_deg is None) == (self.isha_offset_minutes is None):
            raise ValueError(
                f"Method {self.id}: exactly one of isha_angle_deg / "
                "isha_offset_minutes must be set"
            )
        if self.asr_shadow_factor <= 0:
            raise ValueError(
                f"Method {self.id}: asr_shadow_factor must be > 0, "
                f"got {self.asr_shadow_factor}"
            )


@dataclass(frozen=True)
class MethodResolution:
    """Registry lookup result. ``fell_back`` is True when the id was unknown."""

    method: CalculationMethod
    requested_id: int
    fell_back: bool


@dataclass(frozen=True)
class SolarPosition:
    """Sun position for a Julian Day. Derived, never persisted."""

    declination_rad: float
    equation_of_time_minutes: float  # Apparent minus mean solar time


@dataclass(frozen=True)
class ClockTime:
    """Wall-clock hour and minute."""

    hour: int  # 0..23
    minute: int  # 0..59

    @classmethod
    def from_hours(cls, value: float) -> "ClockTime":
        """Convert fractional hours to a clock time, wrapping into a single day.

        Minutes are rounded to the nearest whole minute; a rounded value of 60
        is carried into the hour.
        """
        whole = math.floor(value)
        minute = round((value - whole) * 60)
        if minute == 60:
            whole += 1
            minute = 0
        return cls(hour=whole % 24, minute=minute)

    @property
    def minutes_of_day(self) -> int:
        return self.hour * 60 + self.minute

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


PRAYER_NAMES: tuple[str, ...] = ("fajr", "sunrise", "dhuhr", "asr", "maghrib", "isha")


@dataclass(frozen=True)
class PrayerTimeSet:
    """The sole input to renderers. Fully computed state."""

    fajr: ClockTime
    sunrise: ClockTime
    dhuhr: ClockTime
    asr: ClockTime
    maghrib: ClockTime
    isha: ClockTime
    qibla_bearing_deg: float  # Clockwise from true north, [0, 360)
    method: CalculationMethod
    date: CalendarDate
    coordinate: GeoCoordinate
    timezone: str | None = None  # None = local solar time
    method_fell_back: bool = False  # Requested method id was unknown

    def items(self) -> tuple[tuple[str, ClockTime], ...]:
        """(name, time) pairs in canonical daily order."""
        return tuple((name, getattr(self, name)) for name in PRAYER_NAMES)
