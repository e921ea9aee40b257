"""Error taxonomy — every failure carries a discriminated kind."""

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_COORDINATE = "InvalidCoordinate"
    INVALID_DATE = "InvalidDate"
    INVALID_TIMEZONE = "InvalidTimezone"
    UNKNOWN_METHOD = "UnknownMethod"
    NO_VALID_SOLUTION = "NoValidSolution"
    UNDEFINED_BEARING = "UndefinedBearing"

    @property
    def is_input_error(self) -> bool:
        """True for errors caused by the caller's input (HTTP 400 class)."""
        return self in (
            ErrorKind.INVALID_COORDINATE,
            ErrorKind.INVALID_DATE,
            ErrorKind.INVALID_TIMEZONE,
            ErrorKind.UNKNOWN_METHOD,
        )


class PrayerTimeError(Exception):
    """Base class for classified engine failures."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidCoordinate(PrayerTimeError):
    """Latitude/longitude outside the valid range."""

    kind = ErrorKind.INVALID_COORDINATE


class InvalidDate(PrayerTimeError):
    """Malformed or impossible Gregorian date."""

    kind = ErrorKind.INVALID_DATE


class InvalidTimezone(PrayerTimeError):
    """Unknown IANA timezone name."""

    kind = ErrorKind.INVALID_TIMEZONE


class UnknownMethod(PrayerTimeError):
    """Calculation method id not in the registry (strict lookup only)."""

    kind = ErrorKind.UNKNOWN_METHOD


class NoValidSolution(PrayerTimeError):
    """The sun never reaches the required altitude on this date and place.

    ``fields`` names every prayer boundary that could not be solved.
    """

    kind = ErrorKind.NO_VALID_SOLUTION

    def __init__(self, message: str, fields: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.fields = fields


class UndefinedBearing(PrayerTimeError):
    """Qibla bearing requested at the reference point itself."""

    kind = ErrorKind.UNDEFINED_BEARING
