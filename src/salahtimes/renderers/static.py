"""Matplotlib static PNG renderer — the sun's altitude over the day."""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from salahtimes.astronomy import solar_position, to_julian_day
from salahtimes.compute import solar_to_zone_hours
from salahtimes.models import PrayerTimeSet

_ROOT = Path(__file__).parent.parent.parent.parent

_BG = "#050a1a"
_CURVE_COLOR = "#f5c542"
_MARK_COLOR = "#7ec8e3"


def altitude_curve(
    result: PrayerTimeSet, samples: int = 289
) -> tuple[np.ndarray, np.ndarray]:
    """Sun altitude sampled across the result's clock day.

    Args:
        result: Computed schedule; its date, coordinate and timezone fix the axis.
        samples: Number of samples over 00:00..24:00 (default every 5 minutes).

    Returns:
        (clock hours, altitude in degrees) arrays.
    """
    pos = solar_position(to_julian_day(result.date))
    noon_solar = 12.0 - pos.equation_of_time_minutes / 60.0
    shift = 0.0
    if result.timezone is not None:
        shift = (
            solar_to_zone_hours(noon_solar, result.coordinate, result.date, result.timezone)
            - noon_solar
        )

    clock_hours = np.linspace(0.0, 24.0, samples)
    ha = np.radians((clock_hours - shift - noon_solar) * 15.0)
    lat = np.radians(result.coordinate.latitude)
    dec = pos.declination_rad
    sin_alt = np.sin(lat) * np.sin(dec) + np.cos(lat) * np.cos(dec) * np.cos(ha)
    return clock_hours, np.degrees(np.arcsin(np.clip(sin_alt, -1.0, 1.0)))


def render_day_chart(result: PrayerTimeSet, chart_size: int = 10) -> Figure:
    """Render the sun's altitude curve with each prayer boundary marked.

    Args:
        result: Fully computed prayer schedule.
        chart_size: Output image width in inches.

    Returns:
        matplotlib Figure object.
    """
    hours, altitude = altitude_curve(result)

    fig, ax = plt.subplots(figsize=(chart_size, chart_size / 2))
    fig.patch.set_facecolor(_BG)
    ax.set_facecolor(_BG)

    ax.axhline(0.0, color="white", linewidth=0.5, alpha=0.4)
    ax.plot(hours, altitude, color=_CURVE_COLOR, linewidth=1.5)

    for name, at in result.items():
        x = at.minutes_of_day / 60.0
        ax.axvline(x, color=_MARK_COLOR, linewidth=0.8, alpha=0.6)
        ax.text(
            x, ax.get_ylim()[1], f"{name.capitalize()}\n{at}",
            color=_MARK_COLOR, fontsize=8, ha="center", va="top",
        )

    ax.set_xlim(0, 24)
    ax.set_xticks(range(0, 25, 3))
    ax.set_xlabel(result.timezone or "local solar time", color="white")
    ax.set_ylabel("sun altitude (deg)", color="white")
    ax.tick_params(colors="white")
    ax.set_title(
        f"{result.date.isoformat()}  {result.method.name}", color="white", fontsize=10
    )

    return fig


def save_day_chart(result: PrayerTimeSet, output_path: Path | None = None) -> Path:
    """Save the day chart as a PNG file.

    Args:
        result: Fully computed prayer schedule.
        output_path: Destination path. Auto-generated under results/ if None.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        coord = result.coordinate
        filename = (
            f"{coord.latitude:.2f}_{coord.longitude:.2f}__{result.date.isoformat()}.png"
        ).replace("-", "_")
        output_path = _ROOT / "results" / filename

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_day_chart(result)
    fig.savefig(output_path, facecolor=_BG)
    plt.close(fig)
    return output_path
