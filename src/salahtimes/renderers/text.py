"""Plain-text timetable renderer."""

from salahtimes.models import PrayerTimeSet
from salahtimes.qibla import compass_point


def render_table(result: PrayerTimeSet) -> str:
    """Render a PrayerTimeSet as an aligned plain-text table.

    Args:
        result: Fully computed prayer schedule.

    Returns:
        Multi-line string, no trailing newline.
    """
    coord = result.coordinate
    clock = result.timezone or "local solar time"
    lines = [
        f"Prayer times for {result.date.isoformat()} "
        f"({coord.latitude:.4f}, {coord.longitude:.4f})",
        f"Method: {result.method.name} [{result.method.id}]",
    ]
    if result.method_fell_back:
        lines.append("  (requested method unknown; default used)")
    lines.append(f"Clock: {clock}")
    lines.append("")
    for name, at in result.items():
        lines.append(f"  {name.capitalize():<8} {at}")
    lines.append("")
    bearing = result.qibla_bearing_deg
    lines.append(f"Qibla: {bearing:.2f}° {compass_point(bearing)}")
    return "\n".join(lines)
