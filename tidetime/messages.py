"""Chat message formatting for tide reports (Telegram Markdown)."""

import re
from typing import Optional

from tidetime.types import Coordinates, TideCategory, TideReport, TrendStatus

WELCOME_MESSAGE = (
    "Welcome! 🌊\n"
    "I can tell you the tide times.\n\n"
    'Please send me a city name (e.g., "New York") or use /location <city> '
    "to test geocoding."
)

LOCATION_USAGE = "Please provide a city name. Usage: /location <city>"

SEPARATOR = "──────────────────"

# Display labels for Open-Meteo wind speed units
WIND_UNIT_LABELS = {"ms": "m/s", "kmh": "km/h", "mph": "mph", "kn": "kn"}

# Characters with meaning in Telegram's legacy Markdown
_MARKDOWN_SPECIAL = re.compile(r"([_*`\[])")

_STATUS_LINES = {
    TrendStatus.RISING: ("📈", "Rising"),
    TrendStatus.FALLING: ("📉", "Falling"),
    TrendStatus.UNKNOWN: ("🤷", "Unknown"),
}


def escape_markdown(text: str) -> str:
    """Escape Telegram Markdown control characters in free text.

    Escapes only work outside an entity, so escaped text must not be wrapped in
    *bold* or _italic_ markers.
    """
    return _MARKDOWN_SPECIAL.sub(r"\\\1", text)


def format_time(local_time: str) -> str:
    """Return the HH:MM part of a "YYYY-MM-DDTHH:MM" wall-clock string."""
    _, sep, clock = local_time.partition("T")
    return clock if sep else local_time


def _format_value(value: Optional[float], unit: str) -> str:
    return "N/A" if value is None else f"{value} {unit}"


def format_location(coordinates: Coordinates) -> str:
    return (
        f"Found: {coordinates.display_name}\n"
        f"Latitude: {coordinates.latitude}\n"
        f"Longitude: {coordinates.longitude}"
    )


def format_schedule(report: TideReport) -> str:
    """Today's highs and lows merged into one time-ordered list."""
    entries = [(t, TideCategory.HIGH) for t in report.high_tides] + [
        (t, TideCategory.LOW) for t in report.low_tides
    ]
    lines = []
    for time, category in sorted(entries, key=lambda entry: entry[0]):
        if category == TideCategory.HIGH:
            lines.append(f"• *{format_time(time)}*  🌊  High")
        else:
            lines.append(f"• *{format_time(time)}*  🏖️  Low")
    return "\n".join(lines)


def format_tide_report(
    report: TideReport, display_name: str, wind_speed_unit: str = "ms"
) -> str:
    """Render a TideReport as a Markdown chat message."""
    status_icon, status_text = _STATUS_LINES[report.status]

    if report.next_tide is None:
        next_tide = "_Unknown_"
    elif report.next_tide.type == TideCategory.HIGH:
        next_tide = f"*High 🌊* at *{format_time(report.next_tide.time)}*"
    else:
        next_tide = f"*Low 🏖️* at *{format_time(report.next_tide.time)}*"

    summary = report.daily
    wind_unit = WIND_UNIT_LABELS.get(wind_speed_unit, wind_speed_unit)
    sunrise = format_time(summary.sunrise) if summary.sunrise else "--:--"
    sunset = format_time(summary.sunset) if summary.sunset else "--:--"

    lines = [
        f"🌊 *Tide Forecast*  |  {escape_markdown(display_name)}",
        "",
        f"{status_icon} *Status:* {status_text}",
        f"🔜 *Next:* {next_tide}",
        "",
        f"🏄 *Max Waves:* {_format_value(summary.max_wave_height, 'm')}",
        f"💨 *Max Wind:* {_format_value(summary.max_wind_speed, wind_unit)}",
        f"☀️ *Sun:* 🌅 {sunrise}  |  🌇 {sunset}",
        "",
        SEPARATOR,
        "📅 *Today's Schedule*",
        SEPARATOR,
        format_schedule(report) or "_No more tides today_",
        SEPARATOR,
        f"🌍 {escape_markdown(report.timezone)}",
    ]
    return "\n".join(lines)
