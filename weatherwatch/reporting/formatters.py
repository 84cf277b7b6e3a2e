"""Output formatters for weather reports."""

import html
import json
from datetime import datetime, tzinfo
from typing import TextIO

from weatherwatch.config.schema import OutputFormat
from weatherwatch.models.weather import WeatherReport

ICON_BASE_URL = "https://openweathermap.org/img/wn"

TEMP_SYMBOLS = {"metric": "°C", "imperial": "°F", "standard": "K"}
WIND_UNITS = {"metric": "m/s", "imperial": "mph", "standard": "m/s"}


def icon_url(code: str, base_url: str = ICON_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/{code}@2x.png"


def format_local_time(timestamp: int | None, tz: tzinfo | None = None) -> str:
    """Format a UNIX timestamp as HH:MM:SS in ``tz`` (system local time if None)."""
    if timestamp is None:
        return "n/a"
    return datetime.fromtimestamp(timestamp, tz=tz).strftime("%H:%M:%S")


def _place(r: WeatherReport) -> str:
    parts = [p for p in (r.city_name, r.country) if p]
    return ", ".join(parts) if parts else "Unknown location"


def _temps(r: WeatherReport) -> str:
    sym = TEMP_SYMBOLS.get(r.units, "°C")
    return (
        f"{_num(r.temperature)}{sym} "
        f"(min: {_num(r.temp_min)}{sym}, max: {_num(r.temp_max)}{sym})"
    )


def _wind(r: WeatherReport) -> str:
    return f"{_num(r.wind_speed)} {WIND_UNITS.get(r.units, 'm/s')}"


def _num(value: float | None) -> str:
    return "n/a" if value is None else f"{value:g}"


def format_report_text(r: WeatherReport, tz: tzinfo | None = None) -> str:
    """Plain text report for the terminal."""
    lines = [
        f"=== {_place(r)} ===",
        (r.description or "n/a").upper(),
        f"Temp: {_temps(r)}",
        f"Wind: {_wind(r)}",
        f"Sunrise: {format_local_time(r.sunrise, tz)}",
        f"Sunset: {format_local_time(r.sunset, tz)}",
    ]
    return "\n".join(lines)


def format_report_html(
    r: WeatherReport,
    tz: tzinfo | None = None,
    icon_base_url: str = ICON_BASE_URL,
) -> str:
    """HTML fragment suitable for dropping into a page container."""
    desc = html.escape(r.description or "")
    lines = [f"<h2>{html.escape(_place(r))}</h2>"]
    if r.icon:
        src = html.escape(icon_url(r.icon, icon_base_url), quote=True)
        lines.append(f'<img src="{src}" alt="{html.escape(desc, quote=True)}" />')
    lines += [
        f"<p><strong>{html.escape((r.description or '').upper())}</strong></p>",
        f"<p>🌡️ Temp: {_temps(r)}</p>",
        f"<p>💨 Wind: {_wind(r)}</p>",
        f"<p>🌅 Sunrise: {format_local_time(r.sunrise, tz)}</p>",
        f"<p>🌇 Sunset: {format_local_time(r.sunset, tz)}</p>",
    ]
    return "\n".join(lines)


def format_report_json(r: WeatherReport, icon_base_url: str = ICON_BASE_URL) -> str:
    """JSON report for programmatic consumption."""
    data = {
        "city_name": r.city_name,
        "country": r.country,
        "temperature": r.temperature,
        "temp_min": r.temp_min,
        "temp_max": r.temp_max,
        "description": r.description,
        "icon": r.icon,
        "icon_url": icon_url(r.icon, icon_base_url) if r.icon else None,
        "wind_speed": r.wind_speed,
        "units": r.units,
        "sunrise": r.sunrise,
        "sunset": r.sunset,
        "fetched_at": r.fetched_at,
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def render(
    report: WeatherReport,
    out: TextIO,
    fmt: OutputFormat | str = OutputFormat.TEXT,
    tz: tzinfo | None = None,
    icon_base_url: str = ICON_BASE_URL,
) -> None:
    """Write a fully formatted report to ``out`` in one call."""
    fmt = OutputFormat(fmt)
    if fmt == OutputFormat.HTML:
        text = format_report_html(report, tz, icon_base_url)
    elif fmt == OutputFormat.JSON:
        text = format_report_json(report, icon_base_url)
    else:
        text = format_report_text(report, tz)
    out.write(text + "\n")
