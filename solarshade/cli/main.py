"""
Solarshade CLI - Solar geometry and roof shading estimates.

Usage:
    solarshade position --lat 55.6 --lon 12.6 --time 2024-06-21T12:00:00 --timezone 2
    solarshade hourly --lat 55.6 --lon 12.6 --date 2024-06-15 --daily-total 5.4
    solarshade tilt --lat 55.6 --month 12
    solarshade shading --lat 55.6 --lon 12.6 --obstacles site.json
    solarshade shading --lat 55.6 --lon 12.6 --location-type urban --json
    solarshade obstacles suburban
"""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..analysis.irradiance import daily_total_kwh, get_hourly_irradiance
from ..analysis.obstacles import estimate_common_obstacles
from ..analysis.shading_solar import analyze_annual_shading
from ..analysis.tilt import get_optimal_tilt, monthly_optimal_tilts
from ..core.models import RoofFootprint, ShadingObstacle
from ..geometry.solar_position import get_solar_position
from ..utils.logging_config import ensure_logging, setup_logging
from ..utils.validation import InvalidInputError

app = typer.Typer(
    name="solarshade",
    help="Solarshade - Sun position, irradiance and roof shading estimates",
    add_completion=False,
)
console = Console()


def print_error(text: str) -> None:
    console.print(f"[red]✗[/red] {text}")


def fail(exc: InvalidInputError) -> None:
    """Report an input error and exit with status 1."""
    print_error(str(exc))
    for suggestion in exc.suggestions:
        console.print(f"  [dim]{suggestion}[/dim]")
    raise typer.Exit(code=1)


def load_obstacles(path: Path) -> List[ShadingObstacle]:
    """
    Load obstacles from a JSON file.

    Accepts a list of obstacle objects or {"obstacles": [...]}.
    """
    with open(path) as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("obstacles", [])
    if not isinstance(data, list):
        raise InvalidInputError(
            f"{path} must contain a list of obstacles",
            field="obstacles",
        )

    obstacles = []
    for index, entry in enumerate(data):
        try:
            obstacles.append(ShadingObstacle.from_dict(entry))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise InvalidInputError(
                f"Obstacle #{index + 1} in {path} is malformed: {e}",
                field="obstacles",
                suggestions=["Each obstacle needs category, height, distance and azimuth"],
            )
    return obstacles


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Also write JSON-lines logs to this file"
    ),
):
    """Solarshade - Sun position, irradiance and roof shading estimates."""
    if verbose or log_file is not None:
        setup_logging("DEBUG" if verbose else None, log_file=log_file)
    else:
        ensure_logging()


@app.command()
def position(
    lat: float = typer.Option(..., "--lat", help="Latitude (degrees, north positive)"),
    lon: float = typer.Option(..., "--lon", help="Longitude (degrees, east positive)"),
    time: str = typer.Option(..., "--time", "-t", help="Local time, ISO-8601"),
    timezone: Optional[float] = typer.Option(None, "--timezone", "-z", help="Hours from UTC"),
):
    """Sun elevation and azimuth for a place and local time."""
    try:
        sun = get_solar_position(lat, lon, time, timezone)
    except InvalidInputError as e:
        fail(e)

    table = Table(title=f"Sun position at ({lat:.3f}, {lon:.3f}) {time}")
    table.add_column("Quantity", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Elevation", f"{sun.elevation:.2f}°")
    table.add_row("Azimuth", f"{sun.azimuth:.2f}°")
    table.add_row("Zenith", f"{sun.zenith:.2f}°")
    table.add_row("Hour angle", f"{sun.hour_angle:.2f}°")
    console.print(table)

    if not sun.is_daylight:
        console.print("[yellow]![/yellow] Sun is below the horizon")


@app.command()
def hourly(
    lat: float = typer.Option(..., "--lat", help="Latitude"),
    lon: float = typer.Option(..., "--lon", help="Longitude"),
    date: str = typer.Option(..., "--date", "-d", help="Representative day, ISO-8601"),
    daily_total: float = typer.Option(..., "--daily-total", help="Daily irradiation (kWh/m²/day)"),
    temperature: Optional[float] = typer.Option(None, "--temperature", help="Average temperature (°C)"),
    timezone: float = typer.Option(0.0, "--timezone", "-z", help="Hours from UTC"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
):
    """Synthesize a 24-hour irradiance curve from a daily total."""
    try:
        samples = get_hourly_irradiance(
            lat, lon, date, daily_total, avg_temperature=temperature, timezone=timezone
        )
    except InvalidInputError as e:
        fail(e)

    if as_json:
        typer.echo(json.dumps([asdict(sample) for sample in samples], indent=2))
        return

    table = Table(title=f"Hourly irradiance {date}")
    table.add_column("Hour", justify="right")
    table.add_column("GHI W/m²", justify="right")
    table.add_column("DNI W/m²", justify="right")
    table.add_column("DHI W/m²", justify="right")
    table.add_column("Temp °C", justify="right")
    for sample in samples:
        table.add_row(
            f"{sample.hour:02d}",
            f"{sample.ghi:.0f}",
            f"{sample.dni:.0f}",
            f"{sample.dhi:.0f}",
            f"{sample.temperature:.1f}",
        )
    console.print(table)
    console.print(f"Daily total: [bold]{daily_total_kwh(samples):.2f}[/bold] kWh/m²")


@app.command()
def tilt(
    lat: float = typer.Option(..., "--lat", help="Latitude"),
    month: Optional[int] = typer.Option(None, "--month", "-m", help="Month 1-12"),
    all_months: bool = typer.Option(False, "--all-months", help="Show every month"),
):
    """Optimal fixed-panel tilt heuristic."""
    try:
        if all_months:
            tilts = monthly_optimal_tilts(lat)
        else:
            value = get_optimal_tilt(lat, month)
    except InvalidInputError as e:
        fail(e)

    if all_months:
        table = Table(title=f"Monthly optimal tilt at {lat:.2f}°")
        table.add_column("Month", justify="right")
        table.add_column("Tilt", justify="right")
        for index, monthly in enumerate(tilts, start=1):
            table.add_row(str(index), f"{monthly:.1f}°")
        console.print(table)
        return

    label = f"month {month}" if month else "annual"
    console.print(f"Optimal tilt ({label}): [bold green]{value:.1f}°[/bold green]")


@app.command()
def shading(
    lat: float = typer.Option(..., "--lat", help="Latitude"),
    lon: float = typer.Option(..., "--lon", help="Longitude"),
    obstacles_file: Optional[Path] = typer.Option(
        None, "--obstacles", "-o", help="JSON file with surveyed obstacles"
    ),
    location_type: Optional[str] = typer.Option(
        None, "--location-type", "-l", help="Estimate obstacles: urban, suburban or rural"
    ),
    building_height: Optional[float] = typer.Option(
        None, "--building-height", help="Nearby building height for estimates (m)"
    ),
    width: float = typer.Option(20.0, "--width", help="Roof east-west extent (m)"),
    depth: float = typer.Option(20.0, "--depth", help="Roof north-south extent (m)"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of tables"),
):
    """
    Annual shading analysis of a roof.

    Obstacles come from a JSON file, or are estimated from a location class.
    With neither the site is treated as unobstructed.
    """
    try:
        if obstacles_file is not None:
            obstacles = load_obstacles(obstacles_file)
        elif location_type is not None:
            obstacles = estimate_common_obstacles(location_type, building_height)
        else:
            obstacles = []
        analysis = analyze_annual_shading(
            lat, lon, obstacles, RoofFootprint(width=width, depth=depth)
        )
    except InvalidInputError as e:
        fail(e)
    except (OSError, json.JSONDecodeError) as e:
        print_error(f"Could not read obstacles: {e}")
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(analysis.to_dict(), indent=2))
        return

    console.print(Panel.fit(
        f"[bold blue]Annual shading loss: {analysis.annual_shading_loss:.1f}%[/bold blue]\n"
        f"{len(obstacles)} obstacles, {analysis.grid_cells} roof cells, "
        f"{analysis.samples_analyzed} samples",
        border_style="blue",
    ))

    seasons = Table(title="Seasonal shading")
    seasons.add_column("Season", style="cyan")
    seasons.add_column("Loss", justify="right")
    for season, loss in analysis.seasonal_losses.items():
        seasons.add_row(season, f"{loss:.1f}%")
    console.print(seasons)

    if analysis.critical_periods:
        critical = Table(title="Critical periods")
        critical.add_column("Season")
        critical.add_column("Month", justify="right")
        critical.add_column("Time", justify="right")
        critical.add_column("Shading", justify="right")
        critical.add_column("Cause")
        for period in analysis.critical_periods:
            critical.add_row(
                period.season,
                str(period.month),
                period.time_of_day,
                f"{period.shading_percentage:.0f}%",
                period.cause,
            )
        console.print(critical)

    console.print("\n[bold]Recommendations:[/bold]")
    for recommendation in analysis.recommendations:
        console.print(f"  [green]•[/green] {recommendation}")


@app.command()
def obstacles(
    location_type: str = typer.Argument(..., help="urban, suburban or rural"),
    building_height: Optional[float] = typer.Option(
        None, "--building-height", help="Nearby building height (m)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
):
    """Typical obstacles for a location class."""
    try:
        estimated = estimate_common_obstacles(location_type, building_height)
    except InvalidInputError as e:
        fail(e)

    if as_json:
        typer.echo(json.dumps(
            [
                {**asdict(obstacle), "category": obstacle.category.value}
                for obstacle in estimated
            ],
            indent=2,
        ))
        return

    table = Table(title=f"Typical {location_type} obstacles")
    table.add_column("Category", style="cyan")
    table.add_column("Height", justify="right")
    table.add_column("Distance", justify="right")
    table.add_column("Azimuth", justify="right")
    table.add_column("Width", justify="right")
    table.add_column("Description")
    for obstacle in estimated:
        table.add_row(
            obstacle.category.value,
            f"{obstacle.height:.1f} m",
            f"{obstacle.distance:.1f} m",
            f"{obstacle.azimuth:.0f}°",
            f"{obstacle.width:.1f} m" if obstacle.width else "-",
            obstacle.description,
        )
    console.print(table)


if __name__ == "__main__":
    app()
