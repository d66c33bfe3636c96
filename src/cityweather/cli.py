"""City weather CLI application.

This module provides the command-line interface: current conditions and
forecast for a city or the device location, favorites management, and
configuration utilities.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Final

import typer
import yaml
from pydantic import ValidationError

from cityweather.controller import TEST_CONFIG_YAML, WeatherController
from cityweather.favorites.persistence import MemoryPersistence
from cityweather.session.state import Failed, SessionState
from cityweather.settings.user import UserSettings
from cityweather.weather.models import CityQuery

__all__ = ["TEST_CONFIG_YAML", "app"]

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="City weather CLI", add_completion=False)
favorites_app = typer.Typer(help="Favorite cities")
config_app = typer.Typer(help="Config helpers")
app.add_typer(favorites_app, name="favorites")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "cityweather.cli"

# Options shared by the commands
CONFIG_OPTION = typer.Option(None, "--config", "-c", exists=True, dir_okay=False)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
NO_PERSIST_OPTION = typer.Option(
    False, "--no-persist", help="Keep favorites in memory only for this run"
)
CITY_ARGUMENT = typer.Argument(..., help="City name, e.g. Rabat")
DST_ARGUMENT = typer.Argument(..., help="Output config.yaml")


def _controller(config: Path | None, debug: bool, no_persist: bool = False) -> WeatherController:
    try:
        return WeatherController(
            config,
            persistence=MemoryPersistence() if no_persist else None,
            debug=debug,
        )
    except (FileNotFoundError, RuntimeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from exc


def _city_name(city: str) -> str:
    try:
        return str(CityQuery.for_city(city))
    except ValidationError as exc:
        typer.secho(f"Invalid city name: {city!r}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from exc


def _report(controller: WeatherController, state: SessionState) -> None:
    for line in controller.render(state):
        typer.echo(line)
    if isinstance(state, Failed):
        raise typer.Exit(code=1)


@app.command()
def show(
    city: str = CITY_ARGUMENT,
    config: Path | None = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Show current conditions, forecast and alerts for CITY."""
    city = _city_name(city)
    controller = _controller(config, debug)
    _report(controller, controller.show_city(city))


@app.command()
def here(
    config: Path | None = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Show weather for the current location (falls back to the default city)."""
    controller = _controller(config, debug)
    _report(controller, controller.show_here())


# ───────────────────────── favorites sub-commands ────────────────────────────
@favorites_app.command("list")
def list_favorites(config: Path | None = CONFIG_OPTION) -> None:
    """List favorite cities in the order they were added."""
    controller = _controller(config, debug=False)
    favorites = controller.session.favorites
    if not favorites:
        typer.echo("No favorites yet.")
        return
    for name in favorites:
        typer.echo(name)


@favorites_app.command("toggle")
def toggle_favorite(
    city: str = CITY_ARGUMENT,
    config: Path | None = CONFIG_OPTION,
    no_persist: bool = NO_PERSIST_OPTION,
) -> None:
    """Add CITY to the favorites, or remove it if already there."""
    city = _city_name(city)
    controller = _controller(config, debug=False, no_persist=no_persist)
    favorites = controller.toggle_favorite(city)
    verb = "Added" if city in favorites else "Removed"
    typer.echo(f"{verb} {city}. Favorites: {', '.join(favorites) or '(none)'}")


@favorites_app.command("open")
def open_favorite(
    city: str = CITY_ARGUMENT,
    config: Path | None = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Show weather for a favorite city."""
    city = _city_name(city)
    controller = _controller(config, debug)
    if not controller.session.favorites_store.contains(city):
        typer.secho(f"{city} is not a favorite", fg=typer.colors.YELLOW, err=True)
    _report(controller, controller.open_favorite(city))


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path):
    """Validate a YAML config file against the schema."""
    try:
        UserSettings.load(file)
        typer.echo("✅ Config valid")
    except (FileNotFoundError, RuntimeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@config_app.command("wizard")
def wizard(dst: Path = DST_ARGUMENT):
    """Interactive prompt to create a config file."""
    typer.echo("Interactive config builder - press Enter for defaults.")

    while True:
        data: dict[str, Any] = {
            "api_key": typer.prompt("OpenWeather API key", hide_input=True),
            "units": typer.prompt("Units [metric|imperial|standard]", default="metric"),
            "default_city": typer.prompt("Default city", default="Rabat"),
            "geolocation": typer.prompt("Geolocation [ip|fixed|off]", default="ip"),
        }
        if data["geolocation"] == "fixed":
            data["lat"] = float(typer.prompt("Latitude"))
            data["lon"] = float(typer.prompt("Longitude"))
        try:
            cfg = UserSettings(**data)
            break  # valid → exit loop
        except ValidationError as err:
            typer.secho("\nConfig error(s):", fg=typer.colors.RED, err=True)
            for e in err.errors():
                loc = e["loc"][0] if e["loc"] else "config"
                typer.secho(f"  • {loc} - {e['msg']}", fg=typer.colors.RED, err=True)
            typer.echo("Please re-enter the values.\n")

    dst.write_text(
        yaml.safe_dump(cfg.model_dump(mode="json", exclude_none=True), sort_keys=False),
        encoding="utf-8",
    )
    typer.secho(f"Config written to {dst}", fg=typer.colors.GREEN)


# ───────────────────────── module entrypoint ────────────────────────────────
def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    main()
