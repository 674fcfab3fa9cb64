"""Command-line entry point: weather report, search, recent and profile commands."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import get_args

from rich.console import Console
from rich.table import Table

from .advisory.hints import build_hint
from .advisory.models import AdvisoryItem, Persona, SoilMoistureEstimate
from .config import Settings, load_settings
from .exceptions import (
    ConfigError,
    MalformedPersistedState,
    PersistenceError,
    SavedLocationError,
    WeatherProviderError,
)
from .locations.cache import RecentLocationCache
from .locations.models import Preferences, RecentLocation
from .locations.profile import PreferenceFlag, ProfileStore, enabled_personas, summary_text
from .locations.store import JsonFileKeyValueStore
from .log_setup import setup_logger
from .search.coordinator import (
    MIN_QUERY_LENGTH,
    SEARCH_FAILED,
    WEATHER_NOT_FOUND,
    AutocompleteCoordinator,
)
from .weather.base import WeatherProvider
from .weather.models import TemperatureUnit, WeatherSnapshot
from .weather.openweather import OpenWeatherProvider
from .weather.static import StaticWeatherProvider


def parse_args() -> argparse.Namespace:
    """Parse smart weather CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="smart-weather",
        description="Current weather, persona advisories and saved locations.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    report = subparsers.add_parser("report", help="Show weather and advisories for a location.")
    report.add_argument("--lat", type=float, default=None, help="Latitude to report on.")
    report.add_argument("--lon", type=float, default=None, help="Longitude to report on.")
    report.add_argument("--city", type=str, default=None, help="Place name to geocode.")
    report.add_argument(
        "--persona",
        choices=[persona.value for persona in Persona],
        default=None,
        help="Advisory persona; defaults to the personas enabled in preferences.",
    )
    report.add_argument("--unit", choices=["C", "F"], default=None, help="Display unit.")
    _add_offline_arguments(report)

    search = subparsers.add_parser("search", help="List place suggestions for a query.")
    search.add_argument("query", type=str, help="Free-text place query.")
    search.add_argument(
        "--input-geocode-file",
        type=Path,
        default=None,
        help="Offline geocode results JSON instead of calling OpenWeather.",
    )

    subparsers.add_parser("recent", help="Show recently viewed locations.")

    prefs = subparsers.add_parser("prefs", help="Show or change preferences.")
    prefs.add_argument(
        "--toggle",
        choices=list(get_args(PreferenceFlag)),
        default=None,
        help="Flip one boolean preference.",
    )
    prefs.add_argument("--unit", choices=["C", "F"], default=None, help="Set the display unit.")

    saved = subparsers.add_parser("saved", help="List, add or remove saved locations.")
    saved.add_argument("action", choices=["list", "add", "remove"])
    saved.add_argument("name", nargs="?", default=None, help="Location name for add/remove.")

    return parser.parse_args()


def _add_offline_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--input-weather-file",
        type=Path,
        default=None,
        help="Offline current-weather JSON instead of calling OpenWeather.",
    )
    parser.add_argument(
        "--input-forecast-file",
        type=Path,
        default=None,
        help="Offline forecast JSON (list or {'list': [...]}); requires --input-weather-file.",
    )
    parser.add_argument(
        "--input-geocode-file",
        type=Path,
        default=None,
        help="Offline geocode results JSON used with --city.",
    )


def _validate_report_args(args: argparse.Namespace) -> None:
    if args.city and (args.lat is not None or args.lon is not None):
        raise WeatherProviderError("Use either --city or --lat/--lon, not both.")
    if (args.lat is None) != (args.lon is None):
        raise WeatherProviderError("--lat and --lon must be passed together.")
    if args.input_forecast_file and not args.input_weather_file:
        raise WeatherProviderError("--input-forecast-file requires --input-weather-file.")


def _build_provider(
    args: argparse.Namespace, settings: Settings, logger: logging.Logger
) -> WeatherProvider:
    weather_file = getattr(args, "input_weather_file", None)
    geocode_file = getattr(args, "input_geocode_file", None)
    if weather_file or geocode_file:
        return StaticWeatherProvider.from_files(
            weather_file=weather_file,
            forecast_file=getattr(args, "input_forecast_file", None),
            geocode_file=geocode_file,
        )
    return OpenWeatherProvider(settings=settings, logger=logger.getChild("openweather"))


def _print_snapshot(
    console: Console, snapshot: WeatherSnapshot, unit: TemperatureUnit, fallback_name: str
) -> None:
    table = Table(title=f"Weather: {snapshot.location_name or fallback_name}")
    table.add_column("Field")
    table.add_column("Value", overflow="fold")

    description = snapshot.condition_description or snapshot.condition_main or "-"
    table.add_row("Condition", description)
    table.add_row("Temperature", snapshot.display_temperature(unit))
    feels_like = snapshot.feels_like.display(unit) if snapshot.feels_like is not None else "-"
    table.add_row("Feels like", feels_like)
    table.add_row(
        "Humidity", f"{snapshot.humidity_pct}%" if snapshot.humidity_pct is not None else "-"
    )
    table.add_row(
        "Wind", f"{snapshot.wind_speed_ms:g} m/s" if snapshot.wind_speed_ms is not None else "-"
    )
    table.add_row(
        "Pressure", f"{snapshot.pressure_hpa:g} hPa" if snapshot.pressure_hpa is not None else "-"
    )
    table.add_row(
        "Visibility",
        f"{snapshot.visibility_km:g} km" if snapshot.visibility_km is not None else "-",
    )
    console.print(table)


def _print_advisories(console: Console, persona: Persona, items: list[AdvisoryItem]) -> None:
    if not items:
        console.print(f"No {persona.value} advisories.")
        return

    table = Table(title=f"{persona.value.title()} Advisories")
    table.add_column("Category")
    table.add_column("Title")
    table.add_column("Message", overflow="fold")
    for item in items:
        table.add_row(item.category, item.title, item.message)
    console.print(table)


def _print_soil(console: Console, estimate: SoilMoistureEstimate) -> None:
    console.print(f"Soil moisture estimate: {estimate.percent}% ({estimate.level})")


def _print_locations(console: Console, title: str, locations: list[RecentLocation]) -> None:
    if not locations:
        console.print("No recent locations yet.")
        return

    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Name", overflow="fold")
    table.add_column("Lat")
    table.add_column("Lon")
    for index, location in enumerate(locations, start=1):
        table.add_row(str(index), location.name, f"{location.lat:.4f}", f"{location.lon:.4f}")
    console.print(table)


def _print_preferences(console: Console, preferences: Preferences) -> None:
    table = Table(title="Preferences")
    table.add_column("Setting")
    table.add_column("Value")
    for name, value in preferences.model_dump().items():
        if isinstance(value, bool):
            value = "On" if value else "Off"
        table.add_row(name, str(value))
    console.print(table)
    console.print(summary_text(preferences))


async def _run_report(
    args: argparse.Namespace,
    settings: Settings,
    logger: logging.Logger,
    console: Console,
    cache: RecentLocationCache,
    profile: ProfileStore,
) -> int:
    _validate_report_args(args)
    preferences = profile.load_preferences()
    unit: TemperatureUnit = args.unit or preferences.unit
    if args.persona:
        personas = [Persona(args.persona)]
    else:
        personas = enabled_personas(preferences) or [Persona.GENERAL]

    center = (settings.default_lat, settings.default_lon)
    async with _build_provider(args, settings, logger) as provider:
        coordinator = AutocompleteCoordinator(
            provider,
            cache,
            suggestion_limit=settings.geocode_suggestion_limit,
            logger=logger.getChild("search"),
        )
        if args.city:
            coordinator.query = args.city
            loaded = await coordinator.submit()
        elif args.lat is not None:
            loaded = await coordinator.select_coordinates(args.lat, args.lon)
        elif None not in center:
            loaded = await coordinator.select_coordinates(
                center[0], center[1], name=settings.default_location_name
            )
        else:
            raise WeatherProviderError(
                "Missing location input: pass --city or --lat/--lon, or set DEFAULT_LAT/LON."
            )

    if not loaded or coordinator.snapshot is None:
        console.print(coordinator.error or WEATHER_NOT_FOUND)
        return 4

    _print_snapshot(console, coordinator.snapshot, unit, settings.default_location_name)
    for persona in personas:
        _print_advisories(console, persona, coordinator.advisories(persona))
        if persona is Persona.AGRICULTURE:
            _print_soil(console, coordinator.soil_moisture())
    console.print(coordinator.hint())
    logger.info(
        "Report complete location=%s personas=%s",
        coordinator.snapshot.location_name,
        ",".join(persona.value for persona in personas),
    )
    return 0


async def _run_search(
    args: argparse.Namespace,
    settings: Settings,
    logger: logging.Logger,
    console: Console,
    cache: RecentLocationCache,
) -> int:
    async with _build_provider(args, settings, logger) as provider:
        coordinator = AutocompleteCoordinator(
            provider,
            cache,
            suggestion_limit=settings.geocode_suggestion_limit,
            logger=logger.getChild("search"),
        )
        await coordinator.on_query_changed(args.query)

    if coordinator.state == "failed":
        console.print(SEARCH_FAILED)
        return 4
    if coordinator.state == "idle":
        console.print(f"Type at least {MIN_QUERY_LENGTH} characters to search.")
        return 0
    if not coordinator.suggestions:
        console.print("No suggestions.")
        return 0

    table = Table(title=f"Suggestions for {args.query!r}")
    table.add_column("#", justify="right")
    table.add_column("Place", overflow="fold")
    table.add_column("Lat")
    table.add_column("Lon")
    for index, suggestion in enumerate(coordinator.suggestions, start=1):
        table.add_row(
            str(index), suggestion.display_name, f"{suggestion.lat:.4f}", f"{suggestion.lon:.4f}"
        )
    console.print(table)
    return 0


def _run_prefs(args: argparse.Namespace, console: Console, profile: ProfileStore) -> int:
    if args.toggle:
        profile.toggle(args.toggle)
    if args.unit:
        profile.set_unit(args.unit)
    _print_preferences(console, profile.load_preferences())
    return 0


def _run_saved(args: argparse.Namespace, console: Console, profile: ProfileStore) -> int:
    if args.action in ("add", "remove") and args.name is None:
        raise SavedLocationError("Enter a location name")
    if args.action == "add":
        names = profile.add_saved_location(args.name)
    elif args.action == "remove":
        names = profile.remove_saved_location(args.name)
    else:
        names = profile.saved_locations()

    if not names:
        console.print("No saved locations yet.")
        return 0
    for name in names:
        console.print(f"- {name}")
    return 0


def main() -> int:
    """Run the smart weather CLI."""
    args = parse_args()
    logger = setup_logger()
    console = Console()

    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 2

    logger.setLevel(settings.log_level)
    logger.debug("Loaded settings %s", settings.safe_summary())

    store = JsonFileKeyValueStore(settings.state_path)
    cache = RecentLocationCache(store, logger=logger.getChild("recent"))
    profile = ProfileStore(store, logger=logger.getChild("profile"))

    try:
        if args.command == "report":
            return asyncio.run(_run_report(args, settings, logger, console, cache, profile))
        if args.command == "search":
            return asyncio.run(_run_search(args, settings, logger, console, cache))
        if args.command == "recent":
            _print_locations(console, "Recent Locations", cache.list())
            console.print(build_hint(None, cache.list()))
            return 0
        if args.command == "prefs":
            return _run_prefs(args, console, profile)
        return _run_saved(args, console, profile)
    except SavedLocationError as exc:
        console.print(str(exc))
        return 4
    except WeatherProviderError as exc:
        logger.error("Weather failure: %s", exc)
        return 4
    except (PersistenceError, MalformedPersistedState) as exc:
        logger.error("State persistence failure: %s", exc)
        return 5
    except Exception as exc:  # pragma: no cover - runtime guard
        logger.exception("Unexpected CLI failure: %s", exc)
        return 99


if __name__ == "__main__":
    sys.exit(main())
