"""Declarative advisory rule tables, one per persona.

Rules are evaluated in declared order and each emits at most one item.
Thresholds compare full-precision Celsius, never the rounded display value.
"""

from __future__ import annotations

from ..weather.models import ForecastEntry
from .models import AdvisoryRule, Outcome, Persona, Predicate, RuleContext

LOW_RAIN_PROBABILITY = 0.2

AGRI_HOT_C = 32.0
AGRI_COOL_C = 22.0
AGRI_STRONG_WIND_MS = 8.0
AGRI_HIGH_HUMIDITY_PCT = 80

TRAVEL_HOT_C = 30.0
TRAVEL_FREEZING_C = 0.0
TRAVEL_WINDY_MS = 10.0
TRAVEL_MUGGY_PCT = 85


def first_low_rain_slot(context: RuleContext) -> ForecastEntry | None:
    """First entry of the next-24h slice, in order, with pop below 0.2."""
    for entry in context.forecast or ():
        if entry.precipitation_probability < LOW_RAIN_PROBABILITY:
            return entry
    return None


def _always(context: RuleContext) -> bool:
    return True


def _raining(context: RuleContext) -> bool:
    return context.snapshot.condition_contains("rain")


def _wet_travel(context: RuleContext) -> bool:
    return context.snapshot.condition_contains("rain", "drizzle", "thunderstorm")


def _celsius_at_least(threshold: float) -> Predicate:
    def predicate(context: RuleContext) -> bool:
        return context.snapshot.temperature.value >= threshold

    return predicate


def _celsius_at_most(threshold: float) -> Predicate:
    def predicate(context: RuleContext) -> bool:
        return context.snapshot.temperature.value <= threshold

    return predicate


def _wind_at_least(threshold: float) -> Predicate:
    def predicate(context: RuleContext) -> bool:
        return context.snapshot.wind_speed_ms >= threshold

    return predicate


def _humidity_at_least(threshold: int) -> Predicate:
    def predicate(context: RuleContext) -> bool:
        return context.snapshot.humidity_pct >= threshold

    return predicate


def _has_low_rain_slot(context: RuleContext) -> bool:
    return first_low_rain_slot(context) is not None


def _watering_message(context: RuleContext) -> str:
    slot = first_low_rain_slot(context)
    return f"Low rain probability around: {slot.label}."


def _travel_window_message(context: RuleContext) -> str:
    slot = first_low_rain_slot(context)
    return f"Lowest chance of rain for getting around starts at: {slot.label}."


AGRICULTURE_RULES: tuple[AdvisoryRule, ...] = (
    AdvisoryRule(
        name="rain_now",
        category="rain",
        outcomes=(
            Outcome(
                when=_raining,
                title="Rain detected",
                message="Avoid watering now. Natural rainfall is already providing moisture.",
            ),
            Outcome(
                when=_always,
                title="No rain right now",
                message="Watering is possible. Check rainfall chance in next few hours.",
            ),
        ),
    ),
    AdvisoryRule(
        name="temperature",
        category="temperature",
        requires=("temperature",),
        outcomes=(
            Outcome(
                when=_celsius_at_least(AGRI_HOT_C),
                title="High temperature",
                message="Water early morning or late evening to reduce evaporation.",
            ),
            Outcome(
                when=_celsius_at_most(AGRI_COOL_C),
                title="Cool weather",
                message="Evaporation is low. Moderate watering is sufficient.",
            ),
        ),
    ),
    AdvisoryRule(
        name="wind",
        category="wind",
        requires=("wind_speed_ms",),
        outcomes=(
            Outcome(
                when=_wind_at_least(AGRI_STRONG_WIND_MS),
                title="Strong winds",
                message=(
                    "Avoid spraying pesticides/fertilizers now. "
                    "Wind can cause drift and waste."
                ),
            ),
        ),
    ),
    AdvisoryRule(
        name="humidity",
        category="humidity",
        requires=("humidity_pct",),
        outcomes=(
            Outcome(
                when=_humidity_at_least(AGRI_HIGH_HUMIDITY_PCT),
                title="High humidity",
                message="Higher risk of fungal disease. Improve airflow and monitor leaves.",
            ),
        ),
    ),
    AdvisoryRule(
        name="watering_schedule",
        category="schedule",
        needs_forecast=True,
        outcomes=(
            Outcome(
                when=_has_low_rain_slot,
                title="Best watering time (next 24h)",
                message=_watering_message,
            ),
            Outcome(
                when=_always,
                title="Rain likely",
                message=(
                    "Rain probability is high in most upcoming hours, "
                    "watering can be reduced."
                ),
            ),
        ),
    ),
)


GENERAL_RULES: tuple[AdvisoryRule, ...] = (
    AdvisoryRule(
        name="rain_now",
        category="rain",
        outcomes=(
            Outcome(
                when=_wet_travel,
                title="Carry an umbrella",
                message=(
                    "Rain is falling now. Allow extra travel time "
                    "and watch for slippery roads."
                ),
            ),
            Outcome(
                when=_always,
                title="Dry right now",
                message="No rain at the moment. A good time to head out.",
            ),
        ),
    ),
    AdvisoryRule(
        name="temperature",
        category="temperature",
        requires=("temperature",),
        outcomes=(
            Outcome(
                when=_celsius_at_least(TRAVEL_HOT_C),
                title="Hot day ahead",
                message="Stay hydrated and plan outdoor stops for the cooler hours.",
            ),
            Outcome(
                when=_celsius_at_most(TRAVEL_FREEZING_C),
                title="Freezing conditions",
                message="Roads may be icy. Dress warmly and drive carefully.",
            ),
        ),
    ),
    AdvisoryRule(
        name="wind",
        category="wind",
        requires=("wind_speed_ms",),
        outcomes=(
            Outcome(
                when=_wind_at_least(TRAVEL_WINDY_MS),
                title="Windy conditions",
                message="Expect gusts on open roads and coastal routes.",
            ),
        ),
    ),
    AdvisoryRule(
        name="humidity",
        category="humidity",
        requires=("humidity_pct",),
        outcomes=(
            Outcome(
                when=_humidity_at_least(TRAVEL_MUGGY_PCT),
                title="Muggy air",
                message="It will feel warmer than it is. Light clothing is recommended.",
            ),
        ),
    ),
    AdvisoryRule(
        name="travel_window",
        category="schedule",
        needs_forecast=True,
        outcomes=(
            Outcome(
                when=_has_low_rain_slot,
                title="Dry travel window (next 24h)",
                message=_travel_window_message,
            ),
            Outcome(
                when=_always,
                title="Wet day ahead",
                message="Rain is likely through most of the next 24 hours. Pack rain gear.",
            ),
        ),
    ),
)


PERSONA_RULES: dict[Persona, tuple[AdvisoryRule, ...]] = {
    Persona.GENERAL: GENERAL_RULES,
    Persona.AGRICULTURE: AGRICULTURE_RULES,
}
