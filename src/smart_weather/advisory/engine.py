"""Rule-based advisory derivation for the general and agriculture personas."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..weather.models import ForecastWindow, WeatherSnapshot
from .models import AdvisoryItem, AdvisoryRule, Persona, RuleContext
from .rules import PERSONA_RULES


class AdvisoryEngine:
    """Evaluate an ordered rule table against one snapshot.

    Output order is declaration order. The engine keeps no state between
    calls, so identical inputs always yield an identical sequence.
    """

    def __init__(
        self,
        rules: Sequence[AdvisoryRule],
        logger: logging.Logger | None = None,
    ) -> None:
        self.rules = tuple(rules)
        self.logger = logger or logging.getLogger("smart_weather.advisory.engine")

    @classmethod
    def for_persona(
        cls, persona: Persona | str, logger: logging.Logger | None = None
    ) -> AdvisoryEngine:
        return cls(PERSONA_RULES[Persona(persona)], logger=logger)

    def derive(
        self,
        snapshot: WeatherSnapshot | None,
        forecast: ForecastWindow | None = None,
    ) -> list[AdvisoryItem]:
        if snapshot is None:
            return []

        window = forecast.next_24h if forecast is not None else ()
        context = RuleContext(snapshot=snapshot, forecast=window or None)

        items: list[AdvisoryItem] = []
        for rule in self.rules:
            item = rule.evaluate(context)
            if item is None:
                self.logger.debug("Rule %s did not fire", rule.name)
                continue
            items.append(item)
        return items


def derive_advisories(
    persona: Persona | str,
    snapshot: WeatherSnapshot | None,
    forecast: ForecastWindow | None = None,
) -> list[AdvisoryItem]:
    """Derive the ordered advisories for `persona`."""
    return AdvisoryEngine.for_persona(persona).derive(snapshot, forecast)
