"""Typed models for advisory rules and their output."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict

from ..weather.models import ForecastEntry, WeatherSnapshot

AdvisoryCategory = Literal["rain", "temperature", "wind", "humidity", "schedule"]
SoilLevel = Literal["Low", "Medium", "High", "Unknown"]


class Persona(str, Enum):
    """Named advisory rule-set configuration."""

    GENERAL = "general"
    AGRICULTURE = "agriculture"


class AdvisoryItem(BaseModel):
    """One rule-generated, user-facing recommendation."""

    model_config = ConfigDict(frozen=True)

    title: str
    message: str
    category: AdvisoryCategory


class SoilMoistureEstimate(BaseModel):
    """Derived soil-moisture percentage and its coarse level."""

    model_config = ConfigDict(frozen=True)

    percent: int
    level: SoilLevel


@dataclass(frozen=True, slots=True)
class RuleContext:
    """Inputs visible to rule predicates.

    `forecast` is the next-24h slice, or None when no forecast was supplied
    or it was empty.
    """

    snapshot: WeatherSnapshot
    forecast: tuple[ForecastEntry, ...] | None = None


Predicate = Callable[[RuleContext], bool]


@dataclass(frozen=True, slots=True)
class Outcome:
    """Predicate plus the advisory emitted when it holds."""

    when: Predicate
    title: str
    message: str | Callable[[RuleContext], str]


@dataclass(frozen=True, slots=True)
class AdvisoryRule:
    """Ordered outcomes for one category; the first matching outcome emits.

    Snapshot fields named in `requires` must be present, otherwise the rule
    stays silent rather than treating missing data as zero.
    """

    name: str
    category: AdvisoryCategory
    outcomes: tuple[Outcome, ...]
    requires: tuple[str, ...] = ()
    needs_forecast: bool = False

    def evaluate(self, context: RuleContext) -> AdvisoryItem | None:
        if self.needs_forecast and not context.forecast:
            return None
        if any(getattr(context.snapshot, field) is None for field in self.requires):
            return None
        for outcome in self.outcomes:
            if outcome.when(context):
                message = outcome.message
                if callable(message):
                    message = message(context)
                return AdvisoryItem(title=outcome.title, message=message, category=self.category)
        return None
