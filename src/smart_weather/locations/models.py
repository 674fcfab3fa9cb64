"""Typed models for persisted location and preference state."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RecentLocation(BaseModel):
    """A location the user recently viewed; identity is the coordinate pair."""

    model_config = ConfigDict(frozen=True)

    name: str
    lat: float
    lon: float

    @property
    def key(self) -> tuple[float, float]:
        return (self.lat, self.lon)


class Preferences(BaseModel):
    """User display and notification preferences."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    unit: Literal["C", "F"] = "C"
    alerts_enabled: bool = True
    agriculture_mode: bool = False
    travel_mode: bool = True
    daily_summary: bool = True
    severe_alerts: bool = True
