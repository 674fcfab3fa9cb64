"""Advisory derivation: rule engine, soil-moisture estimate and smart hints."""

from .engine import AdvisoryEngine, derive_advisories
from .hints import build_hint
from .models import AdvisoryItem, AdvisoryRule, Outcome, Persona, RuleContext, SoilMoistureEstimate
from .rules import AGRICULTURE_RULES, GENERAL_RULES, PERSONA_RULES
from .soil import estimate_soil_moisture

__all__ = [
    "AGRICULTURE_RULES",
    "AdvisoryEngine",
    "AdvisoryItem",
    "AdvisoryRule",
    "GENERAL_RULES",
    "Outcome",
    "PERSONA_RULES",
    "Persona",
    "RuleContext",
    "SoilMoistureEstimate",
    "build_hint",
    "derive_advisories",
    "estimate_soil_moisture",
]
