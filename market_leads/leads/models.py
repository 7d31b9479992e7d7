"""Lead qualification input and score result types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping

from market_leads.common.errors import InputError
from market_leads.common.schema import (
    CONTACT_PREFERENCES,
    IMPORTANT_FACTORS,
    INTENTS,
    PROPERTY_TYPES,
    TIMELINES,
)

LeadTemperature = Literal["hot", "warm", "nurture", "cold"]
LeadPriority = Literal["immediate", "same-day", "nurture", "drip"]
Intent = Literal["selling", "buying", "both", "home-value", "browsing"]
Timeline = Literal["within-30-days", "1-3-months", "3-6-months", "6-plus-months"]
PropertyType = Literal["single-family", "condo", "townhouse", "multi-family"]
ImportantFactor = Literal["speed", "price", "convenience"]
ContactPreference = Literal["asap", "morning", "afternoon", "evening"]


def _enum_value(payload: Mapping[str, Any], key: str, allowed: tuple[str, ...], *, required: bool) -> str | None:
    value = payload.get(key)
    if value in (None, ""):
        if required:
            raise InputError(f"Missing required answer: {key}")
        return None
    if value not in allowed:
        raise InputError(f"Invalid value for {key}: {value!r} (expected one of {', '.join(allowed)})")
    return value


def _optional_text(payload: Mapping[str, Any], key: str) -> str | None:
    value = payload.get(key)
    if value in (None, ""):
        return None
    return str(value)


@dataclass(frozen=True)
class QualificationAnswers:
    intent: Intent
    timeline: Timeline
    property_type: PropertyType | None = None
    value_range: str | None = None
    budget_range: str | None = None
    important_factor: ImportantFactor | None = None
    pre_approved: bool | None = None
    contact_preference: ContactPreference | None = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "QualificationAnswers":
        """Build answers from a form payload using its camelCase keys."""
        pre_approved = payload.get("preApproved")
        if pre_approved is not None and not isinstance(pre_approved, bool):
            raise InputError(f"Invalid value for preApproved: {pre_approved!r}")
        return cls(
            intent=_enum_value(payload, "intent", INTENTS, required=True),
            timeline=_enum_value(payload, "timeline", TIMELINES, required=True),
            property_type=_enum_value(payload, "propertyType", PROPERTY_TYPES, required=False),
            value_range=_optional_text(payload, "valueRange"),
            budget_range=_optional_text(payload, "budgetRange"),
            important_factor=_enum_value(payload, "importantFactor", IMPORTANT_FACTORS, required=False),
            pre_approved=pre_approved,
            contact_preference=_enum_value(payload, "contactPreference", CONTACT_PREFERENCES, required=False),
        )


@dataclass(frozen=True)
class ScoreBreakdown:
    timeline: int
    intent: int
    property_details: int
    contact_readiness: int

    @property
    def total(self) -> int:
        return self.timeline + self.intent + self.property_details + self.contact_readiness

    def to_dict(self) -> dict[str, int]:
        return {
            "timeline": self.timeline,
            "intent": self.intent,
            "propertyDetails": self.property_details,
            "contactReadiness": self.contact_readiness,
        }


@dataclass(frozen=True)
class LeadScore:
    score: int
    temperature: LeadTemperature
    priority: LeadPriority
    breakdown: ScoreBreakdown

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "temperature": self.temperature,
            "priority": self.priority,
            "breakdown": self.breakdown.to_dict(),
        }
