"""Lead scoring from qualification answers.

Score bands:

- hot (80-100): ready to act within 30 days, immediate follow-up
- warm (50-79): active in 1-3 months, same-day follow-up
- nurture (25-49): planning 3-6 months, drip campaign
- cold (0-24): browsing, auto-nurture only
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from market_leads.common.schema import validate_lead_scoring_config
from market_leads.leads.labels import is_buyer_lead
from market_leads.leads.models import (
    LeadPriority,
    LeadScore,
    LeadTemperature,
    QualificationAnswers,
    ScoreBreakdown,
)

MIN_SCORE = 0
MAX_SCORE = 100

TEMPERATURE_THRESHOLDS: tuple[tuple[int, LeadTemperature], ...] = (
    (80, "hot"),
    (50, "warm"),
    (25, "nurture"),
)

PRIORITY_BY_TEMPERATURE: Mapping[LeadTemperature, LeadPriority] = MappingProxyType(
    {
        "hot": "immediate",
        "warm": "same-day",
        "nurture": "nurture",
        "cold": "drip",
    }
)


@dataclass(frozen=True)
class LeadScoringTables:
    timeline: Mapping[str, int]
    intent: Mapping[str, int]
    property_type: Mapping[str, int]
    important_factor: Mapping[str, int]
    contact_preference: Mapping[str, int]
    pre_approved_points: int
    not_pre_approved_points: int
    range_supplied_points: int

    @classmethod
    def from_config(cls, cfg: dict) -> "LeadScoringTables":
        cfg = validate_lead_scoring_config(cfg)
        tables = cfg["tables"]
        return cls(
            timeline=MappingProxyType(dict(tables["timeline"])),
            intent=MappingProxyType(dict(tables["intent"])),
            property_type=MappingProxyType(dict(tables["property_type"])),
            important_factor=MappingProxyType(dict(tables["important_factor"])),
            contact_preference=MappingProxyType(dict(tables["contact_preference"])),
            pre_approved_points=int(cfg["pre_approval"]["approved"]),
            not_pre_approved_points=int(cfg["pre_approval"]["not_approved"]),
            range_supplied_points=int(cfg["range_supplied"]),
        )


DEFAULT_SCORING_CONFIG = {
    "tables": {
        "timeline": {
            "within-30-days": 40,
            "1-3-months": 25,
            "3-6-months": 15,
            "6-plus-months": 5,
        },
        "intent": {
            "selling": 20,
            "buying": 15,
            "both": 25,
            "home-value": 10,
            "browsing": 0,
        },
        "property_type": {
            "single-family": 10,
            "townhouse": 10,
            "condo": 8,
            "multi-family": 12,
        },
        "important_factor": {
            "speed": 8,
            "price": 5,
            "convenience": 3,
        },
        "contact_preference": {
            "asap": 10,
            "morning": 5,
            "afternoon": 5,
            "evening": 3,
        },
    },
    "pre_approval": {"approved": 15, "not_approved": 5},
    "range_supplied": 5,
}

DEFAULT_TABLES = LeadScoringTables.from_config(DEFAULT_SCORING_CONFIG)


def clamp(value: int, *, minimum: int, maximum: int) -> int:
    return max(minimum, min(maximum, value))


def get_temperature(score: int) -> LeadTemperature:
    for threshold, temperature in TEMPERATURE_THRESHOLDS:
        if score >= threshold:
            return temperature
    return "cold"


def get_priority(temperature: LeadTemperature) -> LeadPriority:
    return PRIORITY_BY_TEMPERATURE[temperature]


def _property_details_points(answers: QualificationAnswers, tables: LeadScoringTables) -> int:
    points = 0
    if answers.property_type:
        points += tables.property_type.get(answers.property_type, 0)
    if answers.important_factor:
        points += tables.important_factor.get(answers.important_factor, 0)

    if is_buyer_lead(answers.intent):
        if answers.pre_approved is True:
            points += tables.pre_approved_points
        elif answers.pre_approved is False:
            points += tables.not_pre_approved_points

    if answers.value_range or answers.budget_range:
        points += tables.range_supplied_points
    return points


def calculate_lead_score(
    answers: QualificationAnswers,
    tables: LeadScoringTables = DEFAULT_TABLES,
) -> LeadScore:
    """Score a lead from its qualification answers.

    Categories are summed uncapped; only the total is clamped to 0-100.
    Unanswered optional questions contribute nothing.
    """
    contact_readiness = 0
    if answers.contact_preference:
        contact_readiness = tables.contact_preference.get(answers.contact_preference, 0)

    breakdown = ScoreBreakdown(
        timeline=tables.timeline.get(answers.timeline, 0),
        intent=tables.intent.get(answers.intent, 0),
        property_details=_property_details_points(answers, tables),
        contact_readiness=contact_readiness,
    )

    score = clamp(breakdown.total, minimum=MIN_SCORE, maximum=MAX_SCORE)
    temperature = get_temperature(score)
    return LeadScore(
        score=score,
        temperature=temperature,
        priority=get_priority(temperature),
        breakdown=breakdown,
    )
