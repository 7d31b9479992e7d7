"""Display labels for lead notifications and follow-up routing."""

from __future__ import annotations

from market_leads.leads.models import (
    ImportantFactor,
    Intent,
    LeadTemperature,
    PropertyType,
    Timeline,
)

TEMPERATURE_LABELS: dict[str, str] = {
    "hot": "HOT LEAD - CALL NOW",
    "warm": "Warm Lead - Follow Up Today",
    "nurture": "Nurture Lead - Add to Drip",
    "cold": "Cold Lead - Auto-Nurture",
}

TEMPERATURE_EMOJI: dict[str, str] = {
    "hot": "\U0001F525",
    "warm": "\U0001F7E0",
    "nurture": "\U0001F7E1",
    "cold": "\U000026AA",
}

TEMPERATURE_COLORS: dict[str, str] = {
    "hot": "#E53935",
    "warm": "#FB8C00",
    "nurture": "#FDD835",
    "cold": "#9E9E9E",
}

TIMELINE_LABELS: dict[str, str] = {
    "within-30-days": "Within 30 days",
    "1-3-months": "1-3 months",
    "3-6-months": "3-6 months",
    "6-plus-months": "6+ months",
}

INTENT_LABELS: dict[str, str] = {
    "selling": "Selling a Home",
    "buying": "Buying a Home",
    "both": "Buying & Selling",
    "home-value": "Home Value Inquiry",
    "browsing": "Just Browsing",
}

PROPERTY_TYPE_LABELS: dict[str, str] = {
    "single-family": "Single Family Home",
    "condo": "Condo",
    "townhouse": "Townhouse",
    "multi-family": "Multi-Family",
}

IMPORTANT_FACTOR_LABELS: dict[str, str] = {
    "speed": "Speed (Sell Quickly)",
    "price": "Price (Maximize Value)",
    "convenience": "Convenience (Minimal Hassle)",
}


def temperature_label(temperature: LeadTemperature) -> str:
    return TEMPERATURE_LABELS[temperature]


def temperature_emoji(temperature: LeadTemperature) -> str:
    return TEMPERATURE_EMOJI[temperature]


def temperature_color(temperature: LeadTemperature) -> str:
    return TEMPERATURE_COLORS[temperature]


def format_timeline(timeline: Timeline) -> str:
    return TIMELINE_LABELS[timeline]


def format_intent(intent: Intent) -> str:
    return INTENT_LABELS[intent]


def format_property_type(property_type: PropertyType) -> str:
    return PROPERTY_TYPE_LABELS[property_type]


def format_important_factor(factor: ImportantFactor) -> str:
    return IMPORTANT_FACTOR_LABELS[factor]


def is_seller_lead(intent: Intent) -> bool:
    return intent in ("selling", "both", "home-value")


def is_buyer_lead(intent: Intent) -> bool:
    return intent in ("buying", "both")
