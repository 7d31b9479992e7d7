"""Raw extract field parsing.

Every numeric cell in a market-tracker extract may be blank, the literal
``NA`` or otherwise unparseable. All of those become ``None``; nothing here
raises for malformed input, and absence is never coerced to zero.
"""

from __future__ import annotations

import math
import re

MISSING_MARKERS = {"", "NA"}
DECIMAL_LITERAL = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*", re.ASCII)


def strip_quotes(value: str) -> str:
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


def normalise_header(header: str) -> str:
    return strip_quotes(header).lower()


def parse_number(value: str | None) -> float | None:
    if value is None or value in MISSING_MARKERS:
        return None
    if DECIMAL_LITERAL.fullmatch(value) is None:
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    return number


def parse_percent(value: str | None) -> float | None:
    number = parse_number(value)
    if number is None:
        return None
    # Extracts store fractions; output is in percentage points.
    return number * 100
