"""Nearby zip-code linking by numeric distance."""

from __future__ import annotations

from typing import Sequence

MAX_ZIP_DISTANCE = 10
MAX_NEARBY_ZIPS = 4


def _zip_number(zipcode: str) -> int | None:
    try:
        return int(zipcode)
    except ValueError:
        return None


def find_nearby_zips(zipcode: str, all_zips: Sequence[str]) -> list[str]:
    """Return up to four other zips within 10 of ``zipcode``, in universe order.

    Numeric closeness stands in for geographic adjacency. Candidates are not
    ranked by distance; the first matches in ``all_zips`` order win.
    """
    subject = _zip_number(zipcode)
    if subject is None:
        return []

    nearby: list[str] = []
    for candidate in all_zips:
        if candidate == zipcode:
            continue
        number = _zip_number(candidate)
        if number is None or abs(number - subject) > MAX_ZIP_DISTANCE:
            continue
        nearby.append(candidate)
        if len(nearby) == MAX_NEARBY_ZIPS:
            break
    return nearby
