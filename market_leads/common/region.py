"""Region name, slug and zip-code helpers."""

from __future__ import annotations

import re

from market_leads.common.constants import ZIP_REGION_PREFIX

_ZIP_REGION_RE = re.compile(re.escape(ZIP_REGION_PREFIX) + r"(\d+)")
_WHITESPACE_RE = re.compile(r"\s+")
_SLUG_INVALID_RE = re.compile(r"[^a-z0-9-]")


def extract_zip_code(region: str) -> str:
    match = _ZIP_REGION_RE.search(region)
    return match.group(1) if match else region


def strip_region_suffix(name: str, suffix: str) -> str:
    if suffix and name.endswith(suffix):
        return name[: -len(suffix)]
    return name


def create_slug(name: str) -> str:
    slug = _WHITESPACE_RE.sub("-", name.lower())
    return _SLUG_INVALID_RE.sub("", slug)


def zip_region_key(zipcode: str) -> str:
    return f"{ZIP_REGION_PREFIX}{zipcode}"
