"""Extract fiber composition and metadata from OCR'd care label text."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field

from wearaware.impact.calculator import FiberEntry
from wearaware.impact.fibers import FIBER_PROFILES, lookup

logger = logging.getLogger(__name__)

UNKNOWN_BRAND = "Unknown Brand"
UNDETECTED_ORIGIN = "Undetected"
SCAN_TYPE_CAMERA = "camera"


def _fiber_alternation() -> str:
    names = sorted((profile.name for profile in FIBER_PROFILES.values()), key=len, reverse=True)
    return "|".join(r"\s+".join(re.escape(word) for word in name.split()) for name in names)


FIBER_REGEX = re.compile(
    rf"(\d+(?:\.\d+)?)\s*%?\s*({_fiber_alternation()})\b",
    re.IGNORECASE,
)
MADE_IN_REGEX = re.compile(
    r"made\s+in\s+([a-z ]+?)(?:\n|$|[,.]|\s+\d|\s+rn|\s+ca)",
    re.IGNORECASE,
)

BRAND_EXCLUDE_PATTERNS = (
    re.compile(r"^\d+%"),
    re.compile(r"made in", re.IGNORECASE),
    re.compile(r"wash", re.IGNORECASE),
    re.compile(r"care", re.IGNORECASE),
    re.compile(rf"\b(?:{_fiber_alternation()})\b", re.IGNORECASE),
    re.compile(r"\b(?:size|small|medium|large|xl|xxl)\b", re.IGNORECASE),
    re.compile(r"^\d+$"),
    re.compile(r"import|export", re.IGNORECASE),
    re.compile(r"\brn\s*\d+", re.IGNORECASE),
    re.compile(r"\bca\s*\d+", re.IGNORECASE),
)

# Checked in order; the first keyword found decides the item type.
ITEM_TYPE_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("shirt", "tee"), "Shirt"),
    (("jean", "denim"), "Jeans"),
    (("dress",), "Dress"),
    (("sweater", "pullover"), "Sweater"),
    (("jacket",), "Jacket"),
)


@dataclass(slots=True)
class ParsedLabel:
    """Structured data recovered from a care label."""

    brand: str
    item_type: str
    made_in: str
    fibers: list[FiberEntry] = field(default_factory=list)
    raw_text: str = ""
    scan_type: str = SCAN_TYPE_CAMERA


def extract_fibers(text: str) -> list[FiberEntry]:
    """
    Find ``<percent> <fiber>`` pairs in label text.

    The first occurrence of each fiber wins and values outside (0, 100] are
    ignored. When the remaining percentages do not total 100 they are scaled to
    whole numbers that approximately do.
    """

    found: dict[str, float] = {}
    for match in FIBER_REGEX.finditer(text):
        percentage = float(match.group(1))
        name = lookup(match.group(2)).name
        if not 0 < percentage <= 100 or name in found:
            continue
        found[name] = percentage

    total = sum(found.values())
    if total > 0 and total != 100:
        logger.debug("Label percentages total %s; rescaling", total)
        found = {name: math.floor(value / total * 100 + 0.5) for name, value in found.items()}

    return [FiberEntry(name=name, percentage=value) for name, value in found.items()]


def extract_brand(lines: list[str]) -> str:
    for line in lines:
        if len(line) < 2 or len(line) > 40:
            continue
        if any(pattern.search(line) for pattern in BRAND_EXCLUDE_PATTERNS):
            continue
        return line
    return UNKNOWN_BRAND


def extract_made_in(text: str) -> str:
    match = MADE_IN_REGEX.search(text)
    if not match:
        return UNDETECTED_ORIGIN
    country = " ".join(word.capitalize() for word in match.group(1).split())
    if 2 < len(country) < 30 and not any(char.isdigit() for char in country):
        return country
    return UNDETECTED_ORIGIN


def detect_item_type(text: str) -> str:
    lowered = text.lower()
    for keywords, item_type in ITEM_TYPE_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return item_type
    return "Garment"


def parse_care_label(text: str) -> ParsedLabel:
    """Parse the raw text returned by the label scanning service."""

    lines = [line.strip() for line in text.splitlines() if line.strip()]
    return ParsedLabel(
        brand=extract_brand(lines),
        item_type=detect_item_type(text),
        made_in=extract_made_in(text),
        fibers=extract_fibers(text),
        raw_text=text,
    )
